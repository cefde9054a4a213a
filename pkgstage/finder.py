import glob
import logging
import os
import re

from . import config
from .errors import (
    ConfigurationError,
    DependencySizeError,
    FileAccessError,
    GlobError,
    PackageNotFoundError,
    ZeroSizeDependenciesError,
    ZeroSizeError,
)
from .metadata import MetadataReader, get_reader
from .models import Package, PackageCollection, probe_size

logger = logging.getLogger(__name__)


def list_local_files(directory: str, filenames) -> list[str]:
    """
    Returns the entries of directory whose names appear in filenames.
    Subdirectories never match. Results follow the sorted listing order.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise FileAccessError(directory, f"cannot list directory {directory} ({e})") from e

    wanted = frozenset(filenames)
    found = []
    for entry in entries:
        if entry.name in wanted and not entry.is_dir():
            found.append(entry.name)
    return found


def resolve_local(package_path: str, reader: MetadataReader) -> PackageCollection:
    """
    Finds only those requirements of the package that sit as files in the
    same directory as the package. Requirements that are not present are
    skipped; they are expected to come from the target system.
    Zero-size dependencies are returned as-is.
    """
    requirements = reader.open_package(package_path).requirements()
    logger.debug(f"{package_path} declares {len(requirements)} requirements")

    package_dir = os.path.dirname(package_path)
    local_deps = PackageCollection()
    for dep in list_local_files(package_dir or os.curdir, requirements):
        dep_path = os.path.join(package_dir, dep)
        try:
            dep_size = probe_size(dep_path)
        except FileAccessError as e:
            raise DependencySizeError(dep_path) from e
        local_deps.append(Package(path=dep_path, size=dep_size))

    logger.debug(f"Found {len(local_deps)} local dependencies for {package_path}")
    return local_deps


class Finder:
    """Locates the top package and its local dependencies below a base directory."""

    def __init__(self, basedir: str, package_format: str = config.DEFAULT_PACKAGE_FORMAT,
                 reader: MetadataReader = None):
        if package_format not in config.PACKAGE_EXTENSIONS:
            raise ConfigurationError(f"unsupported package format '{package_format}'")
        self._basedir = basedir
        self._package_format = package_format
        self._reader = reader if reader is not None else get_reader(package_format)

    @property
    def src_dir(self) -> str:
        return self._basedir

    @property
    def package_format(self) -> str:
        return self._package_format

    def _find_top_package(self, glob_func, project: str, platform: str) -> str:
        fname = config.TOP_PACKAGE_PATTERN.format(
            project=project,
            platform=platform,
            ext=config.PACKAGE_EXTENSIONS[self._package_format],
        )
        pattern = os.path.join(glob.escape(self._basedir), fname)
        try:
            matches = glob_func(pattern)
        except (OSError, re.error) as e:
            raise GlobError(pattern, str(e)) from e

        if not matches:
            raise PackageNotFoundError(pattern)
        matches = sorted(matches)
        if len(matches) > 1:
            logger.warning(f"{len(matches)} top packages match {pattern}, using {matches[0]}")
        return matches[0]

    def find(self, project: str, platform: str) -> PackageCollection:
        """Returns the top package followed by its local dependencies."""
        path = self._find_top_package(glob.glob, project, platform)
        top_package = Package.from_path(path)
        if top_package.size == 0:
            raise ZeroSizeError(path)

        deps = resolve_local(path, self._reader)

        # Every dependency must be non-empty, report all offenders at once
        empty_deps = deps.zero_size()
        if empty_deps:
            raise ZeroSizeDependenciesError(path, empty_deps)

        logger.info(f"Found top package {top_package.name} with {len(deps)} local dependencies")
        return PackageCollection([top_package, *deps])
