"""
Readers for the requirement lists declared inside package files.

Only bare requirement names are exposed. Version constraints, architecture
qualifiers and dependency flags are dropped because local resolution
matches names against file names and nothing else.
"""
import logging

import rpmfile
from debian.deb822 import PkgRelation
from debian.debfile import DebFile

from .errors import ConfigurationError, MetadataError

logger = logging.getLogger(__name__)


class MetadataReader:
    """Opens a package file and returns a handle with a requirements() method."""

    def open_package(self, path: str):
        raise NotImplementedError


class RpmPackageHandle:
    def __init__(self, path: str, headers: dict):
        self.path = path
        self._headers = headers

    def requirements(self) -> list[str]:
        names = self._headers.get("requirename") or []
        if isinstance(names, (bytes, str)):
            names = [names]
        return [n.decode("utf-8", "replace") if isinstance(n, bytes) else str(n) for n in names]


class RpmMetadataReader(MetadataReader):
    """Reads RPM headers with rpmfile."""

    def open_package(self, path: str) -> RpmPackageHandle:
        try:
            with rpmfile.open(path) as rpm:
                headers = dict(rpm.headers)
        except Exception as e:
            raise MetadataError(path, str(e)) from e
        logger.debug(f"Read RPM header from {path}")
        return RpmPackageHandle(path, headers)


class DebPackageHandle:
    RELATION_FIELDS = ("Pre-Depends", "Depends")

    def __init__(self, path: str, control):
        self.path = path
        self._control = control

    def requirements(self) -> list[str]:
        """Every alternative of every relation counts as a requirement name."""
        names = []
        for field in self.RELATION_FIELDS:
            raw = self._control.get(field, "")
            if not raw.strip():
                continue
            for or_group in PkgRelation.parse_relations(raw):
                names.extend(rel["name"] for rel in or_group if rel.get("name"))
        return names


class DebMetadataReader(MetadataReader):
    """Reads the control file of a .deb with python-debian."""

    def open_package(self, path: str) -> DebPackageHandle:
        try:
            deb = DebFile(path)
            try:
                control = deb.debcontrol()
            finally:
                deb.close()
        except Exception as e:
            raise MetadataError(path, str(e)) from e
        logger.debug(f"Read control file from {path}")
        return DebPackageHandle(path, control)


READERS = {
    "rpm": RpmMetadataReader,
    "deb": DebMetadataReader,
}


def get_reader(package_format: str) -> MetadataReader:
    try:
        return READERS[package_format]()
    except KeyError:
        raise ConfigurationError(
            f"unsupported package format '{package_format}' (expected one of: {', '.join(sorted(READERS))})"
        ) from None
