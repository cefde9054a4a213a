from dataclasses import dataclass
import logging
import os

from .config import REPO_FILE_SUFFIX
from .errors import ConfigurationError, FileAccessError

logger = logging.getLogger(__name__)


def probe_size(path: str) -> int:
    """Returns the size in bytes of the file at path. Zero is a legal result."""
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise FileAccessError(path, f"failed to get package file size for {path} ({e})") from e


@dataclass(frozen=True)
class Package:
    """A package file on disk. Size is read once, when the instance is built."""
    path: str
    size: int

    @classmethod
    def from_path(cls, path: str) -> "Package":
        size = probe_size(path)
        logger.debug(f"Probed {path}: {size} bytes")
        return cls(path=path, size=size)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def name_starts_with(self, prefix: str) -> bool:
        return self.name.startswith(prefix)


class PackageCollection(list):
    """Ordered packages; when a top package is present it comes first."""

    def zero_size(self) -> list[str]:
        """Base names of the packages that are empty."""
        return [pkg.name for pkg in self if pkg.size == 0]

    def paths(self) -> list[str]:
        return [pkg.path for pkg in self]

    def names(self) -> list[str]:
        return [pkg.name for pkg in self]


@dataclass
class RepositoryRecord:
    """Describes where a package manager finds a repository."""
    name: str
    label: str # section header and descriptor file name
    url: str
    prefix: str = "" # empty means no prefix line
    enabled: bool = True

    def __post_init__(self):
        if not self.label:
            raise ConfigurationError(f"repository {self.name!r} has an empty label")

    def target_filename(self) -> str:
        return f"{self.label}{REPO_FILE_SUFFIX}"

    def render(self) -> str:
        tokens = [
            f"[{self.label}]",
            f"name={self.name}",
            f"baseurl={self.url}",
            f"enabled={'true' if self.enabled else 'false'}",
        ]
        if self.prefix:
            tokens.append(f"prefix={self.prefix}")
        return "\n".join(tokens) + "\n"


class Repos(list):
    """A collection of repository records."""

    def render(self) -> str:
        return "\n".join(repo.render() for repo in self)

    def filenames(self) -> list[str]:
        return [repo.target_filename() for repo in self]
