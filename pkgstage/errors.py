"""Exceptions raised while locating and validating staged packages."""


class PackageError(Exception):
    """Base class for every error raised by pkgstage."""


class ConfigurationError(PackageError):
    """An unknown package format or an invalid repository record."""


class GlobError(PackageError):
    """The glob mechanism itself failed for a pattern."""

    def __init__(self, pattern, reason=""):
        self.pattern = pattern
        message = f"failed to glob for packages ({pattern})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PackageNotFoundError(PackageError):
    """No file matched the top package naming convention."""

    def __init__(self, pattern):
        self.pattern = pattern
        super().__init__(f"no top package found to install ({pattern})")


class ZeroSizeError(PackageError):
    """The top package exists but is empty."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"{path}: package has zero size")


class MetadataError(PackageError):
    """Package metadata could not be opened or parsed."""

    def __init__(self, path, reason=""):
        self.path = path
        message = f"cannot read package metadata from {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class FileAccessError(PackageError):
    """A file could not be stat-ed or a directory could not be listed."""

    def __init__(self, path, message=None):
        self.path = path
        super().__init__(message or f"cannot access {path}")


class DependencySizeError(FileAccessError):
    def __init__(self, path):
        super().__init__(path, f"cannot get file size for dependency {path}")


class ZeroSizeDependenciesError(PackageError):
    """One or more local dependencies are empty; lists all of them."""

    def __init__(self, path, files):
        self.path = path
        self.files = list(files)
        super().__init__(
            f"{len(self.files)} package dependencies in {path} have zero size:\n"
            + "\n".join(self.files)
        )
