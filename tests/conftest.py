import os

import pytest

from pkgstage.errors import MetadataError


class FakeHandle:
    def __init__(self, names):
        self._names = names

    def requirements(self):
        return list(self._names)


class FakeReader:
    """Metadata reader double: maps package file names to requirement names."""

    def __init__(self, requirements=None, fail=False):
        self.requirements = requirements or {}
        self.fail = fail
        self.opened = []

    def open_package(self, path):
        self.opened.append(path)
        if self.fail:
            raise MetadataError(path, "not a package")
        return FakeHandle(self.requirements.get(os.path.basename(path), []))


@pytest.fixture
def make_file(tmp_path):
    """Creates a file of the given size below tmp_path and returns its path as str."""
    def _make(name, size=16):
        path = tmp_path / name
        path.write_bytes(b"x" * size)
        return str(path)
    return _make


@pytest.fixture
def fake_reader():
    return FakeReader()
