import pytest

from pkgstage.errors import ConfigurationError, MetadataError
from pkgstage.metadata import (
    DebMetadataReader,
    DebPackageHandle,
    RpmMetadataReader,
    RpmPackageHandle,
    get_reader,
)

# --- Fixtures ---

@pytest.fixture
def mock_rpm_open(mocker):
    """Fixture for a mocked rpmfile.open returning a context manager."""
    return mocker.patch("pkgstage.metadata.rpmfile.open")

@pytest.fixture
def mock_debfile(mocker):
    """Fixture for a mocked DebFile class."""
    return mocker.patch("pkgstage.metadata.DebFile")

# --- RPM ---

def test_rpm_requirements(mocker, mock_rpm_open):
    rpm = mocker.MagicMock()
    rpm.headers = {"name": b"tool", "requirename": [b"libfoo", b"/bin/sh", b"rpmlib(CompressedFileNames)"]}
    mock_rpm_open.return_value.__enter__.return_value = rpm

    handle = RpmMetadataReader().open_package("/stage/tool_1_el8.rpm")

    mock_rpm_open.assert_called_once_with("/stage/tool_1_el8.rpm")
    assert handle.requirements() == ["libfoo", "/bin/sh", "rpmlib(CompressedFileNames)"]

def test_rpm_without_requirements(mocker, mock_rpm_open):
    rpm = mocker.MagicMock()
    rpm.headers = {"name": b"tool"}
    mock_rpm_open.return_value.__enter__.return_value = rpm
    assert RpmMetadataReader().open_package("/stage/tool.rpm").requirements() == []

def test_rpm_single_requirement_value():
    handle = RpmPackageHandle("/stage/tool.rpm", {"requirename": b"libfoo"})
    assert handle.requirements() == ["libfoo"]

def test_rpm_keeps_duplicates():
    handle = RpmPackageHandle("/stage/tool.rpm", {"requirename": [b"libfoo", b"libfoo"]})
    assert handle.requirements() == ["libfoo", "libfoo"]

def test_rpm_open_failure(mock_rpm_open):
    """Test parse errors from rpmfile surface as MetadataError."""
    mock_rpm_open.side_effect = ValueError("bad lead magic")
    with pytest.raises(MetadataError) as excinfo:
        RpmMetadataReader().open_package("/stage/broken.rpm")
    assert excinfo.value.path == "/stage/broken.rpm"
    assert "bad lead magic" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ValueError)

# --- Debian ---

def test_deb_requirements(mock_debfile):
    """Test every alternative of Pre-Depends and Depends is reported by name."""
    mock_debfile.return_value.debcontrol.return_value = {
        "Package": "tool",
        "Pre-Depends": "dpkg (>= 1.15.6~)",
        "Depends": "libc6 (>= 2.34), libfoo1 | libfoo2, python3:any",
    }

    handle = DebMetadataReader().open_package("/stage/tool_1.0_amd64.deb")

    assert handle.requirements() == ["dpkg", "libc6", "libfoo1", "libfoo2", "python3"]
    mock_debfile.return_value.close.assert_called_once()

def test_deb_without_relations():
    handle = DebPackageHandle("/stage/tool.deb", {"Package": "tool"})
    assert handle.requirements() == []

def test_deb_open_failure_on_garbage(tmp_path):
    """Test a file that is not an ar archive raises MetadataError."""
    bogus = tmp_path / "bogus_1.0_amd64.deb"
    bogus.write_bytes(b"definitely not a deb")
    with pytest.raises(MetadataError) as excinfo:
        DebMetadataReader().open_package(str(bogus))
    assert excinfo.value.path == str(bogus)

def test_deb_closes_on_control_error(mock_debfile):
    mock_debfile.return_value.debcontrol.side_effect = KeyError("control.tar.gz")
    with pytest.raises(MetadataError):
        DebMetadataReader().open_package("/stage/tool.deb")
    mock_debfile.return_value.close.assert_called_once()

# --- get_reader ---

@pytest.mark.parametrize("package_format, expected", [
    ("rpm", RpmMetadataReader),
    ("deb", DebMetadataReader),
])
def test_get_reader(package_format, expected):
    assert isinstance(get_reader(package_format), expected)

def test_get_reader_unknown():
    with pytest.raises(ConfigurationError) as excinfo:
        get_reader("msi")
    assert "msi" in str(excinfo.value)
