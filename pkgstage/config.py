# Package format used when none is given on the command line.
DEFAULT_PACKAGE_FORMAT = "rpm"
# Standard file extension for each supported package format.
PACKAGE_EXTENSIONS = {
    "rpm": "rpm",
    "deb": "deb",
}

# Primary package naming convention: <project>_*_<platform>.<ext>
TOP_PACKAGE_PATTERN = "{project}_*_{platform}.{ext}"

REPO_FILE_SUFFIX = ".repo"

DEFAULT_BASE_DIR = "."
