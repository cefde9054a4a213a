import argparse
import logging
import sys
import traceback

from . import config
from .errors import PackageError
from .finder import Finder
from .models import RepositoryRecord

# --- Logging Setup ---
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def run_find(args):
    """Prints the top package and its local dependencies, top package first."""
    finder = Finder(args.basedir, package_format=args.format)
    logger.debug(f"Searching {finder.src_dir} for {args.project} on {args.platform}")
    packages = finder.find(args.project, args.platform)
    for pkg in packages:
        if args.sizes:
            print(f"{pkg.path}\t{pkg.size}")
        else:
            print(pkg.path)
    return 0


def run_repo(args):
    """Prints the descriptor file name followed by the rendered descriptor."""
    repo = RepositoryRecord(
        name=args.name,
        label=args.label,
        url=args.url,
        prefix=args.prefix,
        enabled=not args.disabled,
    )
    print(f"# {repo.target_filename()}")
    sys.stdout.write(repo.render())
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        description="Locate a staged package and its co-located dependencies.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    find_parser = subparsers.add_parser(
        "find", help="Find the top package and its local dependencies.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    find_parser.add_argument("project", help="Project name (first part of the package file name).")
    find_parser.add_argument("platform", help="Platform name (last part of the package file name).")
    find_parser.add_argument("-b", "--basedir", default=config.DEFAULT_BASE_DIR, help="Directory holding the staged packages.")
    find_parser.add_argument("-f", "--format", default=config.DEFAULT_PACKAGE_FORMAT,
                             choices=sorted(config.PACKAGE_EXTENSIONS), help="Package format.")
    find_parser.add_argument("--sizes", action="store_true", help="Print the size of each package.")
    find_parser.set_defaults(func=run_find)

    repo_parser = subparsers.add_parser(
        "repo", help="Render a repository descriptor.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    repo_parser.add_argument("-l", "--label", required=True, help="Repository label (section header and file name).")
    repo_parser.add_argument("-n", "--name", required=True, help="Repository display name.")
    repo_parser.add_argument("-u", "--url", required=True, help="Repository base URL.")
    repo_parser.add_argument("-p", "--prefix", default="", help="Optional path prefix.")
    repo_parser.add_argument("--disabled", action="store_true", help="Mark the repository as disabled.")
    repo_parser.set_defaults(func=run_repo)
    return parser


def main(argv=None):
    """Parses arguments and runs the selected command."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled.")
    else:
        logging.getLogger().setLevel(logging.INFO)

    try:
        return args.func(args)
    except PackageError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Process interrupted by user.")
        return 1
    except Exception as e:
        logger.error(f"An unexpected critical error occurred: {e}")
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
