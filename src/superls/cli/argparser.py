"""Command-line argument parsing for superls.

This module defines the command-line interface for superls,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from superls import __version__
from superls.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling exclusion rules.

    The returned action updates the provided exclusion rules object as arguments are
    processed, so patterns and rules files keep the order they have on the command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to update exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-x", "--exclude-from"):
                if isinstance(values, (str, os.PathLike)):
                    exclusion_rules.load_rules(values)
                else:
                    exclusion_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            # Also record the raw values on the namespace
            if getattr(namespace, self.dest, None) is None:
                setattr(namespace, self.dest, [])
            getattr(namespace, self.dest).append(values)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with superls's options.
    """
    description = """
    superls: Outputs the structure of a directory with icons and offers grep functionality.

    The tree is printed depth-first, each directory before its contents, children in
    name order. Directories are skipped by name, files by extension, and a directory
    whose contents are all skipped (or that is empty) is left out entirely.

    Extensions are given without the leading dot and compared case-sensitively. An
    extension in both --ignore-extensions and --only-extensions is ignored.

    With --grep, the first line of each listed file that matches the regular expression
    is printed after the file as PATH:LINE: TEXT. At most one line is reported per file.
    """

    epilog = """
    Examples:
      # List a directory
      superls /path/to/project

      # Leave out logs and compiled files
      superls /path/to/project -e log pyc

      # Leave out directories by name
      superls /path/to/project -d .git node_modules __pycache__

      # Only show Python and Markdown files
      superls /path/to/project -o py md

      # Show the first TODO in every Python file
      superls /path/to/project -o py -g "TODO|FIXME"

      # Use gitignore-style patterns and rules files
      superls /path/to/project -x .gitignore -i "build/" -i "!build/keep.txt"

      # Follow symbolic links (loops are detected)
      superls -L /path/to/project

      # Write the listing to a file and print counts to stderr
      superls /path/to/project -O listing.txt -s stderr

    Options taking several values consume every following argument, so give the
    directory first or end the values with `--`.
    """

    parser = argparse.ArgumentParser(
        prog="superls",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"superls {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "directory",
        metavar="DIRECTORY",
        help="The directory to parse.",
    )
    parser.add_argument(
        "-e",
        "--ignore-extensions",
        metavar="EXT",
        nargs="+",
        action="extend",
        default=[],
        help="File extensions to ignore (can be specified multiple times).",
    )
    parser.add_argument(
        "-d",
        "--ignore-dirs",
        metavar="NAME",
        nargs="+",
        action="extend",
        default=[],
        help="Directory names to ignore, matched against the base name (can be specified multiple times).",
    )
    parser.add_argument(
        "-o",
        "--only-extensions",
        metavar="EXT",
        nargs="+",
        action="extend",
        default=None,
        help="Only display files with these extensions (can be specified multiple times).",
    )
    parser.add_argument(
        "-g",
        "--grep",
        metavar="PATTERN",
        help="Regular expression to search for within files. Only the first matching line of a file is shown.",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Gitignore-style pattern to exclude files and directories, matched against paths relative "
            "to DIRECTORY. Can be specified multiple times; patterns and -x/--exclude-from files are "
            "applied in the order they appear."
        ),
    )
    parser.add_argument(
        "-x",
        "--exclude-from",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a gitignore-style rules file (can be specified multiple times).",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help=(
            "Follow symbolic links during traversal. Links that would lead back into a directory "
            "being listed are shown but not entered. By default, symlinks are shown without following."
        ),
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="When to color the output (default: auto). NO_COLOR is honoured in auto mode.",
    )
    parser.add_argument(
        "-O",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print a summary of listed entries and matches. Valid destinations: stderr, stdout.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    # An extension is the text after the last dot, so a value containing a dot never matches
    for option, extensions in (
        ("-e/--ignore-extensions", args.ignore_extensions),
        ("-o/--only-extensions", args.only_extensions or []),
    ):
        for extension in extensions:
            if "." in extension:
                raise ValueError(
                    f"{option} expects extensions without dots, e.g. 'log' rather than '.log' (got '{extension}')"
                )
