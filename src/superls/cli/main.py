"""Command-line interface for superls.

This module provides the command-line entry point, which prints the filtered tree of a
directory with icons and colors and, optionally, the first matching line of each file.
It handles argument parsing, output setup, and signal management for graceful
interruption handling.

Key Features:
    - Directory tree listing with icons and colors
    - Extension allow/deny lists and ignored directory names
    - Pruning of directories whose contents are all filtered out
    - First-match search within listed files
    - Gitignore-style exclusion patterns
    - Signal handling (SIGPIPE on Unix systems, SIGINT)
    - Output redirection and file writing

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error, including an invalid --grep pattern
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # List a directory, skipping logs
    $ superls /path/to/dir -e log

    # Display version information
    $ superls --version
"""

import sys
from collections.abc import Mapping
from typing import Optional

from rich.console import Console

from superls.cli.argparser import create_parser, validate_args
from superls.cli.safe_writer import SafeWriter
from superls.cli.interrupts import interrupts
from superls.entry_formatter import EntryFormatter
from superls.exceptions import InvalidPatternError
from superls.exclusion_rules.git_rules import GitIgnoreExclusionRules
from superls.filtering.filter_config import FilterConfig
from superls.traversal.tree_lister import TreeLister


def format_counts(counts: Mapping[str, int]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing the directory, file, symlink and match counts.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    return "\n".join(
        [
            f"Directories: {counts['directories']}",
            f"Files: {counts['files']}",
            f"Symlinks: {counts['symlinks']}",
            f"Matches: {counts['matches']}",
        ]
    )


def detect_color_system(file: SafeWriter, color: str) -> Optional[str]:
    """Choose the color system the listing is rendered with.

    Args:
        file: Stream the listing is written to.
        color: One of "auto", "always" or "never".

    Returns:
        A rich color system name, or None for plain text. In "auto" mode colors are only
        used when the stream is a terminal and NO_COLOR is not set.
    """
    if color == "never":
        return None
    if color == "always":
        return Console(file=file, force_terminal=True).color_system or "standard"
    console = Console(file=file)
    return None if console.no_color else console.color_system


def main() -> None:
    """Main entry point for the superls command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error, including an invalid --grep pattern
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    interrupts.install()

    try:
        # Populated in command-line order while arguments are parsed
        exclusion_rules = GitIgnoreExclusionRules()

        parser = create_parser(exclusion_rules)
        args = parser.parse_args()

        try:
            validate_args(args)
            config = FilterConfig.create(
                ignored_dirs=args.ignore_dirs,
                ignored_extensions=args.ignore_extensions,
                desired_extensions=args.only_extensions,
                pattern=args.grep,
                exclusion_rules=exclusion_rules if exclusion_rules.has_rules else None,
            )
        except (InvalidPatternError, ValueError) as e:
            # Exits with status 2 before anything is listed
            parser.error(str(e))

        TreeLister.validate_root(args.directory)

        output_file = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            formatter = EntryFormatter(detect_color_system(safe_writer, args.color))
            lister = TreeLister(config, follow_symlinks=args.follow_symlinks, formatter=formatter)
            try:
                for line in lister.stream_lines(args.directory):
                    safe_writer.write(line + "\n")

                if args.summary:
                    count_output_str = format_counts(
                        {
                            "directories": lister.directory_count,
                            "files": lister.file_count,
                            "symlinks": lister.symlink_count,
                            "matches": lister.match_count,
                        }
                    )
                    if args.summary == "stdout":
                        safe_writer.write("\n" + count_output_str + "\n")
                    else:
                        print(count_output_str, file=sys.stderr)

            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = interrupts.exit_code
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
