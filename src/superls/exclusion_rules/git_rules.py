"""Exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from superls.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules matched the way Git matches .gitignore patterns.

    Patterns may come from rules files (``-x/--exclude-from``) or be added one at a
    time (``-i/--ignore``). They are kept in the order they were given, so a later
    negation (``!keep.log``) can re-include what an earlier pattern excluded.

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("build/")
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("src/main.py")
        False

    Note:
        Paths passed to exclude() must use forward slashes, even on Windows.
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the rules, optionally loading patterns from files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._patterns: List[GitWildMatchPattern] = []
        self.spec = PathSpec(self._patterns)

        if rules_files is not None:
            self.load_rules(rules_files)

    @property
    def has_rules(self) -> bool:
        """True once at least one pattern has been loaded or added."""
        return bool(self._patterns)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and append .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                lines = f.read().splitlines()

            self._extend(PathSpec.from_lines(GitWildMatchPattern, lines).patterns)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern, e.g. ``"*.pyc"``, ``"node_modules/"`` or ``"!keep.txt"``."""
        self._extend([GitWildMatchPattern(rule)])

    def _extend(self, patterns: Sequence[GitWildMatchPattern]) -> None:
        self._patterns.extend(patterns)
        # PathSpec may copy the sequence it is given, so rebuild it after every change
        self.spec = PathSpec(self._patterns)
