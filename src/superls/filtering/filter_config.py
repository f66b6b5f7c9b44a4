"""Immutable configuration for entry filtering and in-file search."""

import re
from typing import AbstractSet, FrozenSet, Iterable, Optional, Pattern

from superls.exceptions import InvalidPatternError
from superls.exclusion_rules.base_rules import BaseExclusionRules


class FilterConfig:
    """Filtering rules shared read-only by every step of a traversal.

    The configuration is built once, before traversal starts, and never changes
    afterwards. All attributes are exposed as read-only properties.

    Attributes:
        ignored_dirs (FrozenSet[str]): Directory names to skip (exact base-name match).
        ignored_extensions (FrozenSet[str]): Extensions (without the dot) always skipped.
        desired_extensions (Optional[FrozenSet[str]]): If set, the only extensions listed.
            None means every extension is allowed.
        pattern (Optional[Pattern[str]]): Compiled search pattern, or None to disable search.
        exclusion_rules (Optional[BaseExclusionRules]): Extra path-pattern exclusions.

    Example:
        >>> config = FilterConfig.create(ignored_extensions=["log"], pattern="TODO")
        >>> sorted(config.ignored_extensions)
        ['log']
        >>> config.desired_extensions is None
        True
        >>> config.pattern.pattern
        'TODO'
    """

    def __init__(
        self,
        ignored_dirs: AbstractSet[str] = frozenset(),
        ignored_extensions: AbstractSet[str] = frozenset(),
        desired_extensions: Optional[AbstractSet[str]] = None,
        pattern: Optional[Pattern[str]] = None,
        exclusion_rules: Optional[BaseExclusionRules] = None,
    ) -> None:
        self._ignored_dirs = frozenset(ignored_dirs)
        self._ignored_extensions = frozenset(ignored_extensions)
        self._desired_extensions = frozenset(desired_extensions) if desired_extensions is not None else None
        self._pattern = pattern
        self._exclusion_rules = exclusion_rules

    @classmethod
    def create(
        cls,
        ignored_dirs: Optional[Iterable[str]] = None,
        ignored_extensions: Optional[Iterable[str]] = None,
        desired_extensions: Optional[Iterable[str]] = None,
        pattern: Optional[str] = None,
        exclusion_rules: Optional[BaseExclusionRules] = None,
    ) -> "FilterConfig":
        """Build a configuration from raw option values.

        Args:
            ignored_dirs: Directory names to skip. None means none.
            ignored_extensions: Extensions to skip. None means none.
            desired_extensions: Extensions to restrict files to. None means no restriction;
                an empty iterable means no file is listed.
            pattern: Regular expression to search files for. None disables search.
            exclusion_rules: Optional path-pattern exclusions.

        Returns:
            The immutable configuration.

        Raises:
            InvalidPatternError: If the pattern is not a valid regular expression.
        """
        compiled = None
        if pattern is not None:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise InvalidPatternError(pattern, str(e)) from e

        return cls(
            ignored_dirs=frozenset(ignored_dirs or ()),
            ignored_extensions=frozenset(ignored_extensions or ()),
            desired_extensions=frozenset(desired_extensions) if desired_extensions is not None else None,
            pattern=compiled,
            exclusion_rules=exclusion_rules,
        )

    @property
    def ignored_dirs(self) -> FrozenSet[str]:
        return self._ignored_dirs

    @property
    def ignored_extensions(self) -> FrozenSet[str]:
        return self._ignored_extensions

    @property
    def desired_extensions(self) -> Optional[FrozenSet[str]]:
        return self._desired_extensions

    @property
    def pattern(self) -> Optional[Pattern[str]]:
        return self._pattern

    @property
    def exclusion_rules(self) -> Optional[BaseExclusionRules]:
        return self._exclusion_rules
