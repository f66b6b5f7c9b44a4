from abc import ABC, abstractmethod
from typing import Sequence, Union

from superls.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for pattern-based exclusion rules.

    Exclusion rules are an optional extra skip condition for the entry filter: on top of
    the ignored directory names and the extension allow/deny lists, an entry is skipped
    when its path relative to the traversal root matches the rules.

    Implementations must decide whether a relative path is excluded. Loading rules from
    files and adding individual rules are optional capabilities.

    Example:
        >>> from superls.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule('*.pyc')
        >>> rules.exclude('pkg/module.pyc')
        True
        >>> rules.exclude('pkg/module.py')
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): Path relative to the traversal root, using forward slashes.
                Directories may be passed with a trailing slash.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add, e.g. a gitignore pattern like "*.pyc".

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
