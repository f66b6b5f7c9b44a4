class InvalidPatternError(Exception):
    """
    Exception raised when a search pattern is not a valid regular expression.

    This is a configuration error: it is raised while the filter configuration is
    being built, before any directory is listed.

    Attributes:
        pattern (str): The pattern that failed to compile.
        reason (str): The message reported by the regular expression compiler.

    Example:
        >>> error = InvalidPatternError("a(b", "missing ), unterminated subpattern at position 1")
        >>> str(error)
        "Invalid regex pattern 'a(b': missing ), unterminated subpattern at position 1"
    """

    def __init__(self, pattern: str, reason: str) -> None:
        """
        Initialize the exception with the offending pattern and the compiler's message.

        Args:
            pattern (str): The pattern that failed to compile.
            reason (str): Why compilation failed.
        """
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regex pattern '{pattern}': {reason}")
