"""Exception hierarchy for wikidoc.

Malformed markup never raises; these only signal caller mistakes.
"""


class WikidocError(Exception):
    """Base exception for all wikidoc errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message


class InvalidOptionsError(WikidocError, ValueError):
    """Parse options failed validation."""

    pass


class InvalidMarkupError(WikidocError, TypeError):
    """Markup argument is not a string."""

    pass
