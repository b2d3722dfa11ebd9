"""Exceptions raised while extracting and normalizing grammar notation."""

from __future__ import annotations


class GrammarNotationError(RuntimeError):
    """Base class for fatal extraction failures."""


class FetchError(GrammarNotationError):
    """Raised when the specification document cannot be downloaded."""


class UpstreamParseError(GrammarNotationError):
    """Raised when a fragment's grammar text cannot be parsed.

    Attributes
    ----------
    fragment : str
        The raw grammar text that was rejected.
    reason : str
        Parser diagnostic describing the failure.
    """

    def __init__(self, fragment: str, reason: str) -> None:
        self.fragment = fragment
        self.reason = reason
        super().__init__(f"Failed to parse grammar fragment: {reason}\n{fragment}")


class NormalizationError(GrammarNotationError):
    """Raised when an alternative contains a construct the schema cannot hold.

    Attributes
    ----------
    detail : str
        Description of the unrecognized construct.
    production : str | None
        Name of the production being normalized, once known.
    source : str | None
        Verbatim text of the offending alternative, once known.
    fragment : str | None
        Grammar fragment the production came from, once known.
    """

    def __init__(
        self,
        detail: str,
        *,
        production: str | None = None,
        source: str | None = None,
        fragment: str | None = None,
    ) -> None:
        self.detail = detail
        self.production = production
        self.source = source
        self.fragment = fragment
        super().__init__(self._format())

    def with_context(
        self, *, production: str, source: str, fragment: str
    ) -> NormalizationError:
        """Return a copy annotated with the production and alternative."""
        return NormalizationError(
            self.detail, production=production, source=source, fragment=fragment
        )

    def _format(self) -> str:
        if self.production is None:
            return self.detail
        return (
            f"{self.detail} in production '{self.production}' "
            f"(alternative: {self.source!r})"
        )


__all__ = [
    "FetchError",
    "GrammarNotationError",
    "NormalizationError",
    "UpstreamParseError",
]
