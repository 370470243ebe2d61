"""
Exception taxonomy for blueprint resolution and Phase 1 generation.

Every Phase 1 failure is terminal for the invocation: nothing here is
caught and retried inside the library.
"""

from typing import Optional


class BlueprintError(Exception):
    """Base class for all blueprint errors."""
    pass


class InvalidCombinationError(BlueprintError):
    """Raised when the resolver is asked for a combination outside the legal space."""
    pass


class AmbiguousChapterTreeError(BlueprintError):
    """Raised when more than one chapter variant matches a story context."""
    pass


class UnresolvedEndStateError(BlueprintError):
    """Raised when a chapter has no end-state text for the current context."""
    pass


class BlueprintNotFoundError(BlueprintError):
    """Raised when no blueprint is registered for the requested combination."""

    def __init__(self, trope: str, tension: str, ending: str, modifier: str):
        self.trope = trope
        self.tension = tension
        self.ending = ending
        self.modifier = modifier
        super().__init__(
            f"No blueprint exists for combination: {trope} | {tension} | {ending} | {modifier}. "
            "Generation cannot proceed without a blueprint."
        )


class LLMInvocationError(BlueprintError):
    """Raised by LLM callers when the model call itself fails."""
    pass


class Phase1ValidationError(BlueprintError):
    """Base class for problems with the model's Phase 1 response."""
    pass


class JSONParseError(Phase1ValidationError):
    """The JSON parser could not read the model response."""

    def __init__(self, detail: Optional[str]):
        self.detail = detail
        super().__init__(f"Phase 1 Blueprint JSON parse failed: {detail}")


class MissingChaptersArrayError(Phase1ValidationError):
    """The parsed payload has no chapters array."""

    def __init__(self):
        super().__init__("Phase 1 Blueprint: missing chapters array")


class ChapterCountMismatchError(Phase1ValidationError):
    """The number of returned chapters differs from the blueprint."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Phase 1 Blueprint: expected {expected} chapters, got {actual}"
        )


class UnexpectedChapterNumberError(Phase1ValidationError):
    """A returned chapter number has no counterpart in the blueprint."""

    def __init__(self, chapter, message: Optional[str] = None):
        self.chapter = chapter
        super().__init__(
            message or f"Phase 1 Blueprint: unexpected chapter number {chapter}"
        )


class DuplicateChapterNumberError(UnexpectedChapterNumberError):
    """The same chapter number was returned twice."""

    def __init__(self, chapter):
        super().__init__(
            chapter,
            f"Phase 1 Blueprint: chapter number {chapter} returned more than once"
        )


class ChapterDescriptionTooShortError(Phase1ValidationError):
    """A chapter description is missing or below the minimum length."""

    def __init__(self, chapter, length: int, minimum: int):
        self.chapter = chapter
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Phase 1 Blueprint: chapter {chapter} description is too short or missing "
            f"({length} characters, minimum {minimum})"
        )
