"""Exception taxonomy for the objection handler pipeline."""

from typing import Optional


class ObjectionHandlerError(Exception):
    """Base class for all pipeline errors."""


class InvalidRequest(ObjectionHandlerError):
    """A required request field is missing or empty. No stage has run."""


class UpstreamError(ObjectionHandlerError):
    """The language-model call failed or timed out."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        provider: Optional[str] = None
    ):
        super().__init__(message)
        self.cause = cause
        self.provider = provider


class MalformedModelOutput(ObjectionHandlerError):
    """
    The model returned text that could not be parsed as the requested structure.

    Raised only inside the structured-output parser and always absorbed there.
    """

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
