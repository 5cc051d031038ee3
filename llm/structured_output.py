"""Structured-output parsing for model responses that were asked to be JSON."""

import copy
import json
import logging
from typing import Any, Dict, Generic, Type, TypeVar

from pydantic import BaseModel, ValidationError

from errors import MalformedModelOutput

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` or ```json fence if the model added one."""
    content = text.strip()
    if content.startswith("```"):
        content = content.split("```")[1]
        if content[:4].lower() == "json":
            content = content[4:]
        content = content.strip()
    return content


def _reject_constant(name: str):
    # json.loads accepts NaN and Infinity; strict JSON does not
    raise MalformedModelOutput(f"Non-standard JSON constant: {name}")


def decode_json(text: str) -> Any:
    """
    Strictly decode model output as JSON.

    Raises:
        MalformedModelOutput: If the text is not valid JSON
    """
    if not isinstance(text, str):
        raise MalformedModelOutput(f"Expected text, got {type(text).__name__}")

    try:
        return json.loads(_strip_code_fence(text), parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedModelOutput(f"Invalid JSON: {e}", raw_text=text) from e


def parse_json(text: str, default: Any) -> Any:
    """
    Decode ``text`` as JSON, returning a fresh copy of ``default`` on failure.

    The failure is logged, never raised.
    """
    try:
        return decode_json(text)
    except MalformedModelOutput as e:
        logger.warning(f"Structured output fallback used: {e}")
        return copy.deepcopy(default)


class ParseResult(Generic[T]):
    """Parsed value plus whether the documented default was substituted."""

    __slots__ = ("value", "fallback_used")

    def __init__(self, value: T, fallback_used: bool):
        self.value = value
        self.fallback_used = fallback_used

    def __repr__(self) -> str:
        return f"ParseResult(value={self.value!r}, fallback_used={self.fallback_used})"


class StructuredOutputParser(Generic[T]):
    """
    Parse model text into a pydantic schema with an all-or-nothing default.

    A response that is not JSON, is not an object, or does not validate
    against the schema is replaced by the whole default. Fields are never
    merged from a partially valid response.
    """

    def __init__(self, schema: Type[T], default: Dict[str, Any], label: str = ""):
        """
        Initialize parser.

        Args:
            schema: Pydantic model the response must satisfy
            default: Payload used when parsing fails, validated eagerly
            label: Name used in fallback log lines
        """
        self.schema = schema
        self.default = copy.deepcopy(default)
        self.label = label or schema.__name__
        # Fail at construction if the default itself is not a valid payload
        schema.model_validate(self.default)

    def default_value(self) -> T:
        """Return a fresh instance of the default payload."""
        return self.schema.model_validate(copy.deepcopy(self.default))

    def parse(self, text: str) -> ParseResult[T]:
        """Parse text, substituting the default on any failure."""
        try:
            decoded = decode_json(text)
            if not isinstance(decoded, dict):
                raise MalformedModelOutput(
                    f"Expected a JSON object, got {type(decoded).__name__}",
                    raw_text=text
                )
            try:
                value = self.schema.model_validate(decoded)
            except ValidationError as e:
                raise MalformedModelOutput(
                    f"Schema validation failed: {e.error_count()} error(s)",
                    raw_text=text
                ) from e
        except MalformedModelOutput as e:
            logger.warning(f"{self.label}: structured output fallback used ({e})")
            return ParseResult(self.default_value(), fallback_used=True)

        return ParseResult(value, fallback_used=False)
