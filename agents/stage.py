"""Single model-call pipeline stage."""

import logging
import time
from typing import Any, Callable, Generic, Optional, TypeVar

from llm.base_client import BaseLLMClient, CompletionOptions
from llm.structured_output import ParseResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StageOutput(Generic[T]):
    """What a stage produced and how it got there."""

    __slots__ = ("stage", "value", "fallback_used", "elapsed_ms")

    def __init__(self, stage: str, value: T, fallback_used: bool, elapsed_ms: float):
        self.stage = stage
        self.value = value
        self.fallback_used = fallback_used
        self.elapsed_ms = elapsed_ms


class LLMStage(Generic[T]):
    """
    One subagent: a prompt template, sampling parameters and an output parser.

    The analyzer, generator and assessor are all instances of this class and
    differ only in the three collaborators passed in. The prompt builder
    receives the keyword arguments given to ``run``; the parser turns raw
    model text into a ``ParseResult``.

    ``UpstreamError`` from the client is never caught here. ``fallback``, when
    given, produces the value a caller may substitute if the call itself fails.
    """

    def __init__(
        self,
        name: str,
        llm_client: BaseLLMClient,
        prompt_builder: Callable[..., str],
        options: CompletionOptions,
        parser: Callable[[str], ParseResult[T]],
        fallback: Optional[Callable[[], T]] = None
    ):
        self.name = name
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.options = options
        self.parser = parser
        self.fallback = fallback

    @property
    def model(self) -> str:
        return self.options.model or self.llm_client.get_model_name()

    def build_prompt(self, **inputs: Any) -> str:
        return self.prompt_builder(**inputs)

    def run(self, **inputs: Any) -> StageOutput[T]:
        """
        Build the prompt, call the model and parse the result.

        Raises:
            UpstreamError: If the model call fails or times out
        """
        prompt = self.build_prompt(**inputs)
        started = time.perf_counter()

        text = self.llm_client.complete(prompt, self.options)
        parsed = self.parser(text)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{self.name}: completed in {elapsed_ms:.0f}ms "
            f"(model={self.model}, fallback={parsed.fallback_used})"
        )
        return StageOutput(self.name, parsed.value, parsed.fallback_used, elapsed_ms)

    def __repr__(self) -> str:
        return f"LLMStage(name={self.name!r}, model={self.model!r})"
