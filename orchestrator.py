"""Pipeline orchestrator for the objection handler."""

import logging
import time
from datetime import datetime, timezone
from typing import Optional, List

from config.settings import Settings
from errors import InvalidRequest, UpstreamError
from schemas.context import Analysis
from schemas.responses import (
    PipelineResult,
    PipelineState,
    QualityAssessment,
    ResponseMetadata,
)

# LLM components
from llm.factory import create_llm_client, light_model_for, LLMProvider
from llm.base_client import BaseLLMClient

# Memory components
from memory.context_manager import ConversationContextManager
from memory.models import HistoryItem

# Subagents
from agents.stage import LLMStage, StageOutput
from agents.analyzer import build_analyzer
from agents.generator import build_generator
from agents.assessor import build_assessor

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "I understand your point. Let me think about this and provide you with a "
    "thoughtful response that addresses your concerns."
)
FAILURE_MESSAGE = "Failed to process conversation"
CONTEXT_MANAGER_NAME = "ContextManager"


class ObjectionHandlerOrchestrator:
    """
    Runs analyze, generate, assess and record for one utterance at a time.

    Analyzer and generator failures end the run with the static fallback
    reply. Assessor failures degrade to the default assessment. Parse
    failures never leave a stage.
    """

    BACKOFF_BASE = 1.5
    BACKOFF_MAX = 10.0

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm_client: Optional[BaseLLMClient] = None,
        context_manager: Optional[ConversationContextManager] = None
    ):
        """
        Initialize orchestrator.

        Args:
            settings: Application settings
            llm_client: Prebuilt client; created from settings when omitted
            context_manager: Shared history; a fresh one is created when omitted
        """
        self.settings = settings or Settings()

        self.llm_client = llm_client or self._init_llm_client()
        self.context_manager = context_manager or ConversationContextManager(
            capacity=self.settings.history_capacity
        )

        self._init_stages()

    def _init_llm_client(self) -> BaseLLMClient:
        """Initialize LLM client based on settings."""
        provider = LLMProvider(self.settings.llm_provider)
        client = create_llm_client(
            provider=provider,
            api_key=self.settings.get_llm_api_key(),
            model=self.settings.llm_model,
            timeout=self.settings.request_timeout
        )
        logger.info(
            f"LLM client initialized: {client.get_provider_name()} "
            f"({client.get_model_name()})"
        )
        return client

    def _init_stages(self):
        """Build the three model-backed subagents."""
        assessor_model = self.settings.assessor_model
        if assessor_model is None and self.settings.llm_model is None:
            try:
                provider = LLMProvider(self.llm_client.get_provider_name())
                assessor_model = light_model_for(provider)
            except ValueError:
                # Unknown provider (e.g. a test double): use its default model
                assessor_model = None

        self.analyzer: LLMStage[Analysis] = build_analyzer(self.llm_client)
        self.generator: LLMStage[str] = build_generator(self.llm_client)
        self.assessor: LLMStage[QualityAssessment] = build_assessor(
            self.llm_client, model=assessor_model
        )

    @property
    def subagents(self) -> List[str]:
        """Stage names in execution order."""
        return [
            self.analyzer.name,
            self.generator.name,
            self.assessor.name,
            CONTEXT_MANAGER_NAME,
        ]

    def process(
        self,
        conversation_input: Optional[str],
        conversation_strategy: Optional[str]
    ) -> PipelineResult:
        """
        Process one utterance end-to-end.

        Args:
            conversation_input: Transcribed utterance
            conversation_strategy: Free-text steering for the reply

        Returns:
            A completed PipelineResult, or a failed one carrying the
            fallback reply

        Raises:
            InvalidRequest: If either input is missing or blank
        """
        self._validate(conversation_input, conversation_strategy)

        started = time.perf_counter()
        state = PipelineState.RECEIVED
        fallbacks: List[str] = []
        logger.info(f"Processing conversation input ({len(conversation_input)} chars)")

        try:
            state = self._transition(state, PipelineState.ANALYZING)
            analysis_out = self._run_stage(
                self.analyzer, conversation_input=conversation_input
            )
            self._note_fallback(analysis_out, fallbacks)
            analysis = analysis_out.value

            state = self._transition(state, PipelineState.GENERATING)
            recent_context = self.context_manager.recent_window(
                self.settings.context_window
            )
            response = self._run_stage(
                self.generator,
                conversation_input=conversation_input,
                conversation_strategy=conversation_strategy,
                analysis=analysis,
                recent_context=recent_context
            ).value

            state = self._transition(state, PipelineState.ASSESSING)
            quality_out = self._run_advisory_stage(
                self.assessor,
                conversation_input=conversation_input,
                reply=response,
                analysis=analysis
            )
            self._note_fallback(quality_out, fallbacks)
            quality = quality_out.value

            state = self._transition(state, PipelineState.RECORDING)
            item = self.context_manager.record(
                conversation_input, response, analysis, quality
            )

        except UpstreamError as e:
            logger.error(f"Pipeline failed while {state.value}: {e}")
            return self._failed(e)

        except Exception as e:
            logger.exception(f"Unexpected error while {state.value}")
            return self._failed(e)

        state = self._transition(state, PipelineState.COMPLETED)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if fallbacks:
            logger.warning(f"Completed with default output from: {', '.join(fallbacks)}")

        return PipelineResult(
            state=state,
            response=response,
            analysis=analysis,
            quality=quality,
            metadata=self._build_metadata(item, elapsed_ms, fallbacks)
        )

    def get_recent_history(self, limit: Optional[int] = None) -> List[HistoryItem]:
        """Get the most recent turns, oldest first."""
        if limit is None:
            limit = self.settings.context_window
        return self.context_manager.recent_window(limit)

    def shutdown(self):
        """Release process-lifetime state."""
        self.context_manager.clear()
        logger.info("Conversation history cleared")

    def _validate(
        self,
        conversation_input: Optional[str],
        conversation_strategy: Optional[str]
    ):
        for value in (conversation_input, conversation_strategy):
            if not isinstance(value, str) or not value.strip():
                raise InvalidRequest(
                    "Missing required parameters: conversationInput and conversationStrategy"
                )

    def _transition(self, current: PipelineState, new: PipelineState) -> PipelineState:
        logger.debug(f"Pipeline state: {current.value} -> {new.value}")
        return new

    def _run_stage(self, stage: LLMStage, **inputs) -> StageOutput:
        """Run a stage, retrying its model call up to ``upstream_retries`` times."""
        retries = self.settings.upstream_retries

        for attempt in range(retries + 1):
            try:
                return stage.run(**inputs)
            except UpstreamError as e:
                if attempt >= retries:
                    raise
                backoff = min(self.BACKOFF_BASE ** (attempt + 1), self.BACKOFF_MAX)
                logger.warning(
                    f"{stage.name}: upstream error, retry in {backoff:.1f}s "
                    f"({attempt + 1}/{retries}): {e}"
                )
                time.sleep(backoff)

    def _run_advisory_stage(self, stage: LLMStage, **inputs) -> StageOutput:
        """Run a stage whose failure degrades to its default instead of failing the run."""
        try:
            return self._run_stage(stage, **inputs)
        except UpstreamError as e:
            if stage.fallback is None:
                raise
            logger.warning(f"{stage.name}: upstream error, using default output: {e}")
            return StageOutput(stage.name, stage.fallback(), True, 0.0)

    def _note_fallback(self, output: StageOutput, fallbacks: List[str]):
        if output.fallback_used:
            fallbacks.append(output.stage)

    def _build_metadata(
        self,
        item: HistoryItem,
        elapsed_ms: float,
        fallbacks: List[str]
    ) -> ResponseMetadata:
        return ResponseMetadata(
            model=self.generator.model,
            timestamp=datetime.now(timezone.utc),
            processing_time=round(elapsed_ms, 2),
            session_id=item.session_id,
            subagents_used=self.subagents,
            fallbacks=fallbacks
        )

    def _failed(self, error: Exception) -> PipelineResult:
        return PipelineResult(
            state=PipelineState.FAILED,
            error=FAILURE_MESSAGE,
            details=str(error),
            fallback_response=FALLBACK_RESPONSE
        )


Orchestrator = ObjectionHandlerOrchestrator
