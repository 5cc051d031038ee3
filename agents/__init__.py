"""Subagents for the objection handler pipeline."""

from .stage import LLMStage, StageOutput
from .analyzer import build_analyzer, ANALYSIS_DEFAULT
from .generator import build_generator
from .assessor import build_assessor, QUALITY_DEFAULT

__all__ = [
    "LLMStage",
    "StageOutput",
    "build_analyzer",
    "build_generator",
    "build_assessor",
    "ANALYSIS_DEFAULT",
    "QUALITY_DEFAULT",
]
