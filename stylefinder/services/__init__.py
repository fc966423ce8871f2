"""Pipeline orchestration and fallback generation."""

from .fallback import MockResultGenerator
from .pipeline import AnalysisPipeline, NoImageProvided
from .stages import PipelineStage

__all__ = ["AnalysisPipeline", "MockResultGenerator", "NoImageProvided", "PipelineStage"]
