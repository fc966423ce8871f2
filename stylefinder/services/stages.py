"""Enumerations describing analysis pipeline stages."""

from enum import Enum


class PipelineStage(str, Enum):
    """Finite states an analysis request moves through."""

    IDLE = "idle"
    CLASSIFYING = "classifying"
    QUERY_BUILT = "query_built"
    SEARCHING = "searching"
    NORMALIZING = "normalizing"
    FALLBACK_GENERATING = "fallback_generating"
    DONE = "done"
