"""Build pipeline orchestration."""

from .orchestrator import PipelineOrchestrator, PipelineStage

__all__ = ["PipelineOrchestrator", "PipelineStage"]
