"""Services of the core (pipeline orchestration)."""

from hfsubset.core.services.subset_pipeline import PipelineResult, RunOptions, run_subset

__all__ = ["PipelineResult", "RunOptions", "run_subset"]
