"""End-to-end En Vrac run."""

from .envrac_pipeline import PipelineResult, build_classifier, build_repository, run_pipeline

__all__ = ["PipelineResult", "build_classifier", "build_repository", "run_pipeline"]
