"""Celery tasks for babylog."""

from babylog.tasks.analysis_tasks import run_correlation_analysis

__all__ = [
    "run_correlation_analysis",
]
