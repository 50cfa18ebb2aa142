"""Operating system helpers."""

from .process import ProcessError, run, run_attached

__all__ = ["ProcessError", "run", "run_attached"]
