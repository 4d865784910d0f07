"""API routers."""

from . import analysis, predictions

__all__ = ["analysis", "predictions"]
