from __future__ import annotations

__version__ = "0.3.0"

from .collect import collect_evidence
from .export import SerializedPlan, export
from .resolve import resolve

__all__ = ["__version__", "collect_evidence", "export", "resolve", "SerializedPlan"]
