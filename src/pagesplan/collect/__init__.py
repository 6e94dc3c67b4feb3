from __future__ import annotations

from .collect import collect_evidence
from .model import EvidenceRecord

__all__ = ["collect_evidence", "EvidenceRecord"]
