"""Name search over the patient store"""
from __future__ import annotations

from typing import List, Sequence

from .schemas import PatientRecord


def filter_patients(store: Sequence[PatientRecord], query: str) -> List[PatientRecord]:
    """Records whose name contains ``query``, case-insensitively.

    A blank query is no filter: the store comes back whole, in order.
    """
    if not query or not query.strip():
        return list(store)
    needle = query.lower()
    return [p for p in store if needle in p.name.lower()]
