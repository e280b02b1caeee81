from __future__ import annotations

from typing import Mapping

from ops_dashboard.app.domain.contracts import RecordStore
from ops_dashboard.app.domain.entities import ENTITIES


def collect_counts(stores: Mapping[str, RecordStore]) -> dict[str, int]:
    """Backend row count per entity, in registry order; PersistenceError propagates."""
    return {name: stores[name].count() for name in ENTITIES if name in stores}


def render_overview(counts: Mapping[str, int]) -> str:
    if not counts:
        return "No entities to count."
    width = max(len(name) for name in counts)
    return "\n".join(f"{name.ljust(width)}  {count}" for name, count in counts.items())
