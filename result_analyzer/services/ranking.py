from __future__ import annotations

from result_analyzer.services.store import ResultStore


def sort_by_percentage_desc(store: ResultStore) -> bool:
    """Reorder the store highest percentage first. Returns False when there is nothing to sort."""
    if store.count() <= 1:
        return False
    store.reorder(sorted(store.list(), key=lambda r: r.percentage, reverse=True))
    return True
