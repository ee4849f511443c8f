from __future__ import annotations

import logging

from result_analyzer.domain.errors import CapacityError, DuplicateRollError
from result_analyzer.services.store import ResultStore

logger = logging.getLogger(__name__)

DEMO_STUDENTS: list[tuple[int, str, tuple[int, int, int, int, int]]] = [
    (1, "Ravi Kumar", (88, 76, 92, 85, 79)),
    (2, "Priya Sharma", (78, 81, 69, 74, 80)),
    (3, "Amit Roy", (55, 61, 49, 58, 60)),
    (4, "Sneha Gupta", (92, 95, 89, 94, 90)),
    (5, "Karan Patel", (40, 35, 50, 45, 38)),
]


def load_demo(store: ResultStore) -> int:
    """Add the demo roster; rolls already present are skipped, and loading stops once the store is full."""
    added = 0
    for roll, name, marks in DEMO_STUDENTS:
        try:
            store.add(roll, name, marks)
        except DuplicateRollError:
            logger.warning("Demo roll %s already present, skipped", roll)
            continue
        except CapacityError:
            logger.warning("Store full, demo load stopped after %d students", added)
            break
        added += 1
    return added
