"""Read-only query selectors."""

from budget_kernel.selectors.base import BaseSelector
from budget_kernel.selectors.overview_selector import (
    OverviewSnapshot,
    OverviewSnapshotSelector,
)

__all__ = [
    "BaseSelector",
    "OverviewSnapshot",
    "OverviewSnapshotSelector",
]
