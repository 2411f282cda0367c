from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class LabelCount:
    name: str
    count: int


@dataclass
class DashboardSummary:
    """Aggregates over the processed collection, ready for charting."""
    total: int = 0
    sentiments: List[LabelCount] = field(default_factory=list)
    topics: List[LabelCount] = field(default_factory=list)
