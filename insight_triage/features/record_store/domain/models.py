from dataclasses import dataclass, replace
from typing import Optional

from insight_triage.core.common.enums import Sentiment, Topic


@dataclass(frozen=True)
class Insight:
    """
    A single feedback snippet.
    Staged insights carry no labels; processed insights carry both.
    """
    id: str
    timestamp: str
    source_url: str
    raw_content: str
    sentiment: Optional[Sentiment] = None
    topic: Optional[Topic] = None

    def __post_init__(self):
        if (self.sentiment is None) != (self.topic is None):
            raise ValueError(f"Insight {self.id} must carry both labels or neither.")

    @property
    def is_processed(self) -> bool:
        return self.sentiment is not None and self.topic is not None

    def with_labels(self, sentiment: Sentiment, topic: Topic) -> "Insight":
        """Returns the processed copy of this insight."""
        return replace(self, sentiment=sentiment, topic=topic)
