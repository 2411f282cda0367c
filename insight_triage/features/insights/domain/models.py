from dataclasses import dataclass, field
from typing import Optional, Tuple

from insight_triage.core.common.enums import Collection, Sentiment, Topic
from insight_triage.features.record_store.domain.models import Insight


@dataclass(frozen=True)
class TriageState:
    """
    Full snapshot of both collections, newest-first.
    """
    staged: Tuple[Insight, ...] = field(default_factory=tuple)
    processed: Tuple[Insight, ...] = field(default_factory=tuple)

    def collection(self, name: Collection) -> Tuple[Insight, ...]:
        return self.staged if name == Collection.STAGED else self.processed

    def find_staged(self, insight_id: str) -> Optional[Insight]:
        return next((i for i in self.staged if i.id == insight_id), None)

    def contains_id(self, insight_id: str) -> bool:
        return any(i.id == insight_id for i in self.staged + self.processed)


# --- Intents ---

@dataclass(frozen=True)
class AddIntent:
    insight: Insight


@dataclass(frozen=True)
class ProcessIntent:
    insight_id: str
    sentiment: Sentiment
    topic: Topic


@dataclass(frozen=True)
class DeleteStagedIntent:
    insight_id: str


@dataclass(frozen=True)
class ClearStagedIntent:
    pass


@dataclass(frozen=True)
class ClearProcessedIntent:
    pass
