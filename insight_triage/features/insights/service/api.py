import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from insight_triage.core.common.enums import Collection, Sentiment, Topic
from insight_triage.features.record_store.domain.interfaces import IRecordStore
from insight_triage.features.record_store.domain.models import Insight
from ..data.id_generator import ContentHashIdGenerator
from ..domain.interfaces import IIdGenerator
from ..domain.models import (
    AddIntent,
    ClearProcessedIntent,
    ClearStagedIntent,
    DeleteStagedIntent,
    ProcessIntent,
    TriageState,
)
from ..domain.transitions import apply_intent, changed_collections

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """UTC with millisecond precision and a Z suffix, e.g. 2024-05-01T09:00:00.000Z."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


class InsightService:
    """
    Public API of the staging/processing lifecycle.
    Every mutation loads the full state, applies one intent, and persists the
    changed collections in a single store write.
    """

    def __init__(self,
                 store: IRecordStore,
                 id_generator: Optional[IIdGenerator] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.id_generator = id_generator or ContentHashIdGenerator()
        self.clock = clock or utc_now

    # --- Queries ---

    def list_staged(self) -> List[Insight]:
        return list(self._load_state().staged)

    def list_processed(self) -> List[Insight]:
        return self.store.read(Collection.PROCESSED)

    # --- Mutations ---

    def add_insight(self, source_url: str, raw_content: str) -> Insight:
        """
        Stages a new insight and returns it.

        Raises:
            ValueError: If either field is missing.
            DuplicateInsightError: If the generated id is already taken.
            StorageError: If persisting fails.
        """
        if source_url is None or raw_content is None:
            raise ValueError("Both source_url and raw_content are required.")

        timestamp = iso_timestamp(self.clock())
        insight = Insight(
            id=self.id_generator.generate(source_url, raw_content, timestamp),
            timestamp=timestamp,
            source_url=source_url,
            raw_content=raw_content,
        )
        self._commit(AddIntent(insight))
        logger.info(f"Staged insight {insight.id}")
        return insight

    def process_insight(self, insight_id: str, sentiment, topic) -> None:
        """
        Moves a staged insight to Processed with its final labels.
        Labels are checked before any state is touched; an unknown id is a no-op.

        Raises:
            InvalidLabelError: If a label is outside its enumeration.
            StorageError: If persisting fails.
        """
        intent = ProcessIntent(
            insight_id=insight_id,
            sentiment=Sentiment.from_wire(sentiment),
            topic=Topic.from_wire(topic),
        )
        if self._commit(intent):
            logger.info(f"Processed insight {insight_id} as {intent.sentiment.value}/{intent.topic.value}")

    def delete_staged(self, insight_id: str) -> None:
        if self._commit(DeleteStagedIntent(insight_id)):
            logger.info(f"Deleted staged insight {insight_id}")

    def clear_staged(self) -> None:
        # Always rewritten, so a malformed stored blob is reset too.
        self._commit(ClearStagedIntent(), always_write=(Collection.STAGED,))
        logger.info("Cleared staged insights")

    def clear_processed(self) -> None:
        self._commit(ClearProcessedIntent(), always_write=(Collection.PROCESSED,))
        logger.info("Cleared processed insights")

    # --- Internals ---

    def _load_state(self) -> TriageState:
        staged = self.store.read(Collection.STAGED)
        processed = self.store.read(Collection.PROCESSED)

        # An id already processed is never also staged.
        processed_ids = {i.id for i in processed}
        stale = [i.id for i in staged if i.id in processed_ids]
        if stale:
            logger.warning(f"Ignoring staged copies of processed insights: {stale}")
            staged = [i for i in staged if i.id not in processed_ids]

        return TriageState(staged=tuple(staged), processed=tuple(processed))

    def _commit(self, intent, always_write=()) -> bool:
        """Applies an intent and persists what changed. Returns False for no-ops."""
        before = self._load_state()
        after = apply_intent(before, intent)

        changes = changed_collections(before, after)
        for name in always_write:
            changes.setdefault(name, after.collection(name))
        if not changes:
            return False

        self.store.write_many(changes)
        return True


_service: Optional[InsightService] = None


def get_insight_service() -> InsightService:
    """Process-wide service backed by the local SQL store (created on first use)."""
    global _service
    if _service is None:
        from insight_triage.features.record_store.data.repository import SqlRecordStore
        _service = InsightService(store=SqlRecordStore())
    return _service
