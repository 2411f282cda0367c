import logging
from typing import Dict, List, Mapping, Sequence

from insight_triage.core.common.enums import Collection
from insight_triage.core.errors import StorageError
from .codec import dump_collection, load_collection
from ..domain.interfaces import IRecordStore
from ..domain.models import Insight

logger = logging.getLogger(__name__)


class InMemoryRecordStore(IRecordStore):
    """
    Deterministic store keeping serialized blobs in a dict.
    Blobs go through the same codec as the SQL store, so round-trip behaviour matches.
    """

    def __init__(self):
        self.blobs: Dict[str, str] = {}
        self.fail_writes = False

    def seed_raw(self, collection: Collection, blob: str) -> None:
        """Installs a raw blob as-is, bypassing the codec."""
        self.blobs[collection.value] = blob

    def read(self, collection: Collection) -> List[Insight]:
        blob = self.blobs.get(collection.value)
        if blob is None:
            return []
        try:
            return load_collection(blob, collection)
        except StorageError as e:
            logger.warning(f"Stored '{collection.value}' is malformed, using empty collection: {e}")
            return []

    def write_many(self, collections: Mapping[Collection, Sequence[Insight]]) -> None:
        if self.fail_writes:
            raise StorageError(f"Writing {[c.value for c in collections]} failed: store is read-only")

        staged = {collection.value: dump_collection(insights) for collection, insights in collections.items()}
        self.blobs.update(staged)
