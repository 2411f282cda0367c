from abc import ABC, abstractmethod
from typing import List, Mapping, Sequence

from insight_triage.core.common.enums import Collection
from .models import Insight


class IRecordStore(ABC):
    """
    Contract for insight persistence.
    Each collection is stored as one whole blob, so every write replaces the
    entire collection.
    """

    @abstractmethod
    def read(self, collection: Collection) -> List[Insight]:
        """
        Returns the collection newest-first.
        A collection that was never written, or whose stored data cannot be
        read, comes back empty.
        """
        pass

    def write(self, collection: Collection, insights: Sequence[Insight]) -> None:
        """
        Replaces the whole collection.

        Raises:
            StorageError: If the backend rejects the write.
        """
        self.write_many({collection: insights})

    @abstractmethod
    def write_many(self, collections: Mapping[Collection, Sequence[Insight]]) -> None:
        """
        Replaces several collections in one unit of work.
        Either every collection is replaced or none is.

        Raises:
            StorageError: If the backend rejects the write.
        """
        pass
