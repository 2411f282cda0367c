import logging
from typing import List, Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError
from insight_triage.core.common.enums import Collection
from insight_triage.core.database.base import Base
from insight_triage.core.errors import StorageError
from .codec import dump_collection, load_collection
from .sql_models import CollectionBlobModel, utc_now
from ..domain.interfaces import IRecordStore
from ..domain.models import Insight

logger = logging.getLogger(__name__)


class SqlRecordStore(IRecordStore):
    """
    Key/value store of collection blobs on top of SQLAlchemy.
    Defaults to the project's SessionLocal; tests may inject their own factory.
    """

    def __init__(self, session_factory=None, create_tables: bool = True):
        if session_factory is None:
            from insight_triage.core.database.connection import SessionLocal
            session_factory = SessionLocal
        self.session_factory = session_factory

        if create_tables:
            self._create_tables()

    def _create_tables(self):
        try:
            with self.session_factory() as db:
                Base.metadata.create_all(bind=db.get_bind(), tables=[CollectionBlobModel.__table__])
        except SQLAlchemyError as e:
            # Reads will degrade to empty collections, writes will raise.
            logger.warning(f"Could not create insight tables: {e}")

    def read(self, collection: Collection) -> List[Insight]:
        try:
            with self.session_factory() as db:
                row = db.get(CollectionBlobModel, collection.value)
                blob = row.payload if row else None
        except SQLAlchemyError as e:
            logger.warning(f"Reading '{collection.value}' failed, using empty collection: {e}")
            return []

        if blob is None:
            return []

        try:
            return load_collection(blob, collection)
        except StorageError as e:
            logger.warning(f"Stored '{collection.value}' is malformed, using empty collection: {e}")
            return []

    def write_many(self, collections: Mapping[Collection, Sequence[Insight]]) -> None:
        """
        Transactional logic:
        1. Serialize every collection up front.
        2. Upsert each blob row.
        3. Commit once, so a failure leaves every collection as it was.
        """
        blobs = {collection: dump_collection(insights) for collection, insights in collections.items()}

        with self.session_factory() as db:
            try:
                for collection, blob in blobs.items():
                    row = db.get(CollectionBlobModel, collection.value)
                    if row is None:
                        db.add(CollectionBlobModel(key=collection.value, payload=blob))
                    else:
                        row.payload = blob
                        row.updated_at = utc_now()
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                keys = [c.value for c in blobs]
                raise StorageError(f"Writing {keys} failed: {e}") from e

        logger.info(f"Persisted {', '.join(f'{c.value}={len(collections[c])}' for c in blobs)}")
