# retailers/utils/entity_store.py
"""Partition/row keyed record store with optimistic concurrency.

Every entity class mixes in ``TableEntityMixin``. Writes are version-stamped:
``update`` and ``save`` only succeed when the caller presents the etag that is currently
stored, otherwise ``ConcurrencyConflictError`` is raised and nothing is
written. There is no automatic retry; callers re-fetch and try again.
"""
import logging
from typing import List, Optional, Sequence, Tuple, Type, TypeVar

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from retailers.database import get_db
from retailers.models.entity import TableEntityMixin, new_row_key

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=TableEntityMixin)


class EntityStoreError(Exception):
    pass


class EntityExistsError(EntityStoreError):
    def __init__(self, partition_key: str, row_key: str):
        super().__init__(f"Entity {partition_key}/{row_key} already exists")
        self.partition_key = partition_key
        self.row_key = row_key


class ConcurrencyConflictError(EntityStoreError):
    def __init__(self, partition_key: str, row_key: str):
        super().__init__(
            f"Entity {partition_key}/{row_key} was modified by someone else, reload it and try again"
        )
        self.partition_key = partition_key
        self.row_key = row_key


class EntityStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, model: Type[E], partition_key: str, row_key: str) -> Optional[E]:
        # populate_existing refreshes an instance already in the identity map,
        # so the returned etag is always the stored one
        stmt = (
            select(model)
            .where(model.partition_key == partition_key, model.row_key == row_key)
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).first()

    def get_all(self, model: Type[E]) -> List[E]:
        stmt = (
            select(model)
            .where(model.partition_key == model.PARTITION)
            .order_by(model.timestamp, model.row_key)
        )
        return list(self.db.scalars(stmt).all())

    def add(self, entity: E) -> E:
        self.save(adds=[entity])
        logger.debug(f"Added {entity.partition_key}/{entity.row_key}")
        return entity

    def update(self, entity: E, etag: str) -> E:
        """Write pending changes of ``entity`` if ``etag`` is still current."""
        self.save(updates=[(entity, etag)])
        return entity

    def save(self, adds: Sequence[E] = (), updates: Sequence[Tuple[E, str]] = ()) -> None:
        """Insert ``adds`` and write the pending changes of ``updates`` in one transaction.

        ``updates`` holds (entity, etag) pairs. Either everything is written or,
        on a stale etag, an existing key or any storage failure, nothing is and
        the session is rolled back.
        """
        for entity, etag in updates:
            if entity.etag != etag:
                self.db.rollback()
                raise ConcurrencyConflictError(entity.partition_key, entity.row_key)

        new_keys = []
        for entity in adds:
            if not entity.partition_key:
                entity.partition_key = type(entity).PARTITION
            if not entity.row_key:
                entity.row_key = new_row_key()
            if self.get(type(entity), entity.partition_key, entity.row_key) is not None:
                self.db.rollback()
                raise EntityExistsError(entity.partition_key, entity.row_key)
            new_keys.append((type(entity), entity.partition_key, entity.row_key))
            self.db.add(entity)

        updated_keys = [(entity.partition_key, entity.row_key) for entity, _ in updates]
        try:
            self.db.commit()
        except StaleDataError as exc:
            self.db.rollback()
            partition_key, row_key = updated_keys[0]
            logger.warning(f"Concurrent write detected on {partition_key}/{row_key}")
            raise ConcurrencyConflictError(partition_key, row_key) from exc
        except IntegrityError as exc:
            self.db.rollback()
            # A concurrent insert of the same key shows up as a unique violation
            for model, partition_key, row_key in new_keys:
                if self.get(model, partition_key, row_key) is not None:
                    raise EntityExistsError(partition_key, row_key) from exc
            raise
        except Exception:
            self.db.rollback()
            raise

        for entity in list(adds) + [entity for entity, _ in updates]:
            self.db.refresh(entity)

    def delete(self, model: Type[E], partition_key: str, row_key: str) -> bool:
        entity = self.get(model, partition_key, row_key)
        if entity is None:
            return False
        self.db.delete(entity)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return True


# Request-scoped store sharing the request database session
def get_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)
