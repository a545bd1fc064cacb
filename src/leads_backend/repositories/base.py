"""
Base repository pattern implementation.

Entities in this system are never physically deleted. Every table carries an
``is_active`` flag; "delete" clears it and "reactivate" sets it again. Reads
through this repository see active rows unless they ask otherwise.
"""

import logging
from typing import TypeVar, Generic, List, Optional, Dict, Any, Tuple, Type
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import inspect

from leads_backend.errors import DomainError, DuplicateEntity, NotFound

logger = logging.getLogger(__name__)

# Type variable for generic entity type
T = TypeVar('T')


class RepositoryError(DomainError):
    """Unexpected storage failure, already rolled back."""
    default_message = "Storage operation failed"


class SoftDeleteRepository(Generic[T]):
    """
    Repository providing common database operations over soft-deletable models.

    Write operations take the acting user id and stamp ``created_by`` or
    ``updated_by`` with it.
    """

    def __init__(self, db: Session, model: Type[T], label: Optional[str] = None):
        """
        Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class with ``id`` and ``is_active`` columns
            label: Human readable entity name used in error messages
        """
        self.db = db
        self.model = model
        self.label = label or model.__name__

    def get_by_id_optional(self, entity_id: Any) -> Optional[T]:
        """Get entity by ID regardless of its active flag, None if not found."""
        return self.db.query(self.model).filter(
            self.model.id == entity_id
        ).first()

    def get_by_id(self, entity_id: Any) -> T:
        """
        Get entity by ID regardless of its active flag.

        Raises:
            NotFound: If entity not found
        """
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise NotFound(self.label, entity_id)
        return entity

    def get_active(self, entity_id: Any) -> T:
        """
        Get an active entity by ID.

        Raises:
            NotFound: If entity not found or deactivated
        """
        entity = self.db.query(self.model).filter(
            self.model.id == entity_id,
            self.model.is_active == True
        ).first()
        if entity is None:
            raise NotFound(self.label, entity_id)
        return entity

    def list_active(
        self,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
        descending: bool = True,
        **filters
    ) -> Tuple[List[T], int]:
        """
        List active entities with optional pagination and equality filters.

        Args:
            skip: Number of results to skip
            limit: Maximum number of results
            descending: Newest first when True
            **filters: Column equality criteria, None values are ignored

        Returns:
            Tuple of the requested page and the total number of matches
        """
        query = self.query_active(**filters)

        total = query.count()

        order = self.model.created_at.desc() if descending else self.model.created_at.asc()
        query = query.order_by(order)

        if skip is not None:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        return query.all(), total

    def create(self, entity: T, actor_id: Optional[str] = None) -> T:
        """
        Create a new entity.

        Raises:
            DuplicateEntity: If entity violates unique constraints
            RepositoryError: If database operation fails
        """
        entity.created_by = actor_id
        entity.updated_by = actor_id
        self.db.add(entity)
        self._commit(entity)
        logger.info(f"Created {self.label} {entity.id}")
        return entity

    def update(self, entity_id: Any, updates: Dict[str, Any], actor_id: Optional[str] = None) -> T:
        """
        Update an active entity.

        Raises:
            NotFound: If entity not found or deactivated
            DuplicateEntity: If the update violates unique constraints
        """
        entity = self.get_active(entity_id)

        for key, value in updates.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        entity.updated_by = actor_id

        self._commit(entity)
        return entity

    def deactivate(self, entity_id: Any, actor_id: Optional[str] = None) -> T:
        """Soft delete: clear the active flag. Raises NotFound unless the entity is active."""
        entity = self.get_active(entity_id)

        entity.is_active = False
        entity.updated_by = actor_id

        self._commit(entity)
        logger.info(f"Deactivated {self.label} {entity_id}")
        return entity

    def reactivate(self, entity_id: Any, actor_id: Optional[str] = None) -> T:
        """Set the active flag again. Already active entities are returned unchanged."""
        entity = self.get_by_id(entity_id)

        if entity.is_active:
            return entity

        entity.is_active = True
        entity.updated_by = actor_id

        self._commit(entity)
        logger.info(f"Reactivated {self.label} {entity_id}")
        return entity

    def query_active(self, **criteria):
        """Query over active entities, for callers that add their own filters."""
        return self._filtered(is_active=True, **criteria)

    def find_one_by(self, **criteria) -> Optional[T]:
        """First entity matching the criteria, active or not."""
        return self._filtered(**criteria).first()

    def count(self, **criteria) -> int:
        return self._filtered(**criteria).count()

    def _filtered(self, **criteria):
        query = self.db.query(self.model)

        for key, value in criteria.items():
            if value is not None and hasattr(self.model, key):
                query = query.filter(getattr(self.model, key) == value)

        return query

    def _commit(self, entity: T) -> None:
        try:
            self.db.commit()
            self.db.refresh(entity)
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEntity(self.label, self._extract_entity_dict(entity))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store {self.label}: {e}", exc_info=True)
            raise RepositoryError(f"Failed to store {self.label}")

    def _extract_entity_dict(self, entity: T) -> Dict[str, Any]:
        mapper = inspect(self.model)
        return {
            col.key: getattr(entity, col.key, None)
            for col in mapper.column_attrs
            if col.key not in ("password",)
        }
