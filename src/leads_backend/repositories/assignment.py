"""
Soft-delete referential layer.

An assignment links an entity of one kind (side A) to an entity of another
kind (side B). For every ordered (A, B) pair at most one assignment row is
active; the partial unique index on each assignment table enforces this in
storage, and the lookup in ``create_or_reactivate`` enforces it in the
common case. Removing an assignment flips its flag, so re-assigning the same
pair revives the original row and keeps its id.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Type
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from leads_backend.errors import DuplicateAssignment, NotFound, ReferenceInactive, ReferenceNotFound
from leads_backend.model.base import utcnow
from leads_backend.repositories.base import RepositoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentRelation:
    """Describes one assignment table and the two collections it links."""
    name: str
    model: Type
    side_a: Type
    column_a: str
    label_a: str
    side_b: Type
    column_b: str
    label_b: str
    display_a: Optional[str] = None
    display_b: Optional[str] = None
    duplicate_message: Optional[str] = None


class AssignmentRepository:

    def __init__(self, db: Session, relation: AssignmentRelation):
        self.db = db
        self.relation = relation
        self.model = relation.model

    @property
    def _col_a(self):
        return getattr(self.model, self.relation.column_a)

    @property
    def _col_b(self):
        return getattr(self.model, self.relation.column_b)

    def _resolve(self, model: Type, entity_id: Any, label: str, display: Optional[str]):
        entity = self.db.query(model).filter(model.id == entity_id).first()

        if entity is None:
            raise ReferenceNotFound(label, entity_id)

        if not entity.is_active:
            raise ReferenceInactive(label, entity_id, getattr(entity, display) if display else None)

        return entity

    def find_pair(self, ref_a: Any, ref_b: Any):
        """Assignment for the ordered pair regardless of its flag, the active one first."""
        return (
            self.db.query(self.model)
            .filter(self._col_a == ref_a, self._col_b == ref_b)
            .order_by(self.model.is_active.desc(), self.model.updated_at.desc())
            .first()
        )

    def get_active(self, assignment_id: Any):
        assignment = self.db.query(self.model).filter(
            self.model.id == assignment_id,
            self.model.is_active == True
        ).first()
        if assignment is None:
            raise NotFound(self.relation.name, assignment_id)
        return assignment

    def create_or_reactivate(self, ref_a: Any, ref_b: Any, actor_id: Optional[str] = None):
        """
        Make (ref_a, ref_b) actively linked.

        Raises:
            ReferenceNotFound: Either side does not exist
            ReferenceInactive: Either side exists but is deactivated
            DuplicateAssignment: The pair is already actively linked
        """
        relation = self.relation

        self._resolve(relation.side_a, ref_a, relation.label_a, relation.display_a)
        self._resolve(relation.side_b, ref_b, relation.label_b, relation.display_b)

        existing = self.find_pair(ref_a, ref_b)

        if existing is not None and existing.is_active:
            raise self._duplicate(ref_a, ref_b)

        if existing is not None:
            existing.is_active = True
            existing.assigned_date = utcnow()
            existing.updated_by = actor_id
            assignment = existing
            action = "Reactivated"
        else:
            assignment = self.model(**{
                relation.column_a: ref_a,
                relation.column_b: ref_b,
                "is_active": True,
                "created_by": actor_id,
            })
            self.db.add(assignment)
            action = "Created"

        try:
            self.db.commit()
            self.db.refresh(assignment)
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Concurrent {relation.name} for ({ref_a}, {ref_b}) rejected by storage")
            raise self._duplicate(ref_a, ref_b)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store {relation.name}: {e}", exc_info=True)
            raise RepositoryError(f"Failed to store {relation.name}")

        logger.info(f"{action} {relation.name} {assignment.id} for ({ref_a}, {ref_b})")
        return assignment

    def deactivate(self, assignment_id: Any, actor_id: Optional[str] = None) -> None:
        """
        Remove an active assignment by clearing its flag.

        Raises:
            NotFound: No active assignment has that id
        """
        assignment = self.get_active(assignment_id)

        assignment.is_active = False
        assignment.updated_by = actor_id

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to deactivate {self.relation.name} {assignment_id}: {e}", exc_info=True)
            raise RepositoryError(f"Failed to deactivate {self.relation.name}")

        logger.info(f"Deactivated {self.relation.name} {assignment_id}")

    def list_active(
        self,
        ref_a: Any = None,
        ref_b: Any = None,
        descending: bool = True,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Tuple[List[Any], int]:
        """Active assignments, optionally filtered by either side, newest first by default."""
        query = self.db.query(self.model).filter(self.model.is_active == True)

        if ref_a is not None:
            query = query.filter(self._col_a == ref_a)
        if ref_b is not None:
            query = query.filter(self._col_b == ref_b)

        total = query.count()

        order = self.model.created_at.desc() if descending else self.model.created_at.asc()
        query = query.order_by(order, self.model.id)

        if skip is not None:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        return query.all(), total

    def _duplicate(self, ref_a: Any, ref_b: Any) -> DuplicateAssignment:
        return DuplicateAssignment(self.relation.name, ref_a, ref_b, self.relation.duplicate_message)
