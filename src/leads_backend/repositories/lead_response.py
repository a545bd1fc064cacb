"""
Lead conversations and the assigned-leads inbox.

Only participants of a lead may read or write its responses: the user who
created the lead and the users actively assigned to it.
"""

import logging
from typing import Iterable, List, Optional
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from leads_backend.errors import InvalidOperation, NotFound, NotParticipant, ReferenceNotFound
from leads_backend.model.assignment import LeadUserAssignment
from leads_backend.model.auth import User
from leads_backend.model.base import utcnow
from leads_backend.model.lead import Lead, LeadResponse
from leads_backend.repositories.base import RepositoryError

logger = logging.getLogger(__name__)


class LeadResponseRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_lead(self, lead_id: str) -> Lead:
        lead = self.db.query(Lead).filter(Lead.id == lead_id, Lead.is_active == True).first()
        if lead is None:
            raise NotFound("Lead", lead_id)
        return lead

    def is_assigned(self, lead_id: str, user_id: str) -> bool:
        return self.db.query(LeadUserAssignment.id).filter(
            LeadUserAssignment.lead_id == lead_id,
            LeadUserAssignment.user_id == user_id,
            LeadUserAssignment.is_active == True
        ).first() is not None

    def require_participant(self, lead: Lead, user_id: str, activity: str) -> None:
        if lead.created_by == user_id or self.is_assigned(lead.id, user_id):
            return
        logger.info(f"User {user_id} is not a participant of lead {lead.id}")
        raise NotParticipant(activity)

    def list_for_lead(self, lead_id: str) -> List[LeadResponse]:
        """Conversation of a lead, oldest first."""
        return (
            self.db.query(LeadResponse)
            .filter(LeadResponse.lead_id == lead_id)
            .order_by(LeadResponse.created_at.asc(), LeadResponse.id)
            .all()
        )

    def create(self, lead: Lead, user_id: str, message: str, target_user_id: Optional[str] = None, is_internal: bool = False) -> LeadResponse:

        if target_user_id is not None:
            if self.db.query(User.id).filter(User.id == target_user_id).first() is None:
                raise ReferenceNotFound("Target user", target_user_id)

        response = LeadResponse(
            lead_id=lead.id,
            user_id=user_id,
            target_user_id=target_user_id,
            message=message,
            is_internal=is_internal,
        )
        self.db.add(response)

        # A new message bumps the lead to the top of the inbox
        lead.updated_at = utcnow()

        self._commit(f"Failed to store response on lead {lead.id}")
        self.db.refresh(response)

        logger.info(f"User {user_id} responded on lead {lead.id}")
        return response

    def mark_read(self, lead_id: str, response_id: str, user_id: str) -> LeadResponse:
        """
        Mark one response as read by the caller.

        The author marks the creator side, the addressee marks the target side.
        Anyone else marks the creator side of an unaddressed response.
        """
        response = self.db.query(LeadResponse).filter(LeadResponse.id == response_id).first()

        if response is None:
            raise NotFound("Lead response", response_id)
        if response.lead_id != lead_id:
            raise InvalidOperation("Response does not belong to this lead")

        now = utcnow()

        if response.user_id == user_id:
            response.is_read_by_creator = True
            response.read_by_creator_at = now
        elif response.target_user_id == user_id:
            response.is_read_by_target = True
            response.read_by_target_at = now
        elif response.target_user_id is None:
            response.is_read_by_creator = True
            response.read_by_creator_at = now

        self._commit(f"Failed to mark response {response_id} as read")
        self.db.refresh(response)
        return response

    def mark_all_read(self, lead: Lead, user_id: str, response_ids: Iterable[str]) -> int:
        """Mark responses of ``lead`` as read for a participant. Returns how many were updated."""

        self.require_participant(lead, user_id, "mark responses as read")

        values = {}
        now = utcnow()
        if lead.created_by == user_id:
            values.update(is_read_by_creator=True, read_by_creator_at=now)
        if self.is_assigned(lead.id, user_id):
            values.update(is_read_by_target=True, read_by_target_at=now)

        updated = (
            self.db.query(LeadResponse)
            .filter(LeadResponse.lead_id == lead.id, LeadResponse.id.in_(list(response_ids)))
            .update(values, synchronize_session=False)
        )

        self._commit(f"Failed to mark responses on lead {lead.id} as read")
        return updated

    def count_unread(self, lead_id: str, user_id: str) -> int:
        """Responses by others that are addressed to the user, or to nobody, and still unread on that side."""
        return self.db.query(LeadResponse).filter(
            LeadResponse.lead_id == lead_id,
            LeadResponse.user_id != user_id,
            or_(
                and_(LeadResponse.target_user_id == user_id, LeadResponse.is_read_by_target == False),
                and_(LeadResponse.target_user_id == None, LeadResponse.is_read_by_creator == False),
            )
        ).count()

    def assigned_leads(self, user_id: str) -> List[Lead]:
        """Active leads the user is actively assigned to, most recently updated first."""
        return (
            self.db.query(Lead)
            .join(LeadUserAssignment, LeadUserAssignment.lead_id == Lead.id)
            .filter(
                LeadUserAssignment.user_id == user_id,
                LeadUserAssignment.is_active == True,
                Lead.is_active == True
            )
            .order_by(Lead.updated_at.desc(), Lead.id)
            .all()
        )

    def _commit(self, failure: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{failure}: {e}", exc_info=True)
            raise RepositoryError(failure)
