from typing import Annotated
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from leads_backend.database import get_db
from leads_backend.interface.lead_responses import InboxLead, LeadResponseCreate, LeadResponseGet, LeadResponsesRead
from leads_backend.permissions.auth import requires
from leads_backend.permissions.principal import Principal
from leads_backend.repositories.lead_response import LeadResponseRepository

lead_response_router = APIRouter()
inbox_router = APIRouter()

@lead_response_router.get("/{lead_id}/responses", response_model=list[LeadResponseGet])
def list_lead_responses(
    permissions: Annotated[Principal, Depends(requires("leads", "read"))],
    lead_id: str,
    response: Response,
    db: Session = Depends(get_db)
):
    repository = LeadResponseRepository(db)
    lead = repository.get_lead(lead_id)
    repository.require_participant(lead, permissions.user_id, "view responses")

    items = repository.list_for_lead(lead.id)
    response.headers["X-Total-Count"] = str(len(items))
    return items

@lead_response_router.post("/{lead_id}/responses", response_model=LeadResponseGet, status_code=201)
def create_lead_response(
    permissions: Annotated[Principal, Depends(requires("leads", "read"))],
    lead_id: str,
    entity: LeadResponseCreate,
    db: Session = Depends(get_db)
):
    repository = LeadResponseRepository(db)
    lead = repository.get_lead(lead_id)
    repository.require_participant(lead, permissions.user_id, "respond")

    return repository.create(lead, permissions.user_id, entity.message, entity.target_user_id, entity.is_internal)

@lead_response_router.patch("/{lead_id}/responses/read-all")
def mark_lead_responses_read(
    permissions: Annotated[Principal, Depends(requires("leads", "read"))],
    lead_id: str,
    entity: LeadResponsesRead,
    db: Session = Depends(get_db)
):
    repository = LeadResponseRepository(db)
    lead = repository.get_lead(lead_id)

    return {"updated": repository.mark_all_read(lead, permissions.user_id, entity.response_ids)}

@lead_response_router.patch("/{lead_id}/responses/{response_id}/read", response_model=LeadResponseGet)
def mark_lead_response_read(
    permissions: Annotated[Principal, Depends(requires("leads", "read"))],
    lead_id: str,
    response_id: str,
    db: Session = Depends(get_db)
):
    repository = LeadResponseRepository(db)
    lead = repository.get_lead(lead_id)
    repository.require_participant(lead, permissions.user_id, "mark responses as read")

    return repository.mark_read(lead.id, response_id, permissions.user_id)

@inbox_router.get("/assigned", response_model=list[InboxLead])
def list_assigned_leads(
    permissions: Annotated[Principal, Depends(requires("inbox", "read"))],
    response: Response,
    db: Session = Depends(get_db)
):
    """Active leads the caller is assigned to, with their unread response counts"""

    repository = LeadResponseRepository(db)
    leads = repository.assigned_leads(permissions.user_id)

    response.headers["X-Total-Count"] = str(len(leads))

    return [
        InboxLead.model_validate(lead, from_attributes=True).model_copy(
            update={"unread_responses": repository.count_unread(lead.id, permissions.user_id)}
        )
        for lead in leads
    ]
