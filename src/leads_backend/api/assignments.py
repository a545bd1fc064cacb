from typing import Annotated
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from leads_backend.database import get_db
from leads_backend.errors import NotFound
from leads_backend.interface.assignments import (
    CurriculumSubjectAssignmentCreate,
    CurriculumSubjectAssignmentGet,
    CurriculumSubjectAssignmentQuery,
    LeadAssigneeCreate,
    LeadAssigneeGet,
    LeadAssigneeQuery,
    MadrasaCurriculumAssignmentCreate,
    MadrasaCurriculumAssignmentGet,
    MadrasaCurriculumAssignmentQuery,
    SortOrderEnum,
)
from leads_backend.permissions.auth import requires
from leads_backend.permissions.principal import Principal
from leads_backend.repositories.assignment import AssignmentRepository
from leads_backend.repositories.relations import curriculum_subject, lead_user, madrasa_curriculum

madaris_assignment_router = APIRouter()
lead_assignee_router = APIRouter()

# /madaris/madrasa-curriculum-assignments

@madaris_assignment_router.post("/madrasa-curriculum-assignments", response_model=MadrasaCurriculumAssignmentGet, status_code=201)
def assign_curriculum(
    permissions: Annotated[Principal, Depends(requires("madaris", "create"))],
    entity: MadrasaCurriculumAssignmentCreate,
    db: Session = Depends(get_db)
):
    """Assign a curriculum to a madrasa, reviving an earlier removed assignment if there is one"""
    return AssignmentRepository(db, madrasa_curriculum).create_or_reactivate(entity.madrasa_id, entity.curriculum_id, permissions.user_id)

@madaris_assignment_router.get("/madrasa-curriculum-assignments", response_model=list[MadrasaCurriculumAssignmentGet])
def list_curriculum_assignments(
    permissions: Annotated[Principal, Depends(requires("madaris", "read"))],
    response: Response,
    db: Session = Depends(get_db),
    params: MadrasaCurriculumAssignmentQuery = Depends()
):
    items, total = AssignmentRepository(db, madrasa_curriculum).list_active(
        ref_a=params.madrasa_id,
        ref_b=params.curriculum_id,
        descending=params.order == SortOrderEnum.desc,
        skip=params.skip,
        limit=params.limit,
    )
    response.headers["X-Total-Count"] = str(total)
    return items

@madaris_assignment_router.get("/madrasa-curriculum-assignments/{id}", response_model=MadrasaCurriculumAssignmentGet)
def get_curriculum_assignment(permissions: Annotated[Principal, Depends(requires("madaris", "read"))], id: str, db: Session = Depends(get_db)):
    return AssignmentRepository(db, madrasa_curriculum).get_active(id)

@madaris_assignment_router.delete("/madrasa-curriculum-assignments/{id}", status_code=204)
def remove_curriculum_assignment(permissions: Annotated[Principal, Depends(requires("madaris", "delete"))], id: str, db: Session = Depends(get_db)):
    AssignmentRepository(db, madrasa_curriculum).deactivate(id, permissions.user_id)

# /madaris/curriculum-subject-assignments

@madaris_assignment_router.post("/curriculum-subject-assignments", response_model=CurriculumSubjectAssignmentGet, status_code=201)
def assign_subject(
    permissions: Annotated[Principal, Depends(requires("madaris", "create"))],
    entity: CurriculumSubjectAssignmentCreate,
    db: Session = Depends(get_db)
):
    return AssignmentRepository(db, curriculum_subject).create_or_reactivate(entity.curriculum_id, entity.subject_id, permissions.user_id)

@madaris_assignment_router.get("/curriculum-subject-assignments", response_model=list[CurriculumSubjectAssignmentGet])
def list_subject_assignments(
    permissions: Annotated[Principal, Depends(requires("madaris", "read"))],
    response: Response,
    db: Session = Depends(get_db),
    params: CurriculumSubjectAssignmentQuery = Depends()
):
    items, total = AssignmentRepository(db, curriculum_subject).list_active(
        ref_a=params.curriculum_id,
        ref_b=params.subject_id,
        descending=params.order == SortOrderEnum.desc,
        skip=params.skip,
        limit=params.limit,
    )
    response.headers["X-Total-Count"] = str(total)
    return items

@madaris_assignment_router.get("/curriculum-subject-assignments/{id}", response_model=CurriculumSubjectAssignmentGet)
def get_subject_assignment(permissions: Annotated[Principal, Depends(requires("madaris", "read"))], id: str, db: Session = Depends(get_db)):
    return AssignmentRepository(db, curriculum_subject).get_active(id)

@madaris_assignment_router.delete("/curriculum-subject-assignments/{id}", status_code=204)
def remove_subject_assignment(permissions: Annotated[Principal, Depends(requires("madaris", "delete"))], id: str, db: Session = Depends(get_db)):
    AssignmentRepository(db, curriculum_subject).deactivate(id, permissions.user_id)

# /leads/{lead_id}/assignees

@lead_assignee_router.post("/{lead_id}/assignees", response_model=LeadAssigneeGet, status_code=201)
def assign_lead(
    permissions: Annotated[Principal, Depends(requires("leads", "update"))],
    lead_id: str,
    entity: LeadAssigneeCreate,
    db: Session = Depends(get_db)
):
    return AssignmentRepository(db, lead_user).create_or_reactivate(lead_id, entity.user_id, permissions.user_id)

@lead_assignee_router.get("/{lead_id}/assignees", response_model=list[LeadAssigneeGet])
def list_lead_assignees(
    permissions: Annotated[Principal, Depends(requires("leads", "read"))],
    lead_id: str,
    response: Response,
    db: Session = Depends(get_db),
    params: LeadAssigneeQuery = Depends()
):
    items, total = AssignmentRepository(db, lead_user).list_active(
        ref_a=lead_id,
        ref_b=params.user_id,
        descending=params.order == SortOrderEnum.desc,
        skip=params.skip,
        limit=params.limit,
    )
    response.headers["X-Total-Count"] = str(total)
    return items

@lead_assignee_router.delete("/{lead_id}/assignees/{id}", status_code=204)
def unassign_lead(permissions: Annotated[Principal, Depends(requires("leads", "update"))], lead_id: str, id: str, db: Session = Depends(get_db)):

    repository = AssignmentRepository(db, lead_user)

    if repository.get_active(id).lead_id != lead_id:
        raise NotFound(lead_user.name, id)

    repository.deactivate(id, permissions.user_id)
