from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from sqlalchemy.orm import Session
from leads_backend.interface.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from leads_backend.model.lead import Lead
from leads_backend.model.organization import Department, Program, Section

class LeadStatusEnum(str, Enum):
    new = "new"
    contacted = "contacted"
    qualified = "qualified"
    proposal = "proposal"
    negotiation = "negotiation"
    closed_won = "closed-won"
    closed_lost = "closed-lost"

class LeadPriorityEnum(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"

class LeadCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200, description="Lead title")
    description: str = Field(min_length=1, max_length=2000, description="Lead description")
    status: LeadStatusEnum = LeadStatusEnum.new
    priority: LeadPriorityEnum = LeadPriorityEnum.medium
    source: Optional[str] = Field(None, max_length=100, description="Where the lead came from")
    department_id: Optional[str] = Field(None, min_length=1, max_length=36)
    section_id: Optional[str] = Field(None, min_length=1, max_length=36)
    program_id: Optional[str] = Field(None, min_length=1, max_length=36)

    model_config = ConfigDict(use_enum_values=True)

class LeadGet(BaseEntityGet):
    id: str
    title: str
    description: str
    response: Optional[str] = None
    status: LeadStatusEnum
    priority: LeadPriorityEnum
    source: Optional[str] = None
    department_id: Optional[str] = None
    section_id: Optional[str] = None
    program_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class LeadList(BaseEntityList):
    id: str
    title: str
    status: LeadStatusEnum
    priority: LeadPriorityEnum
    source: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class LeadUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    response: Optional[str] = Field(None, max_length=2000)
    status: Optional[LeadStatusEnum] = None
    priority: Optional[LeadPriorityEnum] = None
    source: Optional[str] = Field(None, max_length=100)
    department_id: Optional[str] = Field(None, min_length=1, max_length=36)
    section_id: Optional[str] = Field(None, min_length=1, max_length=36)
    program_id: Optional[str] = Field(None, min_length=1, max_length=36)

    model_config = ConfigDict(use_enum_values=True)

class LeadQuery(ListQuery):
    title: Optional[str] = None
    status: Optional[LeadStatusEnum] = None
    priority: Optional[LeadPriorityEnum] = None
    source: Optional[str] = None
    department_id: Optional[str] = None

def lead_search(db: Session, query, params: Optional[LeadQuery]):
    if params.title != None:
        query = query.filter(Lead.title.ilike(f"%{params.title}%"))
    if params.status != None:
        query = query.filter(Lead.status == params.status.value)
    if params.priority != None:
        query = query.filter(Lead.priority == params.priority.value)
    if params.source != None:
        query = query.filter(Lead.source == params.source)
    if params.department_id != None:
        query = query.filter(Lead.department_id == params.department_id)
    return query

class LeadInterface(EntityInterface):
    create = LeadCreate
    get = LeadGet
    list = LeadList
    update = LeadUpdate
    query = LeadQuery
    search = lead_search
    endpoint = "leads"
    model = Lead
    resource = "leads"
    label = "Lead"
    references = {
        "department_id": (Department, "Department", "name"),
        "section_id": (Section, "Section", "name"),
        "program_id": (Program, "Program", "name"),
    }
