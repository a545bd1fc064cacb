from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from leads_backend.interface.base import ListQuery

class SortOrderEnum(str, Enum):
    asc = "asc"
    desc = "desc"

class AssignmentQuery(ListQuery):
    order: SortOrderEnum = Field(SortOrderEnum.desc, description="Order by creation time")

class AssignmentGet(BaseModel):
    id: str
    is_active: bool
    assigned_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

# madrasa -> curriculum

class MadrasaCurriculumAssignmentCreate(BaseModel):
    madrasa_id: str = Field(min_length=1, max_length=36)
    curriculum_id: str = Field(min_length=1, max_length=36)

class MadrasaCurriculumAssignmentGet(AssignmentGet):
    madrasa_id: str
    curriculum_id: str

class MadrasaCurriculumAssignmentQuery(AssignmentQuery):
    madrasa_id: Optional[str] = None
    curriculum_id: Optional[str] = None

# curriculum -> subject

class CurriculumSubjectAssignmentCreate(BaseModel):
    curriculum_id: str = Field(min_length=1, max_length=36)
    subject_id: str = Field(min_length=1, max_length=36)

class CurriculumSubjectAssignmentGet(AssignmentGet):
    curriculum_id: str
    subject_id: str

class CurriculumSubjectAssignmentQuery(AssignmentQuery):
    curriculum_id: Optional[str] = None
    subject_id: Optional[str] = None

# lead -> assigned user

class LeadAssigneeCreate(BaseModel):
    user_id: str = Field(min_length=1, max_length=36)

class LeadAssigneeGet(AssignmentGet):
    lead_id: str
    user_id: str

class LeadAssigneeQuery(AssignmentQuery):
    user_id: Optional[str] = None
