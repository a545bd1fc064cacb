from datetime import date
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from sqlalchemy.orm import Session
from leads_backend.interface.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from leads_backend.model.madaris import Curriculum, Madrasa, Subject

# Madrasa

class MadrasaCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    reg_no: Optional[str] = Field(None, max_length=50, description="Registration number")
    address: Optional[str] = Field(None, max_length=1024)
    remarks: Optional[str] = Field(None, max_length=4096)

class MadrasaGet(BaseEntityGet):
    id: str
    name: str
    reg_no: Optional[str] = None
    address: Optional[str] = None
    remarks: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class MadrasaList(BaseEntityList):
    id: str
    name: str
    reg_no: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class MadrasaUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    reg_no: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=1024)
    remarks: Optional[str] = Field(None, max_length=4096)

class MadrasaQuery(ListQuery):
    name: Optional[str] = None
    reg_no: Optional[str] = None

def madrasa_search(db: Session, query, params: Optional[MadrasaQuery]):
    if params.name != None:
        query = query.filter(Madrasa.name.ilike(f"%{params.name}%"))
    if params.reg_no != None:
        query = query.filter(Madrasa.reg_no == params.reg_no)
    return query

class MadrasaInterface(EntityInterface):
    create = MadrasaCreate
    get = MadrasaGet
    list = MadrasaList
    update = MadrasaUpdate
    query = MadrasaQuery
    search = madrasa_search
    endpoint = "madaris/madrasas"
    model = Madrasa
    resource = "madaris"
    label = "Madrasa"

# Curriculum

class CurriculumStatusEnum(str, Enum):
    active = "active"
    inactive = "inactive"
    draft = "draft"

class CurriculumCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=4096)
    status: CurriculumStatusEnum = CurriculumStatusEnum.draft
    remarks: Optional[str] = Field(None, max_length=4096)

    model_config = ConfigDict(use_enum_values=True)

class CurriculumGet(BaseEntityGet):
    id: str
    title: str
    description: Optional[str] = None
    status: CurriculumStatusEnum
    remarks: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class CurriculumList(BaseEntityList):
    id: str
    title: str
    status: CurriculumStatusEnum

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class CurriculumUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=4096)
    status: Optional[CurriculumStatusEnum] = None
    remarks: Optional[str] = Field(None, max_length=4096)

    model_config = ConfigDict(use_enum_values=True)

class CurriculumQuery(ListQuery):
    title: Optional[str] = None
    status: Optional[CurriculumStatusEnum] = None

def curriculum_search(db: Session, query, params: Optional[CurriculumQuery]):
    if params.title != None:
        query = query.filter(Curriculum.title.ilike(f"%{params.title}%"))
    if params.status != None:
        query = query.filter(Curriculum.status == params.status.value)
    return query

class CurriculumInterface(EntityInterface):
    create = CurriculumCreate
    get = CurriculumGet
    list = CurriculumList
    update = CurriculumUpdate
    query = CurriculumQuery
    search = curriculum_search
    endpoint = "madaris/curricula"
    model = Curriculum
    resource = "madaris"
    label = "Curriculum"

# Subject

class SubjectCreate(BaseModel):
    subject: str = Field(min_length=1, max_length=255)
    added_on_date: Optional[date] = None
    added_for_class: str = Field(min_length=1, max_length=255)
    added_for_agegroup: str = Field(min_length=1, max_length=255)
    remarks: Optional[str] = Field(None, max_length=4096)

class SubjectGet(BaseEntityGet):
    id: str
    subject: str
    added_on_date: Optional[date] = None
    added_for_class: str
    added_for_agegroup: str
    remarks: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class SubjectList(BaseEntityList):
    id: str
    subject: str
    added_for_class: str
    added_for_agegroup: str

    model_config = ConfigDict(from_attributes=True)

class SubjectUpdate(BaseModel):
    subject: Optional[str] = Field(None, min_length=1, max_length=255)
    added_on_date: Optional[date] = None
    added_for_class: Optional[str] = Field(None, min_length=1, max_length=255)
    added_for_agegroup: Optional[str] = Field(None, min_length=1, max_length=255)
    remarks: Optional[str] = Field(None, max_length=4096)

class SubjectQuery(ListQuery):
    subject: Optional[str] = None
    added_for_class: Optional[str] = None

def subject_search(db: Session, query, params: Optional[SubjectQuery]):
    if params.subject != None:
        query = query.filter(Subject.subject.ilike(f"%{params.subject}%"))
    if params.added_for_class != None:
        query = query.filter(Subject.added_for_class == params.added_for_class)
    return query

class SubjectInterface(EntityInterface):
    create = SubjectCreate
    get = SubjectGet
    list = SubjectList
    update = SubjectUpdate
    query = SubjectQuery
    search = subject_search
    endpoint = "madaris/subjects"
    model = Subject
    resource = "madaris"
    label = "Subject"
