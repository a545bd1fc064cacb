from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from sqlalchemy.orm import Session
from leads_backend.interface.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from leads_backend.model.organization import Department, Program, Section

# Department

class DepartmentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class DepartmentGet(BaseEntityGet):
    id: str
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class DepartmentList(BaseEntityList):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)

class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class DepartmentQuery(ListQuery):
    name: Optional[str] = None

def department_search(db: Session, query, params: Optional[DepartmentQuery]):
    if params.name != None:
        query = query.filter(Department.name.ilike(f"%{params.name}%"))
    return query

class DepartmentInterface(EntityInterface):
    create = DepartmentCreate
    get = DepartmentGet
    list = DepartmentList
    update = DepartmentUpdate
    query = DepartmentQuery
    search = department_search
    endpoint = "departments"
    model = Department
    resource = "departments"
    label = "Department"

# Section

class SectionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    department_id: str = Field(min_length=1, max_length=36)

class SectionGet(BaseEntityGet):
    id: str
    name: str
    description: Optional[str] = None
    department_id: str

    model_config = ConfigDict(from_attributes=True)

class SectionList(BaseEntityList):
    id: str
    name: str
    department_id: str

    model_config = ConfigDict(from_attributes=True)

class SectionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    department_id: Optional[str] = Field(None, min_length=1, max_length=36)

class SectionQuery(ListQuery):
    name: Optional[str] = None
    department_id: Optional[str] = None

def section_search(db: Session, query, params: Optional[SectionQuery]):
    if params.name != None:
        query = query.filter(Section.name.ilike(f"%{params.name}%"))
    if params.department_id != None:
        query = query.filter(Section.department_id == params.department_id)
    return query

class SectionInterface(EntityInterface):
    create = SectionCreate
    get = SectionGet
    list = SectionList
    update = SectionUpdate
    query = SectionQuery
    search = section_search
    endpoint = "sections"
    model = Section
    resource = "sections"
    label = "Section"
    references = {
        "department_id": (Department, "Department", "name"),
    }

# Program

class ProgramCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class ProgramGet(BaseEntityGet):
    id: str
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class ProgramList(BaseEntityList):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)

class ProgramUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class ProgramQuery(ListQuery):
    name: Optional[str] = None

def program_search(db: Session, query, params: Optional[ProgramQuery]):
    if params.name != None:
        query = query.filter(Program.name.ilike(f"%{params.name}%"))
    return query

class ProgramInterface(EntityInterface):
    create = ProgramCreate
    get = ProgramGet
    list = ProgramList
    update = ProgramUpdate
    query = ProgramQuery
    search = program_search
    endpoint = "programs"
    model = Program
    resource = "programs"
    label = "Program"
