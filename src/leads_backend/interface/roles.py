from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from sqlalchemy.orm import Session
from leads_backend.interface.base import BaseEntityGet, ListQuery
from leads_backend.interface.permissions import PermissionList
from leads_backend.model.role import Role

class RoleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50, description="Unique role name")
    description: Optional[str] = Field(None, max_length=200, description="Role description")
    permission_ids: List[str] = Field(default_factory=list, description="Permissions granted by the role")

class RoleGet(BaseEntityGet):
    id: str = Field(description="Role unique identifier")
    name: str = Field(description="Role name")
    description: Optional[str] = Field(None, description="Role description")
    permissions: List[PermissionList] = Field(default=[], description="Permissions granted by the role")

    model_config = ConfigDict(from_attributes=True)

class RoleList(BaseModel):
    id: str = Field(description="Role unique identifier")
    name: str = Field(description="Role name")
    description: Optional[str] = Field(None, description="Role description")
    is_active: bool

    model_config = ConfigDict(from_attributes=True)

class RoleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    permission_ids: Optional[List[str]] = Field(None, description="Replaces the role's permission set when given")

class RoleQuery(ListQuery):
    name: Optional[str] = Field(None, description="Filter by role name")

def role_search(db: Session, query, params: Optional[RoleQuery]):
    if params.name != None:
        query = query.filter(Role.name == params.name)
    return query
