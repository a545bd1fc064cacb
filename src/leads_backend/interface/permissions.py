from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from sqlalchemy.orm import Session
from leads_backend.interface.base import BaseEntityGet, EntityInterface, ListQuery
from leads_backend.model.role import Permission

class ResourceEnum(str, Enum):
    users = "users"
    leads = "leads"
    departments = "departments"
    sections = "sections"
    programs = "programs"
    roles = "roles"
    permissions = "permissions"
    inbox = "inbox"
    madaris = "madaris"

class ActionEnum(str, Enum):
    create = "create"
    read = "read"
    update = "update"
    delete = "delete"
    manage = "manage"

class PermissionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50, description="Unique permission name")
    description: Optional[str] = Field(None, max_length=200)
    resource: ResourceEnum
    action: ActionEnum

    model_config = ConfigDict(use_enum_values=True)

class PermissionGet(BaseEntityGet):
    id: str
    name: str
    description: Optional[str] = None
    resource: ResourceEnum
    action: ActionEnum

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class PermissionList(BaseModel):
    id: str
    name: str
    resource: ResourceEnum
    action: ActionEnum
    is_active: bool

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class PermissionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)

class PermissionQuery(ListQuery):
    name: Optional[str] = None
    resource: Optional[ResourceEnum] = None
    action: Optional[ActionEnum] = None

def permission_search(db: Session, query, params: Optional[PermissionQuery]):
    if params.name != None:
        query = query.filter(Permission.name == params.name)
    if params.resource != None:
        query = query.filter(Permission.resource == params.resource.value)
    if params.action != None:
        query = query.filter(Permission.action == params.action.value)
    return query

class PermissionInterface(EntityInterface):
    create = PermissionCreate
    get = PermissionGet
    list = PermissionList
    update = PermissionUpdate
    query = PermissionQuery
    search = permission_search
    endpoint = "permissions"
    model = Permission
    resource = "permissions"
    label = "Permission"
