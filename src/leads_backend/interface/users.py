from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator
from typing import Optional
from sqlalchemy.orm import Session
from leads_backend.interface.base import BaseEntityGet, ListQuery
from leads_backend.model.auth import User

class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100, description="User's display name")
    email: EmailStr = Field(description="User's email address, used to log in")
    password: str = Field(min_length=6, max_length=128, description="Initial password")
    role_id: str = Field(min_length=1, description="Role assigned to the user")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty or only whitespace')
        return v.strip()

class UserGet(BaseEntityGet):
    id: str = Field(description="User unique identifier")
    name: str = Field(description="User's display name")
    email: str = Field(description="User's email address")
    role_id: str = Field(description="Assigned role")
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class UserList(BaseModel):
    id: str = Field(description="User unique identifier")
    name: str
    email: str
    role_id: str
    is_active: bool
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True)

class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    role_id: Optional[str] = Field(None, min_length=1)

class UserQuery(ListQuery):
    email: Optional[str] = None
    role_id: Optional[str] = None

def user_search(db: Session, query, params: Optional[UserQuery]):
    if params.email != None:
        query = query.filter(User.email == params.email)
    if params.role_id != None:
        query = query.filter(User.role_id == params.role_id)
    return query
