from abc import ABC
from datetime import datetime
from typing import Optional, Any
from pydantic import BaseModel, Field

class ListQuery(BaseModel):
    skip: Optional[int] = Field(0, ge=0)
    limit: Optional[int] = Field(100, ge=1, le=1000)

class EntityInterface(ABC):
    create: BaseModel = None
    get: BaseModel = None
    list: BaseModel = None
    update: BaseModel = None
    query: BaseModel = None
    search: Any = None
    endpoint: str = None
    model: Any = None

    # Permission resource guarding the entity's routes
    resource: str = None
    label: str = None

    # Foreign key fields checked before writes: field -> (model, label, display attribute)
    references: dict = {}

    @classmethod
    def entity_label(cls) -> str:
        return cls.label or cls.model.__name__

class BaseEntityList(BaseModel):
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Update timestamp")

class BaseEntityGet(BaseEntityList):
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    is_active: bool = Field(True, description="False once the entity has been deactivated")
