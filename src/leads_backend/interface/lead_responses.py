from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from leads_backend.interface.leads import LeadList

class LeadResponseCreate(BaseModel):
    message: str = Field(min_length=1, max_length=4096)
    target_user_id: Optional[str] = Field(None, min_length=1, max_length=36, description="User the message is addressed to")
    is_internal: bool = False

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        if not v.strip():
            raise ValueError('Message is required')
        return v.strip()

class LeadResponseGet(BaseModel):
    id: str
    lead_id: str
    user_id: str
    target_user_id: Optional[str] = None
    message: str
    is_internal: bool
    is_read_by_creator: bool
    read_by_creator_at: Optional[datetime] = None
    is_read_by_target: bool
    read_by_target_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class LeadResponsesRead(BaseModel):
    response_ids: List[str] = Field(min_length=1, description="Responses of the lead to mark as read")

class InboxLead(LeadList):
    unread_responses: int = Field(0, description="Responses on the lead the caller has not read yet")
