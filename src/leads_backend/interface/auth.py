from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

class PrincipalGet(BaseModel):
    user_id: str
    email: Optional[str] = None
    role_id: Optional[str] = None
    role_name: Optional[str] = None
    permissions: List[str] = Field(default=[], description="Granted permissions as resource:action")

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    principal: PrincipalGet
