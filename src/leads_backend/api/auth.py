import logging
from typing import Annotated
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from leads_backend.database import get_db
from leads_backend.errors import AccountDeactivated, Unauthenticated
from leads_backend.interface.auth import LoginRequest, LoginResponse, PrincipalGet
from leads_backend.interface.tokens import create_access_token, decrypt_password, encrypt_password
from leads_backend.model.auth import User
from leads_backend.model.base import utcnow
from leads_backend.permissions.auth import PrincipalBuilder, get_current_principal, get_permission_engine
from leads_backend.permissions.core import PermissionEngine
from leads_backend.permissions.principal import Principal
from leads_backend.settings import settings

logger = logging.getLogger(__name__)

auth_router = APIRouter()

def principal_to_get(principal: Principal) -> PrincipalGet:
    return PrincipalGet(
        user_id=principal.user_id,
        email=principal.email,
        role_id=principal.role_id,
        role_name=principal.role_name,
        permissions=principal.claims.as_list() if principal.claims is not None else [],
    )

@auth_router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    db: Session = Depends(get_db)
):
    """Exchange email and password for a bearer token"""

    user = db.query(User).filter(User.email == credentials.email.lower()).first()

    if user is None or user.password is None or decrypt_password(user.password) != credentials.password:
        logger.info(f"Failed login for {credentials.email}")
        raise Unauthenticated("Invalid credentials")

    if not user.is_active:
        raise AccountDeactivated()

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)

    principal = engine.ensure_loaded(PrincipalBuilder.build(user))

    return LoginResponse(
        access_token=create_access_token(user.id),
        expires_in=settings.TOKEN_EXPIRATION_SECONDS,
        principal=principal_to_get(principal),
    )

@auth_router.get("/me", response_model=PrincipalGet)
def get_me(principal: Annotated[Principal, Depends(get_current_principal)]):
    """The authenticated user with role and granted permissions"""
    return principal_to_get(principal)

class PasswordChange(BaseModel):
    current_password: str = Field(min_length=1, max_length=128)
    new_password: str = Field(min_length=6, max_length=128)

@auth_router.post("/password", status_code=204)
def change_password(
    principal: Annotated[Principal, Depends(get_current_principal)],
    payload: PasswordChange,
    db: Session = Depends(get_db)
):
    user = db.query(User).filter(User.id == principal.user_id).first()

    if user.password is None or decrypt_password(user.password) != payload.current_password:
        raise Unauthenticated("Current password is incorrect")

    user.password = encrypt_password(payload.new_password)
    user.updated_by = principal.user_id
    db.commit()
