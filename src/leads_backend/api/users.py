from typing import Annotated
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from leads_backend.database import get_db
from leads_backend.errors import InvalidOperation, ReferenceInactive, ReferenceNotFound
from leads_backend.interface.tokens import encrypt_password
from leads_backend.interface.users import UserCreate, UserGet, UserList, UserQuery, UserUpdate, user_search
from leads_backend.model.auth import User
from leads_backend.model.role import Role
from leads_backend.permissions.auth import requires
from leads_backend.permissions.principal import Principal
from leads_backend.repositories.base import SoftDeleteRepository

user_router = APIRouter()

def _users(db: Session) -> SoftDeleteRepository:
    return SoftDeleteRepository(db, User, "User")

def _check_role(db: Session, role_id: str):
    role = db.query(Role).filter(Role.id == role_id).first()
    if role is None:
        raise ReferenceNotFound("Role", role_id)
    if not role.is_active:
        raise ReferenceInactive("Role", role_id, role.name)
    return role

@user_router.get("", response_model=list[UserList])
def list_users(
    permissions: Annotated[Principal, Depends(requires("users", "read"))],
    response: Response,
    db: Session = Depends(get_db),
    params: UserQuery = Depends()
):
    query = user_search(db, _users(db).query_active(), params)

    response.headers["X-Total-Count"] = str(query.count())

    return query.order_by(User.created_at.desc(), User.id).offset(params.skip).limit(params.limit).all()

@user_router.get("/{user_id}", response_model=UserGet)
def get_user(permissions: Annotated[Principal, Depends(requires("users", "read"))], user_id: str, db: Session = Depends(get_db)):
    return _users(db).get_active(user_id)

@user_router.post("", response_model=UserGet, status_code=201)
def create_user(permissions: Annotated[Principal, Depends(requires("users", "create"))], entity: UserCreate, db: Session = Depends(get_db)):

    _check_role(db, entity.role_id)

    user = User(
        name=entity.name,
        email=entity.email.lower(),
        password=encrypt_password(entity.password),
        role_id=entity.role_id,
    )

    return _users(db).create(user, permissions.user_id)

@user_router.patch("/{user_id}", response_model=UserGet)
def update_user(permissions: Annotated[Principal, Depends(requires("users", "update"))], user_id: str, entity: UserUpdate, db: Session = Depends(get_db)):

    updates = entity.model_dump(exclude_unset=True, exclude_none=True)

    if "role_id" in updates:
        _check_role(db, updates["role_id"])
    if "email" in updates:
        updates["email"] = updates["email"].lower()

    return _users(db).update(user_id, updates, permissions.user_id)

@user_router.delete("/{user_id}", status_code=204)
def deactivate_user(permissions: Annotated[Principal, Depends(requires("users", "delete"))], user_id: str, db: Session = Depends(get_db)):

    if user_id == permissions.user_id:
        raise InvalidOperation("You cannot deactivate your own account")

    _users(db).deactivate(user_id, permissions.user_id)

@user_router.patch("/{user_id}/reactivate", response_model=UserGet)
def reactivate_user(permissions: Annotated[Principal, Depends(requires("users", "update"))], user_id: str, db: Session = Depends(get_db)):
    return _users(db).reactivate(user_id, permissions.user_id)
