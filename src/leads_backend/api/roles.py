from typing import Annotated, List
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from leads_backend.database import get_db
from leads_backend.errors import ReferenceInactive, ReferenceNotFound
from leads_backend.interface.roles import RoleCreate, RoleGet, RoleList, RoleQuery, RoleUpdate, role_search
from leads_backend.model.role import Permission, Role
from leads_backend.permissions.auth import requires
from leads_backend.permissions.principal import Principal
from leads_backend.repositories.base import SoftDeleteRepository

role_router = APIRouter()

def _roles(db: Session) -> SoftDeleteRepository:
    return SoftDeleteRepository(db, Role, "Role")

def _resolve_permissions(db: Session, permission_ids: List[str]) -> List[Permission]:
    resolved = []
    for permission_id in dict.fromkeys(permission_ids):
        permission = db.query(Permission).filter(Permission.id == permission_id).first()
        if permission is None:
            raise ReferenceNotFound("Permission", permission_id)
        if not permission.is_active:
            raise ReferenceInactive("Permission", permission_id, permission.name)
        resolved.append(permission)
    return resolved

@role_router.get("", response_model=list[RoleList])
def list_roles(
    permissions: Annotated[Principal, Depends(requires("roles", "read"))],
    response: Response,
    db: Session = Depends(get_db),
    params: RoleQuery = Depends()
):
    query = role_search(db, _roles(db).query_active(), params)

    response.headers["X-Total-Count"] = str(query.count())

    return query.order_by(Role.name).offset(params.skip).limit(params.limit).all()

@role_router.get("/{role_id}", response_model=RoleGet)
def get_role(permissions: Annotated[Principal, Depends(requires("roles", "read"))], role_id: str, db: Session = Depends(get_db)):
    return _roles(db).get_active(role_id)

@role_router.post("", response_model=RoleGet, status_code=201)
def create_role(permissions: Annotated[Principal, Depends(requires("roles", "create"))], entity: RoleCreate, db: Session = Depends(get_db)):

    role = Role(name=entity.name, description=entity.description)
    role.permissions = _resolve_permissions(db, entity.permission_ids)

    return _roles(db).create(role, permissions.user_id)

@role_router.patch("/{role_id}", response_model=RoleGet)
def update_role(permissions: Annotated[Principal, Depends(requires("roles", "update"))], role_id: str, entity: RoleUpdate, db: Session = Depends(get_db)):

    updates = entity.model_dump(exclude_unset=True, exclude_none=True)
    permission_ids = updates.pop("permission_ids", None)

    if permission_ids is not None:
        updates["permissions"] = _resolve_permissions(db, permission_ids)

    return _roles(db).update(role_id, updates, permissions.user_id)

@role_router.delete("/{role_id}", status_code=204)
def deactivate_role(permissions: Annotated[Principal, Depends(requires("roles", "delete"))], role_id: str, db: Session = Depends(get_db)):
    # Users keep their role_id; an inactive role grants nothing
    _roles(db).deactivate(role_id, permissions.user_id)

@role_router.patch("/{role_id}/reactivate", response_model=RoleGet)
def reactivate_role(permissions: Annotated[Principal, Depends(requires("roles", "update"))], role_id: str, db: Session = Depends(get_db)):
    return _roles(db).reactivate(role_id, permissions.user_id)
