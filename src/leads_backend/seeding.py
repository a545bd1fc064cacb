"""
Idempotent bootstrap of permissions, roles and the first administrator.

Running the same seed twice leaves the database unchanged. Role permission
sets are synchronised with the seed document on every run.
"""

import logging
import os
from typing import Dict, List, Tuple
from sqlalchemy.orm import Session

from leads_backend.errors import ReferenceInactive, ReferenceNotFound
from leads_backend.interface.seed import SeedConfig, read_seed_from_file
from leads_backend.interface.tokens import encrypt_password
from leads_backend.model.auth import User
from leads_backend.model.role import Permission, Role

logger = logging.getLogger(__name__)

DEFAULT_SEED_FILE = os.path.join(os.path.dirname(__file__), "data", "seed.yaml")


def _value(member) -> str:
    return getattr(member, "value", member)


def permission_name(resource: str, action: str) -> str:
    return f"{action.capitalize()} {resource.capitalize()}"


def apply_permissions(db: Session, config: SeedConfig) -> Dict[Tuple[str, str], Permission]:
    existing = {(p.resource, p.action): p for p in db.query(Permission).all()}

    for resource, actions in config.permissions.items():
        for action in actions:
            resource, action = _value(resource), _value(action)
            if (resource, action) in existing:
                continue
            permission = Permission(
                name=permission_name(resource, action),
                description=f"{action.capitalize()} access to {resource}",
                resource=resource,
                action=action,
            )
            db.add(permission)
            existing[(resource, action)] = permission
            logger.info(f"Seeded permission {resource}:{action}")

    db.flush()
    return existing


def apply_roles(db: Session, config: SeedConfig, permissions: Dict[Tuple[str, str], Permission]) -> List[Role]:
    roles = []

    for seed_role in config.roles:
        if seed_role.permissions == "all":
            granted = list(permissions.values())
        else:
            granted = []
            for resource, actions in seed_role.permissions.items():
                for action in actions:
                    resource, action = _value(resource), _value(action)
                    if (resource, action) not in permissions:
                        raise ValueError(f"Role '{seed_role.name}' references undeclared permission {resource}:{action}")
                    granted.append(permissions[(resource, action)])

        role = db.query(Role).filter(Role.name == seed_role.name).first()

        if role is None:
            role = Role(name=seed_role.name, description=seed_role.description)
            db.add(role)
            logger.info(f"Seeded role {seed_role.name}")

        role.permissions = granted
        roles.append(role)

    return roles


def apply_seed(db: Session, config: SeedConfig) -> List[Role]:
    permissions = apply_permissions(db, config)
    roles = apply_roles(db, config, permissions)
    db.commit()
    return roles


def seed_from_file(db: Session, filename: str = DEFAULT_SEED_FILE) -> List[Role]:
    return apply_seed(db, read_seed_from_file(filename))


def init_admin_user(db: Session, email: str, password: str, role_name: str, name: str = "Administrator") -> User:
    """Create the administrator bound to ``role_name`` unless a user with that email exists."""

    admin = db.query(User).filter(User.email == email.lower()).first()

    if admin != None:
        return admin

    role = db.query(Role).filter(Role.name == role_name).first()

    if role is None:
        raise ReferenceNotFound("Role", role_name)
    if not role.is_active:
        raise ReferenceInactive("Role", role.id, role.name)

    admin = User(
        name=name,
        email=email.lower(),
        password=encrypt_password(password),
        role_id=role.id,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info(f"Created administrator {admin.email} with role {role_name}")
    return admin
