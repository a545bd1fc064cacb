from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey, Index, String, Table, true
)
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow

RESOURCES = (
    'users', 'leads', 'departments', 'sections', 'programs',
    'roles', 'permissions', 'inbox', 'madaris',
)
ACTIONS = ('create', 'read', 'update', 'delete', 'manage')


role_permission = Table(
    'role_permission',
    Base.metadata,
    Column('role_id', ForeignKey('role.id', ondelete='CASCADE'), primary_key=True, nullable=False),
    Column('permission_id', ForeignKey('permission.id', ondelete='CASCADE'), primary_key=True, nullable=False),
)


class Role(Base):
    __tablename__ = 'role'

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(200))
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    # Relationships
    permissions = relationship('Permission', secondary=role_permission, back_populates='roles', lazy='select')
    users = relationship('User', back_populates='role', lazy='select')


class Permission(Base):
    __tablename__ = 'permission'
    __table_args__ = (
        Index('permission_resource_action_key', 'resource', 'action', unique=True),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(200))
    resource = Column(Enum(*RESOURCES, name='permission_resource'), nullable=False)
    action = Column(Enum(*ACTIONS, name='permission_action'), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true(), index=True)

    roles = relationship('Role', secondary=role_permission, back_populates='permissions', lazy='select')
