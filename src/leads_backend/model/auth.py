from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, true
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class User(Base):
    __tablename__ = 'user'

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    password = Column(String(1024))
    role_id = Column(ForeignKey('role.id', ondelete='RESTRICT', onupdate='CASCADE'), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    last_login = Column(DateTime(True))

    # Relationships
    role = relationship('Role', back_populates='users', lazy='select')
    lead_assignments = relationship('LeadUserAssignment', back_populates='user', uselist=True, lazy='select')
