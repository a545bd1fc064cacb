from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, true
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class Department(Base):
    __tablename__ = 'department'

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500))
    is_active = Column(Boolean, nullable=False, default=True, server_default=true(), index=True)

    sections = relationship('Section', back_populates='department', uselist=True, lazy='select')


class Section(Base):
    __tablename__ = 'section'
    __table_args__ = (
        Index('section_name_department_key', 'name', 'department_id'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    name = Column(String(100), nullable=False)
    description = Column(String(500))
    department_id = Column(ForeignKey('department.id', ondelete='RESTRICT'), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true(), index=True)

    department = relationship('Department', back_populates='sections')


class Program(Base):
    __tablename__ = 'program'

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500))
    is_active = Column(Boolean, nullable=False, default=True, server_default=true(), index=True)
