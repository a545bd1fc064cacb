from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Index, String, true
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class Madrasa(Base):
    __tablename__ = 'madrasa'

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    name = Column(String(200), nullable=False, index=True)
    reg_no = Column(String(50))
    address = Column(String(1024))
    remarks = Column(String(4096))
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    curriculum_assignments = relationship('MadrasaCurriculumAssignment', back_populates='madrasa', uselist=True, lazy='select')


class Curriculum(Base):
    __tablename__ = 'curriculum'
    __table_args__ = (
        Index('curriculum_title_status_key', 'title', 'status', 'is_active'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    title = Column(String(255), nullable=False)
    description = Column(String(4096))
    status = Column(Enum('active', 'inactive', 'draft', name='curriculum_status'), nullable=False, default='draft')
    remarks = Column(String(4096))
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    madrasa_assignments = relationship('MadrasaCurriculumAssignment', back_populates='curriculum', uselist=True, lazy='select')
    subject_assignments = relationship('CurriculumSubjectAssignment', back_populates='curriculum', uselist=True, lazy='select')


class Subject(Base):
    __tablename__ = 'subject'
    __table_args__ = (
        Index('subject_subject_class_key', 'subject', 'added_for_class', 'is_active'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    subject = Column(String(255), nullable=False)
    added_on_date = Column(Date)
    added_for_class = Column(String(255), nullable=False)
    added_for_agegroup = Column(String(255), nullable=False)
    remarks = Column(String(4096))
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    curriculum_assignments = relationship('CurriculumSubjectAssignment', back_populates='subject', uselist=True, lazy='select')
