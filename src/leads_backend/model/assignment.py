from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, true
from sqlalchemy.orm import relationship

from .base import Base, active_unique_index, generate_id, utcnow


class MadrasaCurriculumAssignment(Base):
    __tablename__ = 'madrasa_curriculum_assignment'
    __table_args__ = (
        active_unique_index('madrasa_curriculum_assignment_active_key', 'madrasa_id', 'curriculum_id'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    madrasa_id = Column(ForeignKey('madrasa.id', ondelete='RESTRICT'), nullable=False, index=True)
    curriculum_id = Column(ForeignKey('curriculum.id', ondelete='RESTRICT'), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    assigned_date = Column(DateTime(True), nullable=False, default=utcnow)

    madrasa = relationship('Madrasa', back_populates='curriculum_assignments')
    curriculum = relationship('Curriculum', back_populates='madrasa_assignments')


class CurriculumSubjectAssignment(Base):
    __tablename__ = 'curriculum_subject_assignment'
    __table_args__ = (
        active_unique_index('curriculum_subject_assignment_active_key', 'curriculum_id', 'subject_id'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    curriculum_id = Column(ForeignKey('curriculum.id', ondelete='RESTRICT'), nullable=False, index=True)
    subject_id = Column(ForeignKey('subject.id', ondelete='RESTRICT'), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    assigned_date = Column(DateTime(True), nullable=False, default=utcnow)

    curriculum = relationship('Curriculum', back_populates='subject_assignments')
    subject = relationship('Subject', back_populates='curriculum_assignments')


class LeadUserAssignment(Base):
    __tablename__ = 'lead_user_assignment'
    __table_args__ = (
        active_unique_index('lead_user_assignment_active_key', 'lead_id', 'user_id'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    lead_id = Column(ForeignKey('lead.id', ondelete='RESTRICT'), nullable=False, index=True)
    user_id = Column(ForeignKey('user.id', ondelete='RESTRICT'), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    assigned_date = Column(DateTime(True), nullable=False, default=utcnow)

    lead = relationship('Lead', back_populates='user_assignments')
    user = relationship('User', back_populates='lead_assignments')
