from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Enum, Index, String, Text, true
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow

LEAD_STATUSES = ('new', 'contacted', 'qualified', 'proposal', 'negotiation', 'closed-won', 'closed-lost')
LEAD_PRIORITIES = ('low', 'medium', 'high', 'urgent')


class Lead(Base):
    __tablename__ = 'lead'

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(36))
    updated_by = Column(String(36))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    response = Column(Text)
    status = Column(Enum(*LEAD_STATUSES, name='lead_status'), nullable=False, default='new')
    priority = Column(Enum(*LEAD_PRIORITIES, name='lead_priority'), nullable=False, default='medium')
    source = Column(String(100))
    department_id = Column(ForeignKey('department.id', ondelete='RESTRICT'), index=True)
    section_id = Column(ForeignKey('section.id', ondelete='RESTRICT'))
    program_id = Column(ForeignKey('program.id', ondelete='RESTRICT'))
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    user_assignments = relationship('LeadUserAssignment', back_populates='lead', uselist=True, lazy='select')
    responses = relationship('LeadResponse', back_populates='lead', uselist=True, lazy='select')


class LeadResponse(Base):
    """Message in a lead's conversation, optionally addressed to one user."""
    __tablename__ = 'lead_response'
    __table_args__ = (
        Index('lead_response_lead_created_key', 'lead_id', 'created_at'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    lead_id = Column(ForeignKey('lead.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(ForeignKey('user.id', ondelete='RESTRICT'), nullable=False, index=True)
    target_user_id = Column(ForeignKey('user.id', ondelete='SET NULL'), index=True)
    message = Column(Text, nullable=False)
    is_internal = Column(Boolean, nullable=False, default=False)
    is_read_by_creator = Column(Boolean, nullable=False, default=False)
    read_by_creator_at = Column(DateTime(True))
    is_read_by_target = Column(Boolean, nullable=False, default=False)
    read_by_target_at = Column(DateTime(True))

    lead = relationship('Lead', back_populates='responses')
