"""
AgentRun model — one executor invocation and its audit trail.
"""
from sqlalchemy import Column, Integer, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func

from outreach_engine.database import Base


class AgentRun(Base):
    __tablename__ = 'agent_runs'

    id = Column(Text, primary_key=True)
    profile_id = Column(Text, ForeignKey('profiles.id'), nullable=False, index=True)
    contact_id = Column(Text, ForeignKey('contacts.id'), nullable=True)
    agent_type = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default='queued')
    input_data = Column(JSON, nullable=True)
    output_data = Column(JSON, nullable=True)
    llm_provider = Column(Text, nullable=True)
    tokens_used = Column(Integer, default=0)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'profile_id': self.profile_id,
            'contact_id': self.contact_id,
            'agent_type': self.agent_type,
            'status': self.status,
            'input_data': self.input_data,
            'output_data': self.output_data,
            'llm_provider': self.llm_provider,
            'tokens_used': self.tokens_used or 0,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
        }
