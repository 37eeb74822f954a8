"""
ActivityEvent model — append-only feed of what agents did.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from outreach_engine.database import Base


class ActivityEvent(Base):
    __tablename__ = 'activity_events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_id = Column(Text, ForeignKey('profiles.id'), nullable=False, index=True)
    agent_run_id = Column(Text, ForeignKey('agent_runs.id'), nullable=True)
    contact_id = Column(Text, ForeignKey('contacts.id'), nullable=True)
    event_type = Column(Text, nullable=False)
    icon = Column(Text, default='bi-circle')
    color = Column(Text, default='muted')
    title = Column(Text, nullable=False)
    detail = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
