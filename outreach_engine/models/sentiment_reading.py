"""
SentimentReading model — append-only (profile, contact, issue) score series.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from outreach_engine.database import Base


class SentimentReading(Base):
    __tablename__ = 'sentiment_readings'

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_id = Column(Text, ForeignKey('profiles.id'), nullable=False, index=True)
    contact_id = Column(Text, ForeignKey('contacts.id'), nullable=False)
    source = Column(Text, default='agent_interaction')
    issue = Column(Text, nullable=True)
    sentiment_score = Column(Integer, nullable=False, default=0)  # -100..100
    intent_type = Column(Text, nullable=False)  # voter | donor
    raw_signal = Column(Text, nullable=True)
    recorded_at = Column(DateTime(timezone=True), server_default=func.now())
