"""
Integration model — per-profile CRM credential set.
"""
from sqlalchemy import Column, Text, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func

from outreach_engine.database import Base


class Integration(Base):
    __tablename__ = 'integrations'

    id = Column(Text, primary_key=True)
    profile_id = Column(Text, ForeignKey('profiles.id'), nullable=False, index=True)
    provider = Column(Text, nullable=False)
    api_key = Column(Text, nullable=True)
    api_secret = Column(Text, nullable=True)
    access_token = Column(Text, nullable=True)
    refresh_token = Column(Text, nullable=True)
    endpoint_url = Column(Text, nullable=True)
    extra_config = Column(JSON, nullable=True)
    is_verified = Column(Boolean, default=False)
    last_tested_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def config_value(self, key, default=None):
        return (self.extra_config or {}).get(key) or default
