"""
Contact model — a discovered lead (business) or constituent (political).
"""
from sqlalchemy import Column, Integer, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func

from outreach_engine.database import Base


class Contact(Base):
    __tablename__ = 'contacts'

    id = Column(Text, primary_key=True)
    profile_id = Column(Text, ForeignKey('profiles.id'), nullable=False, index=True)
    external_id = Column(Text, nullable=True)  # id in the synced CRM, if any
    first_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    social_handle = Column(Text, nullable=True)
    profile_url = Column(Text, nullable=True)
    source = Column(Text, nullable=True)
    company = Column(Text, nullable=True)
    job_title = Column(Text, nullable=True)
    lead_score = Column(Integer, default=0)
    lead_status = Column(Text, default='cold')

    # political
    riding = Column(Text, nullable=True)
    voter_intent = Column(Text, default='unknown')
    donor_intent = Column(Text, default='none')
    issues_care = Column(JSON, nullable=True)
    support_level = Column(Integer, default=0)

    tags = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def full_name(self) -> str:
        return ' '.join(p for p in (self.first_name, self.last_name) if p) or 'Unknown'

    def to_dict(self):
        return {
            'id': self.id,
            'profile_id': self.profile_id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'social_handle': self.social_handle,
            'profile_url': self.profile_url,
            'source': self.source,
            'company': self.company,
            'job_title': self.job_title,
            'lead_score': self.lead_score,
            'lead_status': self.lead_status,
            'riding': self.riding,
            'voter_intent': self.voter_intent,
            'donor_intent': self.donor_intent,
            'support_level': self.support_level,
            'tags': self.tags or [],
            'notes': self.notes,
        }
