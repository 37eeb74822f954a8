"""
Profile model — tenant configuration discriminated by business / political mode.
"""
import json
from typing import List

from sqlalchemy import Column, Text, Boolean, DateTime, JSON
from sqlalchemy.sql import func

from outreach_engine.database import Base


# Fields that only make sense for one mode; the other mode expects them null.
BUSINESS_FIELDS = ('service_offerings', 'price_objections')
POLITICAL_FIELDS = (
    'riding_name',
    'riding_code',
    'geographic_focus',
    'policy_pillars',
    'policy_objections',
    'candidate_name',
    'candidate_party',
    'voting_record_url',
    'exhaustion_gap',
)


def as_list(value) -> List[str]:
    """
    Coerce a list-valued profile field into a list of non-empty strings.

    Older rows store these as a JSON-encoded string or newline-separated text.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    text = str(value).strip()
    if not text:
        return []
    if text.startswith('['):
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return as_list(parsed)
    return [line.strip() for line in text.splitlines() if line.strip()]


class Profile(Base):
    __tablename__ = 'profiles'

    id = Column(Text, primary_key=True)
    tenant_id = Column(Text, nullable=True)
    name = Column(Text, nullable=False)
    mode = Column(Text, nullable=False, default='business')
    is_active = Column(Boolean, default=True)
    industry_context = Column(Text, nullable=True)
    target_persona = Column(Text, nullable=True)
    knowledge_base = Column(JSON, nullable=True)

    # business
    service_offerings = Column(JSON, nullable=True)
    price_objections = Column(JSON, nullable=True)

    # political
    riding_name = Column(Text, nullable=True)
    riding_code = Column(Text, nullable=True)
    geographic_focus = Column(JSON, nullable=True)
    policy_pillars = Column(JSON, nullable=True)
    policy_objections = Column(JSON, nullable=True)
    candidate_name = Column(Text, nullable=True)
    candidate_party = Column(Text, nullable=True)
    voting_record_url = Column(Text, nullable=True)
    exhaustion_gap = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def is_political(self) -> bool:
        return self.mode == 'political'

    def inactive_mode_fields(self) -> List[str]:
        """Names of populated fields that belong to the mode this profile is not in."""
        inactive = BUSINESS_FIELDS if self.is_political else POLITICAL_FIELDS
        populated = []
        for name in inactive:
            value = getattr(self, name)
            if value not in (None, '', [], {}):
                populated.append(name)
        return populated
