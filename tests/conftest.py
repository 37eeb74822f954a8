"""Shared test fixtures."""
import json
import uuid

import pytest
from unittest.mock import patch, MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from outreach_engine.database import Base
from outreach_engine.providers.completion import Completion
from outreach_engine.providers.registry import Providers


# Modules that bind `get_session` at import time
_SESSION_USERS = [
    'outreach_engine.services.ledger',
    'outreach_engine.services.activity',
    'outreach_engine.services.sentiment',
    'outreach_engine.services.contacts',
    'outreach_engine.services.integrations',
    'outreach_engine.services.runner',
]


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    import outreach_engine.models.profile
    import outreach_engine.models.contact
    import outreach_engine.models.agent_run
    import outreach_engine.models.activity_event
    import outreach_engine.models.sentiment_reading
    import outreach_engine.models.integration
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Session for test setup and assertions. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_engine):
    """
    Route every service's get_session() to a fresh session on the test engine.

    Each call returns a new session so close() inside production code does not
    destroy the shared in-memory database.
    """
    import importlib
    TestSession = sessionmaker(bind=db_engine)
    patchers = []
    for name in _SESSION_USERS:
        importlib.import_module(name)
        p = patch(f'{name}.get_session', side_effect=lambda: TestSession())
        p.start()
        patchers.append(p)
    yield TestSession
    for p in patchers:
        p.stop()


@pytest.fixture
def make_profile(db_session):
    """Factory fixture — inserts a Profile row and returns it."""
    from outreach_engine.models.profile import Profile

    def _make(mode='business', **overrides):
        defaults = dict(
            id=str(uuid.uuid4()),
            tenant_id='tenant-1',
            name='Test Profile',
            mode=mode,
            is_active=True,
            industry_context='Emergency plumbing in Oakville. 24/7 service.',
            target_persona='Homeowners with urgent plumbing problems',
            knowledge_base=[],
        )
        if mode == 'business':
            defaults.update(
                service_offerings=['drain cleaning', 'water heater repair', 'sump pumps'],
                price_objections=['too expensive'],
            )
        else:
            defaults.update(
                industry_context='Campaign for Ottawa Centre',
                target_persona='Renters and young families',
                riding_name='Ottawa Centre',
                riding_code='35077',
                policy_pillars=['housing', 'transit', 'child care'],
                policy_objections=['tax increases'],
                candidate_name='Jane Doe',
                candidate_party='Independent',
                exhaustion_gap='Voters are tired of attack ads',
            )
        defaults.update(overrides)
        profile = Profile(**defaults)
        db_session.add(profile)
        db_session.commit()
        return profile
    return _make


@pytest.fixture
def make_contact(db_session):
    """Factory fixture — inserts a Contact row for a profile."""
    from outreach_engine.models.contact import Contact

    def _make(profile_id, **overrides):
        defaults = dict(
            id=str(uuid.uuid4()),
            profile_id=profile_id,
            first_name='Sam',
            last_name='Lee',
            email='sam@example.com',
            lead_status='cold',
            voter_intent='unknown',
            donor_intent='none',
        )
        defaults.update(overrides)
        contact = Contact(**defaults)
        db_session.add(contact)
        db_session.commit()
        return contact
    return _make


@pytest.fixture
def make_integration(db_session):
    """Factory fixture — inserts a verified Integration row."""
    from outreach_engine.models.integration import Integration

    def _make(profile_id, provider='nationbuilder', **overrides):
        defaults = dict(
            id=str(uuid.uuid4()),
            profile_id=profile_id,
            provider=provider,
            access_token='tok',
            extra_config={'slug': 'campaign'},
            is_verified=True,
        )
        defaults.update(overrides)
        integration = Integration(**defaults)
        db_session.add(integration)
        db_session.commit()
        return integration
    return _make


@pytest.fixture
def providers():
    """Providers container with mock completion/discovery backends."""
    completion = MagicMock()
    completion.name = 'openai'
    completion.complete.return_value = Completion(text='ok', tokens_used=42)
    discovery = MagicMock()
    discovery.name = 'basic'
    return Providers(completion=completion, discovery=discovery)


@pytest.fixture
def leads_json():
    """Serialize a list of lead dicts the way a model would return them."""
    def _dump(leads):
        return json.dumps(leads)
    return _dump
