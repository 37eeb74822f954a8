"""
Integration lookup — read access to a profile's CRM credentials, plus the
connection test that flips is_verified.
"""
import logging
from datetime import datetime, timezone

from outreach_engine.database import get_session
from outreach_engine.models.integration import Integration
from outreach_engine.providers.registry import check_integration

logger = logging.getLogger('services.integrations')


def get_verified_integration(profile_id, provider=None):
    """First verified Integration for the profile (optionally of one provider), or None."""
    session = get_session()
    try:
        query = session.query(Integration).filter_by(profile_id=profile_id, is_verified=True)
        if provider:
            query = query.filter_by(provider=provider)
        integration = query.order_by(Integration.created_at).first()
        if integration is not None:
            session.expunge(integration)
        return integration
    finally:
        session.close()


def verify_integration(integration_id):
    """
    Test the stored credentials and record the outcome.

    Returns the {success, message} dict from the connection test, or None if
    the integration does not exist.
    """
    session = get_session()
    try:
        integration = session.get(Integration, integration_id)
        if integration is None:
            return None
        result = check_integration(integration)
        integration.is_verified = result['success']
        integration.last_tested_at = datetime.now(timezone.utc)
        session.commit()
        logger.info("Integration %s (%s) tested: %s", integration_id, integration.provider, result['message'])
        return result
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
