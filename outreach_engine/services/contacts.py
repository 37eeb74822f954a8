"""
Contact persistence — creation from discovered leads and intent transitions.
"""
import logging
import uuid
from typing import Optional

from outreach_engine.database import get_session
from outreach_engine.models.contact import Contact

logger = logging.getLogger('services.contacts')

# donor_intent values that an ask promotes to 'warm'
PROMOTABLE_DONOR_INTENTS = ('none', 'potential')


def create_contact(profile_id: str, **fields) -> Contact:
    """Insert a Contact and return it (detached, attributes loaded)."""
    session = get_session()
    try:
        contact = Contact(id=str(uuid.uuid4()), profile_id=profile_id, **fields)
        session.add(contact)
        session.commit()
        session.refresh(contact)
        session.expunge(contact)
        return contact
    except Exception:
        session.rollback()
        logger.error("Failed to create contact for profile %s", profile_id, exc_info=True)
        raise
    finally:
        session.close()


def get_contact(contact_id: str) -> Optional[Contact]:
    if not contact_id:
        return None
    session = get_session()
    try:
        contact = session.get(Contact, contact_id)
        if contact is not None:
            session.expunge(contact)
        return contact
    finally:
        session.close()


def promote_donor_intent(contact_id: str) -> bool:
    """
    Move donor_intent none/potential → warm. Returns True if the row changed.

    No locking: a concurrent writer to the same contact may overwrite this.
    """
    session = get_session()
    try:
        contact = session.get(Contact, contact_id)
        if contact is None or (contact.donor_intent or 'none') not in PROMOTABLE_DONOR_INTENTS:
            return False
        contact.donor_intent = 'warm'
        session.commit()
        return True
    except Exception:
        session.rollback()
        logger.error("Failed to promote donor intent for contact %s", contact_id, exc_info=True)
        raise
    finally:
        session.close()


def set_external_id(contact_id: str, external_id: str):
    """Remember the CRM-side id after a successful push."""
    session = get_session()
    try:
        contact = session.get(Contact, contact_id)
        if contact is not None:
            contact.external_id = external_id
            session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to store external id for contact %s", contact_id, exc_info=True)
    finally:
        session.close()
