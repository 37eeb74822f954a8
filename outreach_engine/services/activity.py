"""
Activity feed writer.

Append-only, fire-and-forget: a failed insert is logged and never interrupts
the agent that emitted it.
"""
import logging

from outreach_engine.database import get_session
from outreach_engine.models.activity_event import ActivityEvent

logger = logging.getLogger('services.activity')

DEFAULT_STYLE = ('bi-circle', 'muted')

# event_type → (icon, color) display hints
EVENT_STYLES = {
    'agent_start': ('bi-crosshair', 'accent'),
    'scanning': ('bi-search', 'muted'),
    'scraping': ('bi-globe', 'muted'),
    'searching': ('bi-search', 'muted'),
    'scrape_errors': ('bi-exclamation-triangle', 'orange'),
    'analyzing': ('bi-cpu', 'accent'),
    'lead_found': ('bi-person-plus-fill', 'green'),
    'message_drafted': ('bi-chat-dots', 'accent'),
    'inbound_triaged': ('bi-inbox', 'accent'),
    'issues_found': ('bi-megaphone', 'accent'),
    'donor_ask': ('bi-cash-coin', 'green'),
    'crm_synced': ('bi-cloud-check', 'green'),
    'agent_complete': ('bi-check-circle-fill', 'green'),
    'agent_error': ('bi-x-circle-fill', 'red'),
}


def emit_activity(profile_id, event_type, title, detail=None, agent_run_id=None,
                  contact_id=None, icon=None, color=None):
    """Append one ActivityEvent row. Never raises on DB errors."""
    default_icon, default_color = EVENT_STYLES.get(event_type, DEFAULT_STYLE)
    session = get_session()
    try:
        session.add(ActivityEvent(
            profile_id=profile_id,
            agent_run_id=agent_run_id,
            contact_id=contact_id,
            event_type=event_type,
            icon=icon or default_icon,
            color=color or default_color,
            title=title,
            detail=detail,
        ))
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to record %s event for profile %s", event_type, profile_id, exc_info=True)
    finally:
        session.close()
