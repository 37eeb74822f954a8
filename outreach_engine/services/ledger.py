"""
Run ledger — owns the AgentRun state machine.

create_run writes a `running` row; complete / fail are the terminal writes.
Terminal writes are unconditional single-row updates, so a second call simply
overwrites the first. Unlike the observational writers, ledger failures are
not swallowed: a run whose outcome cannot be recorded is a fatal condition
for the caller.
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from outreach_engine import config
from outreach_engine.config import AGENT_TYPES
from outreach_engine.database import get_session
from outreach_engine.models.agent_run import AgentRun

logger = logging.getLogger('services.ledger')


class LedgerError(Exception):
    """The run row a terminal write targets does not exist."""


def _json_safe(value):
    """Round-trip through JSON so datetimes, dataclasses' dicts, etc. persist cleanly."""
    return json.loads(json.dumps(value, default=str))


def _now():
    return datetime.now(timezone.utc)


def create_run(profile_id: str, agent_type: str, input_data: Dict = None,
               contact_id: str = None) -> str:
    """Insert a new AgentRun in status `running` and return its id."""
    if agent_type not in AGENT_TYPES:
        raise ValueError(f"Unknown agent type: {agent_type}")

    run_id = str(uuid.uuid4())
    session = get_session()
    try:
        session.add(AgentRun(
            id=run_id,
            profile_id=profile_id,
            contact_id=contact_id,
            agent_type=agent_type,
            status='running',
            input_data=_json_safe(input_data or {}),
            started_at=_now(),
        ))
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to create %s run for profile %s", agent_type, profile_id, exc_info=True)
        raise
    finally:
        session.close()

    logger.info("Run %s created (%s, profile %s)", run_id[:8], agent_type, profile_id)
    return run_id


def _terminal_write(run_id: str, status: str, output: Dict[str, Any], tokens_used: Optional[int]):
    session = get_session()
    try:
        run = session.get(AgentRun, run_id)
        if run is None:
            raise LedgerError(f"Agent run {run_id} not found")
        run.status = status
        run.output_data = output
        if tokens_used is not None:
            run.tokens_used = tokens_used
            run.llm_provider = config.LLM_PROVIDER
        run.completed_at = _now()
        session.commit()
    except LedgerError:
        session.rollback()
        raise
    except Exception:
        session.rollback()
        logger.error("Failed to mark run %s %s", run_id, status, exc_info=True)
        raise
    finally:
        session.close()


def complete(run_id: str, output: Dict[str, Any], tokens_used: int = 0):
    """Mark a run completed with its JSON-safe output and token count."""
    _terminal_write(run_id, 'completed', _json_safe(output), tokens_used or 0)
    logger.info("Run %s completed (%d tokens)", run_id[:8], tokens_used or 0)


def fail(run_id: str, error):
    """Mark a run failed, storing {"error": message}."""
    message = str(error)
    if not message and isinstance(error, BaseException):
        message = error.__class__.__name__
    _terminal_write(run_id, 'failed', {'error': message}, None)
    logger.warning("Run %s failed: %s", run_id[:8], message)


def get_run(run_id: str) -> Optional[Dict[str, Any]]:
    """Plain-dict snapshot of a run, or None."""
    session = get_session()
    try:
        run = session.get(AgentRun, run_id)
        return run.to_dict() if run else None
    finally:
        session.close()
