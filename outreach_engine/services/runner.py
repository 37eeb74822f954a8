"""
Agent runner — detached execution of agent runs.

launch_run writes the `running` ledger row synchronously and enqueues
execute_run on the RQ agent queue. execute_run runs inside a worker, drives
the executor, and turns any failure into a RunOutcome instead of letting it
escape to RQ. Failed runs are never retried; resubmit as a new run.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from outreach_engine.config import (
    AGENT_QUEUE_NAME, AGENT_JOB_TIMEOUT, AGENT_TYPES, PROFILE_MODES, TERMINAL_STATUSES,
)
from outreach_engine.database import get_session
from outreach_engine.logging_config import run_logger
from outreach_engine.models.agent_run import AgentRun
from outreach_engine.models.profile import Profile
from outreach_engine.services import ledger
from outreach_engine.services.notifications import notify_run_complete, notify_run_failed

logger = logging.getLogger('services.runner')


@dataclass
class RunOutcome:
    run_id: str
    status: str            # completed | failed
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == 'completed'


# ── Lazy RQ queue (avoids import-time Redis use in tests) ─────────────────────

_queue = None


def _get_queue():
    global _queue
    if _queue is None:
        from outreach_engine.extensions import redis_client
        from rq import Queue
        _queue = Queue(AGENT_QUEUE_NAME, connection=redis_client)
    return _queue


def launch_run(profile_id: str, agent_type: str, input_data: Dict = None,
               contact_id: str = None) -> str:
    """
    Record a new run and enqueue it. Returns the run id immediately.

    If the enqueue itself fails the run is marked failed before the error
    propagates, so no run is left `running` with no job behind it.
    """
    if agent_type not in AGENT_TYPES:
        raise ValueError(f"Unknown agent type: {agent_type}. Available: {AGENT_TYPES}")

    run_id = ledger.create_run(profile_id, agent_type, input_data or {}, contact_id=contact_id)
    log = run_logger(logger, run_id, agent_type)
    try:
        _get_queue().enqueue(execute_run, run_id, job_timeout=AGENT_JOB_TIMEOUT)
    except Exception as e:
        log.error("Enqueue failed: %s", e, exc_info=True)
        ledger.fail(run_id, e)
        raise
    log.info("Run enqueued")
    return run_id


def _load(run_id):
    """Detached copies of the run and its profile."""
    session = get_session()
    try:
        run = session.get(AgentRun, run_id)
        if run is None:
            return None, None
        profile = session.get(Profile, run.profile_id)
        session.expunge(run)
        if profile is not None:
            session.expunge(profile)
        return run, profile
    finally:
        session.close()


def execute_run(run_id: str, providers=None) -> RunOutcome:
    """
    Worker entry point for one run.

    Never raises: executor failures are already recorded on the run by the
    executor itself; this logs them, alerts, and reports a failed outcome.
    """
    from outreach_engine.agents.registry import get_executor
    from outreach_engine.providers.registry import get_providers

    run, profile = _load(run_id)
    if run is None:
        logger.error("Run %s not found", run_id)
        return RunOutcome(run_id, 'failed', 'Run not found')

    agent_type = run.agent_type
    log = run_logger(logger, run_id, agent_type)
    try:
        if profile is None:
            raise LookupError(f"Profile {run.profile_id} not found")
        if profile.mode not in PROFILE_MODES:
            raise ValueError(f"Unknown profile mode: {profile.mode!r}. Available: {PROFILE_MODES}")

        stray = profile.inactive_mode_fields()
        if stray:
            log.warning("Profile %s (%s mode) has populated fields for the other mode: %s",
                        profile.id, profile.mode, ', '.join(stray))

        input_data = dict(run.input_data or {})
        if run.contact_id:
            input_data.setdefault('contact_id', run.contact_id)

        log.info("Starting for profile %s", profile.id)
        executor = get_executor(agent_type, providers or get_providers())
        executor.execute(run_id, profile, input_data)

    except Exception as e:
        log.error("Run failed: %s", e, exc_info=True)
        # Failures before the executor started have not been recorded yet
        try:
            snapshot = ledger.get_run(run_id)
            if snapshot and snapshot['status'] not in TERMINAL_STATUSES:
                ledger.fail(run_id, e)
        except Exception:
            log.error("Could not record failure", exc_info=True)
        notify_run_failed(run_id, agent_type, e)
        return RunOutcome(run_id, 'failed', str(e) or e.__class__.__name__)

    snapshot = ledger.get_run(run_id)
    if snapshot:
        notify_run_complete(snapshot)
    return RunOutcome(run_id, 'completed')
