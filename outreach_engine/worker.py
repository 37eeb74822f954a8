"""
RQ worker entry point for agent runs.

Usage:
    outreach-worker            (console script)
    python -m outreach_engine.worker
"""
import logging

from rq import Queue, Worker

from outreach_engine.config import AGENT_QUEUE_NAME
from outreach_engine.database import init_db
from outreach_engine.extensions import redis_client
from outreach_engine.logging_config import configure_logging
from outreach_engine.providers.registry import get_providers

logger = logging.getLogger('outreach_engine.worker')


def main():
    configure_logging()
    init_db()

    # Resolve providers before taking jobs so a bad LLM_PROVIDER / SCRAPE_PROVIDER
    # stops the worker at boot instead of failing every run.
    providers = get_providers()
    logger.info("Worker starting on queue %r (llm=%s, scrape=%s)",
                AGENT_QUEUE_NAME, providers.llm_name, providers.discovery.name)

    queue = Queue(AGENT_QUEUE_NAME, connection=redis_client)
    Worker([queue], connection=redis_client).work()


if __name__ == '__main__':
    main()
