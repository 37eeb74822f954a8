"""
Shared client instances — Redis connection used by the RQ agent queue.

Building the client does not open a socket, so importing this module is always
safe (even when Redis is unreachable during tests).
"""
import logging
import redis

from outreach_engine.config import REDIS_URL

logger = logging.getLogger('outreach_engine.extensions')

# ── Redis ─────────────────────────────────────────────────────────────────────
# RQ stores pickled job payloads, so the connection must not decode responses.
redis_client = redis.from_url(REDIS_URL)
