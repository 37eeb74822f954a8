"""
Sentiment recorder — append-only (profile, contact, issue) readings.

Repeated readings for the same issue add rows; aggregation happens elsewhere.
"""
import logging

from outreach_engine.config import SENTIMENT_INTENT_TYPES
from outreach_engine.database import get_session
from outreach_engine.models.sentiment_reading import SentimentReading

logger = logging.getLogger('services.sentiment')

MIN_SCORE = -100
MAX_SCORE = 100


def record_sentiment(profile_id, contact_id, issue, score, intent_type, raw_signal,
                     source='agent_interaction'):
    """
    Append a SentimentReading.

    Raises ValueError for an out-of-range score or unknown intent type;
    DB errors are logged and swallowed.
    """
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ValueError(f"Sentiment score must be a number, got {score!r}")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValueError(f"Sentiment score {score} outside [{MIN_SCORE}, {MAX_SCORE}]")
    if intent_type not in SENTIMENT_INTENT_TYPES:
        raise ValueError(f"Unknown intent type: {intent_type}")

    session = get_session()
    try:
        session.add(SentimentReading(
            profile_id=profile_id,
            contact_id=contact_id,
            source=source,
            issue=issue,
            sentiment_score=int(score),
            intent_type=intent_type,
            raw_signal=raw_signal,
        ))
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to record sentiment for contact %s", contact_id, exc_info=True)
    finally:
        session.close()
