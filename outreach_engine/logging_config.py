"""
Logging for the agent worker.

configure_logging() is called once by the worker. LOG_FORMAT picks text or
single-line JSON; LOG_LEVEL defaults to INFO.

Everything logged on behalf of one AgentRun goes through run_logger(), which
stamps the record with the run id and agent type so a run's lines can be
pulled out of the interleaved worker stream.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone

RUN_FIELDS = ('run_id', 'agent_type')

# Third-party loggers that are noisy at INFO
_NOISY_LOGGERS = [
    'urllib3',
    'openai',
    'anthropic',
    'httpcore',
    'httpx',
    'rq.worker',
]


class RunLogAdapter(logging.LoggerAdapter):
    """Adds run_id / agent_type to every record, merged with any per-call extra."""

    def process(self, msg, kwargs):
        kwargs['extra'] = {**self.extra, **kwargs.get('extra', {})}
        return msg, kwargs


def run_logger(logger, run_id, agent_type=None):
    """Wrap a module logger for one run."""
    if isinstance(logger, str):
        logger = logging.getLogger(logger)
    context = {'run_id': run_id}
    if agent_type:
        context['agent_type'] = agent_type
    return RunLogAdapter(logger, context)


class JSONFormatter(logging.Formatter):
    """One JSON object per line; run fields appear only on run-scoped records."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for name in RUN_FIELDS:
            value = getattr(record, name, None)
            if value:
                entry[name] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


class TextFormatter(logging.Formatter):
    """Human-readable lines, tagged `[run abcdef12]` when the record belongs to a run."""

    def __init__(self):
        super().__init__('[%(asctime)s] %(levelname)s %(name)s%(run_tag)s: %(message)s',
                         datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record):
        run_id = getattr(record, 'run_id', None)
        record.run_tag = f" [run {run_id[:8]}]" if run_id else ''
        return super().format(record)


def configure_logging():
    """
    Install a single stderr handler on the root logger.

    Environment variables:
        LOG_LEVEL   Python level name (default INFO; unknown names fall back to INFO)
        LOG_FORMAT  "text" (default) or "json"
    """
    level = getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if os.getenv('LOG_FORMAT', 'text').lower() == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
