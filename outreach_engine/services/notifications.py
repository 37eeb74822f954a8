"""
Notifications — Slack webhook alerts for finished agent runs.

Notification failure never blocks a run.
"""
import logging
import requests

from outreach_engine.config import SLACK_WEBHOOK_URL

logger = logging.getLogger('services.notifications')


def _title(agent_type):
    return (agent_type or 'agent').replace('_', ' ').title()


def notify_run_complete(run):
    """Post a completion summary to Slack. `run` is a ledger snapshot dict."""
    if not SLACK_WEBHOOK_URL:
        return

    try:
        output = run.get('output_data') or {}
        fields = [
            {"type": "mrkdwn", "text": f"*Profile:* {run.get('profile_id')}"},
            {"type": "mrkdwn", "text": f"*Tokens:* {run.get('tokens_used') or 0}"},
        ]
        if 'leads_found' in output:
            fields.append({"type": "mrkdwn", "text": f"*Leads:* {output['leads_found']}"})
            fields.append({"type": "mrkdwn", "text": f"*Mode:* {output.get('mode', '')}"})

        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"Agent Run Completed — {_title(run.get('agent_type'))}",
                }
            },
            {"type": "section", "fields": fields},
        ]

        requests.post(SLACK_WEBHOOK_URL, json={"blocks": blocks}, timeout=10)
        logger.info("Run %s completion notification sent", run['id'][:8])

    except Exception:
        logger.error("Failed to send notification for run %s", run.get('id', '?')[:8], exc_info=True)


def notify_run_failed(run_id, agent_type, error):
    """Post a run failure alert to Slack."""
    if not SLACK_WEBHOOK_URL:
        return

    try:
        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"Agent Run FAILED — {_title(agent_type)}",
                }
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Run:* {run_id}"},
                ]
            },
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": f"*Error:* ```{str(error)[:500]}```"}
            },
        ]

        requests.post(SLACK_WEBHOOK_URL, json={"blocks": blocks}, timeout=10)
        logger.info("Run %s failure notification sent", run_id[:8])

    except Exception:
        logger.error("Failed to send failure notification for run %s", run_id[:8], exc_info=True)
