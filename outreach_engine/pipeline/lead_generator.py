"""
Lead generator agent — the lead discovery pipeline.

    A  build fetch tasks (sources, per-mode templates, keywords)
    B  fetch sequentially; per-task failures are recorded, never fatal
    C  pick mode: scraped if anything came back, else ai_prospecting
    D  one completion call → ExtractionResult
    E  one Contact per lead, lead_found event each

Verified CRM integrations get a best-effort push of the new contacts.
"""
import logging
from datetime import datetime
from typing import Dict, Any, List

from outreach_engine.agents.base import AgentExecutor, AgentOutput
from outreach_engine.config import DEFAULT_RECENCY, DEFAULT_MAX_LEADS, RECENCY_OPTIONS
from outreach_engine.logging_config import run_logger
from outreach_engine.pipeline.extraction import generate_leads
from outreach_engine.pipeline.fetch import fetch_all, select_mode
from outreach_engine.pipeline.queries import build_fetch_tasks
from outreach_engine.services.activity import emit_activity
from outreach_engine.services.contacts import create_contact, set_external_id

logger = logging.getLogger('pipeline.lead_generator')

DEFAULT_SCORE = 50
WARM_THRESHOLD = 70


def _score(lead: Dict[str, Any]) -> int:
    """relevance_score clamped to 0-100; missing or unparseable → 50."""
    raw = lead.get('relevance_score')
    if raw is None or isinstance(raw, bool):
        return DEFAULT_SCORE
    try:
        value = int(round(float(raw)))
    except (TypeError, ValueError):
        return DEFAULT_SCORE
    return max(0, min(100, value))


def _text(lead, key):
    value = lead.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _names(lead):
    first = _text(lead, 'first_name')
    last = _text(lead, 'last_name')
    if not first:
        full = _text(lead, 'name')
        if full:
            first, _, rest = full.partition(' ')
            last = last or rest.strip() or None
    return first or 'Unknown', last


def contact_fields_for_lead(lead: Dict[str, Any], profile, mode: str) -> Dict[str, Any]:
    """Map one extracted lead onto Contact column values."""
    score = _score(lead)
    first, last = _names(lead)
    tags = lead.get('tags')
    fields = {
        'first_name': first,
        'last_name': last,
        'email': _text(lead, 'email'),
        'phone': _text(lead, 'phone'),
        'social_handle': _text(lead, 'social_handle'),
        'profile_url': _text(lead, 'profile_url'),
        'source': _text(lead, 'source') or ('ai_prospecting' if mode == 'ai_prospecting' else 'web_scrape'),
        'company': _text(lead, 'company'),
        'job_title': _text(lead, 'job_title'),
        'lead_score': score,
        'tags': tags if isinstance(tags, list) and tags else ['lead_generator', mode],
        'notes': _text(lead, 'hook') or _text(lead, 'context'),
    }
    if profile.is_political:
        issues = lead.get('issues')
        fields.update({
            'lead_status': 'cold',
            'riding': profile.riding_name or None,
            'voter_intent': 'unknown',
            'donor_intent': 'none',
            'issues_care': issues if isinstance(issues, list) else None,
            'support_level': score,
        })
    else:
        fields.update({
            'lead_status': 'warm' if score >= WARM_THRESHOLD else 'cold',
            'voter_intent': 'unknown',
            'donor_intent': 'none',
        })
    return fields


def _external_id(response):
    """Vendor-side id from a push response (top-level, contact_id, or JSON:API data.id)."""
    if not isinstance(response, dict):
        return None
    data = response.get('data')
    if isinstance(data, dict) and data.get('id'):
        return data['id']
    return response.get('id') or response.get('contact_id')


def _max_leads(value) -> int:
    if value is None or value == '':
        return DEFAULT_MAX_LEADS
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer max_leads %r", value)
        return DEFAULT_MAX_LEADS


def _recency(value, profile, log=logger) -> str:
    default = DEFAULT_RECENCY['political' if profile.is_political else 'business']
    if not value:
        return default
    if value not in RECENCY_OPTIONS:
        log.warning("Unknown recency %r, using %s", value, default)
        return default
    return value


class LeadGeneratorAgent(AgentExecutor):
    agent_type = 'lead_generator'
    label = 'Lead Generator'

    def perform(self, run_id, profile, input_data):
        log = run_logger(logger, run_id, self.agent_type)
        max_leads = _max_leads(input_data.get('max_leads'))
        recency = _recency(input_data.get('recency'), profile, log)

        emit_activity(profile.id, 'agent_start', 'Lead Generator started',
                      detail=f"Target: {max_leads} leads", agent_run_id=run_id)

        # Stage A
        tasks = build_fetch_tasks(
            profile,
            sources=input_data.get('sources'),
            keywords=input_data.get('keywords'),
            recency=recency,
            year=datetime.now().year,
        )
        preview = ', '.join(t.label for t in tasks[:3])
        emit_activity(profile.id, 'scanning', f"Querying {len(tasks)} sources",
                      detail=f"{preview}..." if preview else None, agent_run_id=run_id)

        # Stage B
        report = fetch_all(self.discovery, tasks)
        if report.errors:
            emit_activity(profile.id, 'scrape_errors', f"{len(report.errors)} source(s) failed to scrape",
                          detail=' | '.join(report.errors[:3]), agent_run_id=run_id)

        # Stage C
        mode = select_mode(report)
        log.info("%d tasks, %d items, %d errors → %s",
                 len(tasks), len(report.items), len(report.errors), mode)
        emit_activity(
            profile.id, 'analyzing',
            f"Analyzing {len(report.items)} results with AI" if mode == 'scraped'
            else 'AI Prospecting Mode — generating simulated leads from profile intelligence',
            agent_run_id=run_id,
        )

        # Stage D
        extraction, tokens_used = generate_leads(
            self.completion, profile, report.items, max_leads, mode, recency,
        )

        # Stage E
        created = []
        for lead in extraction.leads:
            fields = contact_fields_for_lead(lead, profile, mode)
            contact = create_contact(profile.id, **fields)
            created.append((contact, lead))
            emit_activity(
                profile.id, 'lead_found',
                f"Lead: {contact.full_name}",
                detail=f"Score: {contact.lead_score}/100 | {(contact.notes or '')[:100]}",
                agent_run_id=run_id, contact_id=contact.id,
            )

        if created:
            self._push_to_crm(profile, [c for c, _ in created], run_id, log)

        emit_activity(
            profile.id, 'agent_complete', f"Done: {len(created)} leads added to contacts",
            detail=('Used simulated AI prospecting (no source returned usable content)'
                    if mode == 'ai_prospecting' else f"Scraped {report.successes} sources"),
            agent_run_id=run_id,
        )

        output = {
            'leads_found': len(created),
            'mode': mode,
            'recency': recency,
            'leads': [self._summarize(contact, lead) for contact, lead in created],
            'sources_scanned': len(tasks),
            'sources_successful': report.successes,
        }
        if report.errors:
            output['scrape_errors'] = report.errors[:5]
        if extraction.error:
            output['extraction_error'] = extraction.error
        return AgentOutput(output=output, tokens_used=tokens_used)

    def _push_to_crm(self, profile, contacts: List, run_id: str, log=logger):
        def _push(crm):
            pushed = 0
            for contact in contacts:
                try:
                    response = crm.push_contact(contact)
                except Exception as e:
                    log.warning("CRM push of contact %s failed: %s", contact.id, e)
                    continue
                pushed += 1
                external_id = _external_id(response)
                if external_id:
                    set_external_id(contact.id, str(external_id))
            return pushed
        self.sync_crm(profile, _push, run_id=run_id)

    @staticmethod
    def _summarize(contact, lead) -> Dict[str, Any]:
        return {
            'contact_id': contact.id,
            'name': contact.full_name,
            'company': contact.company,
            'email': contact.email,
            'phone': contact.phone,
            'social_handle': contact.social_handle,
            'profile_url': contact.profile_url,
            'source': contact.source,
            'hook': lead.get('hook'),
            'relevance_score': contact.lead_score,
            'tags': contact.tags,
        }
