"""
Stage D — one completion call that turns fetched content (or nothing) into leads.

Decoding is two steps: normalize_model_output strips wrappers, parse_leads
does a strict JSON-array parse. A bad model response degrades to an empty
lead list with the reason in ExtractionResult.error; it never raises.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Tuple

from outreach_engine.models.profile import as_list
from outreach_engine.pipeline.fetch import FetchedItem

logger = logging.getLogger('pipeline.extraction')

CONTEXT_CHARS = 6000
EXTRACTION_TEMPERATURE = 0.7
EXTRACTION_MAX_TOKENS = 4000

_FENCE_OPEN = re.compile(r'^```[a-zA-Z]*\s*\n?')
_FENCE_CLOSE = re.compile(r'\n?\s*```$')

RECENCY_WINDOWS = {
    '1week': 'the past 7 days',
    '1month': 'the past 30 days',
    '3months': 'the past 3 months',
    '6months': 'the past 6 months',
}


@dataclass
class ExtractionResult:
    leads: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None


def normalize_model_output(text: str) -> str:
    """Trim and strip a surrounding ``` / ```json fence if present."""
    text = (text or '').strip()
    if text.startswith('```'):
        text = _FENCE_OPEN.sub('', text, count=1)
        text = _FENCE_CLOSE.sub('', text, count=1)
    return text.strip()


def parse_leads(text: str, max_leads: int) -> ExtractionResult:
    """Strict parse of a JSON array of lead objects, truncated to max_leads."""
    try:
        data = json.loads(normalize_model_output(text))
    except (TypeError, ValueError, RecursionError) as e:
        return ExtractionResult(error=f"Model output is not valid JSON: {e}")
    if not isinstance(data, list):
        return ExtractionResult(error=f"Model output is a JSON {type(data).__name__}, expected an array")
    leads = [item for item in data if isinstance(item, dict)]
    return ExtractionResult(leads=leads[:max(max_leads, 0)])


def build_context_block(items: List[FetchedItem]) -> str:
    return '\n\n---\n\n'.join(
        f"[Source: {item.source} ({item.source_type})]\n{item.content}" for item in items
    )[:CONTEXT_CHARS]


def _lead_fields(political: bool) -> str:
    fields = [
        '- first_name, last_name',
        '- company: if applicable (null otherwise)' if not political else None,
        '- email, phone: contact details',
        '- social_handle: their username on the platform',
        '- profile_url: link to their post or profile',
        '- source: the platform or URL the lead came from',
        '- hook: the specific thing they said or asked (1-2 sentences)',
        '- issues: array of 1-3 policy issues they care about' if political else None,
        '- relevance_score: 0-100',
        '- tags: short labels such as ["urgent_need", "price_sensitive"]' if not political
        else '- tags: short labels such as ["donor_potential", "volunteer_potential"]',
    ]
    return '\n'.join(f for f in fields if f)


def _profile_block(profile) -> str:
    if profile.is_political:
        return f"""Candidate: {profile.candidate_name or 'N/A'}
Party: {profile.candidate_party or 'N/A'}
Riding: {profile.riding_name or 'N/A'}
Policy Pillars: {', '.join(as_list(profile.policy_pillars)) or 'N/A'}
Common Objections: {', '.join(as_list(profile.policy_objections)) or 'N/A'}
Target Demographic: {profile.target_persona or 'Voters'}
Tone Notes: {profile.exhaustion_gap or 'N/A'}"""
    return f"""Business: {profile.industry_context or 'a service business'}
Services: {', '.join(as_list(profile.service_offerings)) or 'N/A'}
Common Objections: {', '.join(as_list(profile.price_objections)) or 'N/A'}
Target Customer: {profile.target_persona or 'Homeowners'}"""


def _lead_rule(profile) -> str:
    if profile.is_political:
        return ("A lead is a resident or voter expressing a view, concern or question about the riding "
                "or these issues. Campaign accounts, party pages, journalists and other candidates are NOT leads.")
    return ("A lead is a person SEEKING help with a problem these services solve. A business OFFERING the "
            "same or similar services, an advertiser, or a directory listing is a competitor, NOT a lead.")


def build_prompts(profile, items: List[FetchedItem], max_leads: int, mode: str,
                  recency: str) -> Tuple[str, str]:
    """System/user prompt pair for the given pipeline mode."""
    role = (
        f"You are a campaign intelligence analyst for {profile.candidate_name or 'a candidate'} "
        f"({profile.candidate_party or ''}) in {profile.riding_name or 'a riding'}."
        if profile.is_political else
        f"You are a lead generation specialist for: {profile.industry_context or 'a service business'}."
    )

    if mode == 'scraped':
        window = RECENCY_WINDOWS.get(recency)
        recency_rule = (
            f"- Skip any post or comment that is visibly older than {window}.\n" if window else ''
        )
        system_prompt = f"""{role}

Extract up to {max_leads} leads from the scraped content supplied by the user.

{_profile_block(profile)}

RULES:
- Only extract people who LITERALLY appear in the supplied content. Never invent a person.
- Use null for any contact field (email, phone, social_handle, profile_url) that is not literally present in the content.
- Copy the source URL and handle VERBATIM from the content.
{recency_rule}- {_lead_rule(profile)}

Each lead is an object with:
{_lead_fields(profile.is_political)}

Return ONLY a valid JSON array (possibly empty). No markdown, no explanation."""
        user_message = f"Extract leads from this scraped content:\n\n{build_context_block(items)}"
    else:
        audience = 'voter/constituent' if profile.is_political else 'customer'
        system_prompt = f"""{role}

NO SCRAPED DATA IS AVAILABLE. Generate {max_leads} clearly SIMULATED prospect leads that illustrate the
kind of {audience} worth looking for. They are planning examples, not real people.

{_profile_block(profile)}

RULES:
- email and phone MUST be null. Never fabricate reachable contact details.
- social_handle and profile_url must be null or start with "simulated:".
- source must start with "Simulated - " followed by a plausible platform (e.g. "Simulated - Reddit").
- Vary the demographics, concerns, urgency and platforms.
- {_lead_rule(profile)}

Each lead is an object with:
{_lead_fields(profile.is_political)}

Return ONLY a valid JSON array. No markdown, no explanation."""
        user_message = f"Generate exactly {max_leads} simulated leads now."

    return system_prompt, user_message


def generate_leads(completion, profile, items: List[FetchedItem], max_leads: int, mode: str,
                   recency: str) -> Tuple[ExtractionResult, int]:
    """
    Exactly one completion call. Returns (ExtractionResult, tokens_used).

    Provider errors propagate; only the decode step degrades.
    """
    system_prompt, user_message = build_prompts(profile, items, max_leads, mode, recency)
    response = completion.complete(
        system_prompt, user_message,
        temperature=EXTRACTION_TEMPERATURE,
        max_tokens=EXTRACTION_MAX_TOKENS,
    )
    result = parse_leads(response.text, max_leads)
    if result.error:
        logger.warning("Lead extraction degraded to empty list: %s", result.error)
    return result, response.tokens_used
