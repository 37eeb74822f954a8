"""
Issue scout agent (political) — searches local sources and ranks this week's
riding issues. A failed search becomes a placeholder entry, not a failed run.
"""
import logging

from outreach_engine.agents.base import AgentExecutor, AgentOutput, format_list
from outreach_engine.providers.discovery import SearchResult
from outreach_engine.services.activity import emit_activity

logger = logging.getLogger('agents.issue_scout')

SCRAPED_PROMPT_CHARS = 4000


def default_queries(riding, party):
    return [
        f"{riding} local news this week",
        f"{riding} community concerns 2025",
        f"{party or ''} {riding} voter issues".strip(),
    ]


class IssueScoutAgent(AgentExecutor):
    agent_type = 'issue_scout'
    label = 'Issue Scout'

    def perform(self, run_id, profile, input_data):
        riding = input_data.get('riding_override') or profile.riding_name or 'General'
        queries = input_data.get('sources') or default_queries(riding, profile.candidate_party)

        emit_activity(profile.id, 'agent_start', f"Issue Scout started: {riding}", agent_run_id=run_id)

        results = []
        for query in queries:
            try:
                results.extend(self.discovery.search(query, limit=5))
            except Exception as e:
                logger.warning("Issue search %r failed: %s", query, e)
                results.append(SearchResult(title=query, snippet='(search failed)'))

        scraped = '\n'.join(f"- {r.title}: {r.snippet or ''}" for r in results)

        system_prompt = f"""You are a political intelligence analyst monitoring the riding of {riding} for the {profile.candidate_party or ''} campaign.

Candidate: {profile.candidate_name or 'N/A'}
Our Policy Pillars: {format_list(profile.policy_pillars)}
Known Voter Objections: {format_list(profile.policy_objections)}
Climate/Tone Notes: {profile.exhaustion_gap or 'None'}

Your job is to:
1. Identify the TOP 5 issues being discussed in this riding RIGHT NOW
2. Rank them by intensity (how much people are talking about it)
3. For each issue, note whether our candidate has a STRONG, MODERATE, or WEAK position
4. Flag any "landmine" issues where engagement could backfire
5. Suggest the #1 issue to lead outreach messaging on this week

Return as JSON:
{{
  "top_issues": [{{ "issue": "", "intensity": 1-10, "our_position": "strong|moderate|weak", "landmine": false, "talking_point": "" }}],
  "recommended_lead_issue": "",
  "riding_mood": "optimistic|frustrated|angry|apathetic|mixed",
  "notes": ""
}}"""

        user_message = (
            f"Here is what we found in public discourse for {riding} this week:\n\n"
            f"{scraped[:SCRAPED_PROMPT_CHARS]}"
        )

        result = self.completion.complete(system_prompt, user_message, temperature=0.3)

        emit_activity(profile.id, 'issues_found', f"Issue intelligence ready for {riding}",
                      detail=f"{len(results)} sources scanned", agent_run_id=run_id)

        return AgentOutput(
            output={
                'intelligence': result.text,
                'riding': riding,
                'sources_scraped': len(results),
            },
            tokens_used=result.tokens_used,
        )
