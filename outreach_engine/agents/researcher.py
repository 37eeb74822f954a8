"""
Researcher agent (business) — finds personalization hooks for one prospect.
"""

from outreach_engine.agents.base import AgentExecutor, AgentOutput, format_list
from outreach_engine.services.activity import emit_activity


SCRAPED_PROMPT_CHARS = 4000


class ResearcherAgent(AgentExecutor):
    agent_type = 'researcher'
    label = 'Researcher'

    def perform(self, run_id, profile, input_data):
        target_url = input_data.get('target_url')
        target_name = input_data.get('target_name')
        target_company = input_data.get('target_company')
        subject = target_name or target_company or target_url or 'prospect'

        emit_activity(profile.id, 'agent_start', f"Researcher started: {subject}",
                      agent_run_id=run_id, icon='bi-search')

        scraped = ''
        if target_url:
            emit_activity(profile.id, 'scraping', f"Scraping: {target_url[:60]}", agent_run_id=run_id)
            scraped = self.discovery.scrape(target_url).content
        elif target_name or target_company:
            query = ' '.join(
                part for part in (target_name, target_company, profile.industry_context) if part
            )
            emit_activity(profile.id, 'searching', f'Searching: "{query[:50]}"', agent_run_id=run_id)
            results = self.discovery.search(query, limit=5)
            scraped = '\n'.join(f"{r.title}: {r.snippet}" for r in results)

        emit_activity(profile.id, 'analyzing', 'Analyzing with AI for personalization hooks',
                      agent_run_id=run_id)

        system_prompt = f"""You are a research analyst for a {profile.industry_context or 'business'} company.
Your job is to find personalization "hooks" — specific details about a prospect that can be used to craft a highly relevant outreach message.

Target Persona: {profile.target_persona or 'Business decision maker'}
Services We Offer: {format_list(profile.service_offerings)}

Return your analysis as JSON with these fields:
- hooks: array of 3-5 specific personalization angles
- pain_points: array of likely pain points based on research
- recommended_approach: a 2-sentence strategy for first contact
- confidence: 0-100 score on data quality"""

        user_message = f"""Research this prospect and find personalization hooks:
Name: {target_name or 'Unknown'}
Company: {target_company or 'Unknown'}
URL: {target_url or 'None'}

Scraped Data:
{scraped[:SCRAPED_PROMPT_CHARS]}"""

        result = self.completion.complete(system_prompt, user_message, temperature=0.3)

        emit_activity(profile.id, 'agent_complete', f"Research complete: {subject}",
                      detail=f"{result.tokens_used} tokens used", agent_run_id=run_id)

        return AgentOutput(
            output={
                'research': result.text,
                'sources': [target_url] if target_url else [],
                'scraped_length': len(scraped),
            },
            tokens_used=result.tokens_used,
        )
