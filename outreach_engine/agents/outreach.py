"""
Outreach agent — drafts one platform-aware message for a contact, in either mode.
"""
from outreach_engine.agents.base import AgentExecutor, AgentOutput, contact_name, format_list
from outreach_engine.services.activity import emit_activity

KNOWLEDGE_PROMPT_CHARS = 2000

# Formatting rules injected into the system prompt, keyed by platform
PLATFORM_RULES = {
    'reddit': 'Write a Reddit reply or DM. Casual Reddit tone. Keep under 100 words. No emojis. Reference their specific post.',
    'twitter': 'Write a Twitter/X DM. Keep under 280 characters. Concise and punchy.',
    'facebook': 'Write a short Facebook message. Friendly community tone. Keep under 100 words.',
    'linkedin': 'Write a LinkedIn message. Professional but human. Keep under 150 words.',
    'nextdoor': 'Write a Nextdoor reply. Neighborly, local-community tone. Keep under 100 words.',
    'email': 'Write a short email. Start with "Subject: ..." on line 1, then the body. Keep body under 150 words.',
    'sms': 'Write an SMS. Keep under 160 characters. Casual and direct.',
    'dm': 'Write a short direct message. Keep under 100 words.',
}


def _political_prompt(profile, platform_rule, tone, knowledge):
    return f"""You are a community engagement specialist for {profile.candidate_name or 'a political candidate'} ({profile.candidate_party or 'party'}).
You write messages that sound like they come from a real volunteer or campaign worker, not a bot or mass message.

RULES:
- Sound like a genuine person who cares about the community
- Reference the constituent's specific concern or interest
- Connect their concern to relevant policy positions naturally
- Never sound like a mass-produced campaign message
- Be empathetic first, political second
- {platform_rule}
- Match the tone: {tone or 'empathetic and community-focused'}

Campaign Context: {profile.industry_context or ''}
Key Policy Positions: {format_list(profile.policy_pillars)}
Candidate: {profile.candidate_name or 'N/A'} ({profile.candidate_party or ''})
Tone Guidance: {profile.exhaustion_gap or 'Warm, genuine, non-partisan-sounding'}

Knowledge Base:
{knowledge[:KNOWLEDGE_PROMPT_CHARS]}"""


def _business_prompt(profile, platform_rule, tone, knowledge):
    return f"""You are an expert outreach specialist for a {profile.industry_context or 'business'} company.
You write messages that sound like they come from a knowledgeable human, never like a bot or mass email.

RULES:
- Never use generic openers like "I hope this finds you well"
- Lead with a specific observation about the prospect's situation
- Reference their actual situation, not hypothetical scenarios
- End with a soft CTA (question, not a hard sell)
- {platform_rule}
- Match the tone: {tone or 'professional but warm'}

Company Context: {profile.industry_context or ''}
Our Services: {format_list(profile.service_offerings)}
Common Objections to Pre-empt: {format_list(profile.price_objections)}

Knowledge Base:
{knowledge[:KNOWLEDGE_PROMPT_CHARS]}"""


class OutreachAgent(AgentExecutor):
    agent_type = 'outreach'
    label = 'Outreach'

    def perform(self, run_id, profile, input_data):
        contact = self.resolve_contact(input_data)
        platform = input_data.get('platform')
        channel = input_data.get('channel')
        tone = input_data.get('tone')
        platform_rule = PLATFORM_RULES.get(platform, PLATFORM_RULES['dm'])

        knowledge = self.build_knowledge_context(profile)
        if profile.is_political:
            system_prompt = _political_prompt(profile, platform_rule, tone, knowledge)
        else:
            system_prompt = _business_prompt(profile, platform_rule, tone, knowledge)

        greeting_name = contact.get('first_name') or contact.get('social_handle') or 'there'
        details = [f"Name: {greeting_name} {contact.get('last_name') or ''}".rstrip()]
        for label, key in (('Handle', 'social_handle'), ('Company', 'company'), ('Title', 'job_title')):
            if contact.get(key):
                details.append(f"{label}: {contact[key]}")

        hooks = input_data.get('research_hooks') or \
            'No specific hooks available — use industry-level personalization.'
        user_message = (
            f"Write a {platform or channel or 'direct'} message for:\n"
            + '\n'.join(details)
            + f"\n\nResearch Hooks:\n{hooks}\n\n"
            "Generate the message only. No explanations or meta-commentary."
        )

        result = self.completion.complete(system_prompt, user_message, temperature=0.7)

        name = contact_name(contact) or contact.get('social_handle') or ''
        emit_activity(profile.id, 'message_drafted',
                      f"Drafted {platform or channel or 'dm'} message for {name or 'contact'}",
                      agent_run_id=run_id, contact_id=contact.get('id'))

        return AgentOutput(
            output={
                'message': result.text,
                'channel': channel or 'dm',
                'platform': platform or 'unknown',
                'contact_name': name,
            },
            tokens_used=result.tokens_used,
        )
