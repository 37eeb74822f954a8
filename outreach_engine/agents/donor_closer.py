"""
Donor closer agent (political) — turns a warm constituent into a donation,
volunteer or town-hall ask, then syncs the ask to NationBuilder when a
verified integration exists.
"""
from outreach_engine.agents.base import AgentExecutor, AgentOutput, contact_name, format_list
from outreach_engine.services.activity import emit_activity
from outreach_engine.services.contacts import promote_donor_intent
from outreach_engine.services.sentiment import record_sentiment

KNOWLEDGE_PROMPT_CHARS = 1500

ASK_TYPES = ('donation', 'volunteer', 'town_hall')
DONOR_ASK_SCORE = 20


class DonorCloserAgent(AgentExecutor):
    agent_type = 'donor_closer'
    label = 'Donor Closer'

    def perform(self, run_id, profile, input_data):
        ask = input_data.get('ask_type') or 'donation'
        if ask not in ASK_TYPES:
            raise ValueError(f"Unknown ask type: {ask}")

        contact = self.resolve_contact(input_data)
        knowledge = self.build_knowledge_context(profile)

        system_prompt = f"""You are a donor relations specialist for {profile.candidate_name or 'the candidate'} ({profile.candidate_party or ''}).

The constituent you are writing to has ALREADY been engaged. They are warm — they've shown interest in the campaign's policy positions. Now it is time to make a specific ask.

Ask Type: {ask}
Candidate: {profile.candidate_name or 'N/A'}
Riding: {profile.riding_name or 'N/A'}
Tone: {profile.exhaustion_gap or 'Warm, grateful, specific.'}

RULES FOR THE ASK:
- Reference their previous engagement (what issue they cared about)
- For DONATIONS: suggest a specific small amount ($25-50). Make it feel achievable.
- For VOLUNTEERING: offer a specific, low-commitment task (door-knocking Saturday, phone banking 2hrs)
- For TOWN HALL: give a specific date/location and frame it as exclusive/important
- Always include a "why now" urgency element
- Thank them for their engagement so far — genuinely
- End with ONE clear CTA, not multiple options

Knowledge Base:
{knowledge[:KNOWLEDGE_PROMPT_CHARS]}"""

        user_message = f"""Constituent profile:
Name: {contact.get('first_name') or 'Supporter'} {contact.get('last_name') or ''}
Issues They Care About: {format_list(contact.get('issues_care'), 'General')}
Current Voter Intent: {contact.get('voter_intent') or 'leaning'}
Current Donor Status: {contact.get('donor_intent') or 'none'}
Support Score: {contact.get('support_level') or 'N/A'}/100

Conversation History:
{input_data.get('conversation_history') or 'They engaged positively with our previous outreach about policy positions.'}

Write the {ask} ask message. Make it human, specific, and compelling."""

        result = self.completion.complete(system_prompt, user_message, temperature=0.6)

        contact_id = contact.get('id')
        if contact_id:
            promote_donor_intent(contact_id)
            record_sentiment(profile.id, contact_id, 'donation_ask', DONOR_ASK_SCORE, 'donor',
                             f"{ask} ask sent")

        synced = False
        external_id = contact.get('external_id')
        if external_id:
            def _push_ask(crm):
                crm.add_tag(external_id, f"uae_{ask}_ask")
                crm.add_note(external_id, f"{ask} ask sent via Donor Closer agent")
                return True
            synced = bool(self.sync_crm(profile, _push_ask, provider='nationbuilder', run_id=run_id))

        emit_activity(profile.id, 'donor_ask', f"{ask.replace('_', ' ').title()} ask drafted",
                      agent_run_id=run_id, contact_id=contact_id)

        return AgentOutput(
            output={
                'message': result.text,
                'ask_type': ask,
                'contact_name': contact_name(contact),
                'crm_synced': synced,
            },
            tokens_used=result.tokens_used,
        )
