"""
Persuader agent (political) — constituent message that leads with their concern.
"""
from outreach_engine.agents.base import AgentExecutor, AgentOutput, contact_name, format_list
from outreach_engine.services.activity import emit_activity
from outreach_engine.services.sentiment import record_sentiment

KNOWLEDGE_PROMPT_CHARS = 2000


class PersuaderAgent(AgentExecutor):
    agent_type = 'persuader'
    label = 'Persuader'

    def perform(self, run_id, profile, input_data):
        contact = self.resolve_contact(input_data)
        issue = input_data.get('issue')
        channel = input_data.get('channel') or 'email'
        knowledge = self.build_knowledge_context(profile)

        system_prompt = f"""You are a constituent engagement specialist for {profile.candidate_name or 'the candidate'} ({profile.candidate_party or ''}) in {profile.riding_name or 'this riding'}.

CRITICAL RULES:
- You are NOT a telemarketer. You are a knowledgeable political aide.
- Lead with THEIR concern, not your ask.
- Reference specific policy details from the knowledge base.
- Offer something of VALUE: a policy summary, town hall invite, or direct answer.
- The first message should NEVER ask for money. Build trust first.
- Match the tone to the current political climate: {profile.exhaustion_gap or 'Be empathetic and direct.'}
- If voter fatigue is high, acknowledge it. Don't be dismissive.

Candidate Platform:
{knowledge[:KNOWLEDGE_PROMPT_CHARS]}

Policy Pillars: {format_list(profile.policy_pillars, '[]')}
Known Objections We Must Handle: {format_list(profile.policy_objections, '[]')}

Current Issue Intelligence:
{input_data.get('issue_scout_data') or 'No current intelligence available.'}"""

        user_message = f"""Write a {channel} message for this constituent:

Name: {contact.get('first_name') or 'Constituent'}
Riding: {contact.get('riding') or profile.riding_name or 'N/A'}
Issue They Care About: {issue or 'General engagement'}
Their Current Stance: {contact.get('voter_intent') or 'unknown'}
Previous Donor: {'Yes' if contact.get('donor_intent') == 'donated' else 'No'}
Issues They Follow: {format_list(contact.get('issues_care'), 'Unknown')}

Write ONLY the message. Make it feel like a personal note from a real campaign volunteer who genuinely cares."""

        result = self.completion.complete(system_prompt, user_message, temperature=0.7)

        contact_id = contact.get('id')
        if contact_id:
            # neutral starting point; later replies move it
            record_sentiment(
                profile.id, contact_id, issue or 'general', 0, 'voter',
                f"Outreach sent re: {issue or 'general engagement'}",
            )

        external_id = contact.get('external_id')
        if external_id:
            self.sync_crm(
                profile,
                lambda crm: crm.add_note(external_id, f"Persuader outreach sent re: {issue or 'general engagement'}"),
                run_id=run_id,
            )

        emit_activity(profile.id, 'message_drafted',
                      f"Persuader message drafted for {contact_name(contact) or 'constituent'}",
                      agent_run_id=run_id, contact_id=contact_id)

        return AgentOutput(
            output={
                'message': result.text,
                'channel': channel,
                'issue_targeted': issue,
                'contact_name': contact_name(contact),
            },
            tokens_used=result.tokens_used,
        )
