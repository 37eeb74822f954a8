"""
Secretary agent (business) — triages an inbound reply and drafts the response.
"""
from outreach_engine.agents.base import AgentExecutor, AgentOutput, format_list
from outreach_engine.services.activity import emit_activity

KNOWLEDGE_PROMPT_CHARS = 3000

INTENTS = ('question', 'objection', 'ready_to_book', 'unsubscribe', 'other')


class SecretaryAgent(AgentExecutor):
    agent_type = 'secretary'
    label = 'Secretary'

    def perform(self, run_id, profile, input_data):
        inbound = input_data.get('inbound_message') or ''
        contact = self.resolve_contact(input_data)
        knowledge = self.build_knowledge_context(profile)

        system_prompt = f"""You are an AI secretary for a {profile.industry_context or 'business'} company.
Your job is to respond to inbound messages from prospects naturally and helpfully.

CAPABILITIES:
- Answer questions about our services using ONLY the knowledge base below
- Handle objections gracefully (see common objections list)
- When someone is ready, suggest booking a call or appointment
- If you don't know something, say "Let me check with the team and get back to you"

TONE: Helpful, professional, knowledgeable. Like a great executive assistant.

Services: {format_list(profile.service_offerings)}
Common Objections & Responses: {format_list(profile.price_objections)}
Target Customer: {profile.target_persona or 'N/A'}

Knowledge Base:
{knowledge[:KNOWLEDGE_PROMPT_CHARS]}"""

        user_message = f"""Previous conversation:
{input_data.get('conversation_history') or ''}

New inbound message from {contact.get('first_name') or 'prospect'}:
"{inbound}"

Classify the intent ({' / '.join(INTENTS)}) and write the reply.
Format as JSON: {{ "intent": "...", "reply": "...", "should_escalate": false, "booking_ready": false }}"""

        result = self.completion.complete(system_prompt, user_message, temperature=0.4)

        emit_activity(profile.id, 'inbound_triaged', 'Inbound message triaged',
                      detail=inbound[:120], agent_run_id=run_id, contact_id=contact.get('id'))

        return AgentOutput(
            output={'analysis': result.text, 'inbound_message': inbound},
            tokens_used=result.tokens_used,
        )
