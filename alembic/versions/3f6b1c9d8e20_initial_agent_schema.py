"""Initial agent schema: profiles, contacts, agent_runs, activity_events, sentiment_readings, integrations

Revision ID: 3f6b1c9d8e20
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f6b1c9d8e20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('profiles',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('tenant_id', sa.Text(), nullable=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('mode', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('industry_context', sa.Text(), nullable=True),
        sa.Column('target_persona', sa.Text(), nullable=True),
        sa.Column('knowledge_base', sa.JSON(), nullable=True),
        sa.Column('service_offerings', sa.JSON(), nullable=True),
        sa.Column('price_objections', sa.JSON(), nullable=True),
        sa.Column('riding_name', sa.Text(), nullable=True),
        sa.Column('riding_code', sa.Text(), nullable=True),
        sa.Column('geographic_focus', sa.JSON(), nullable=True),
        sa.Column('policy_pillars', sa.JSON(), nullable=True),
        sa.Column('policy_objections', sa.JSON(), nullable=True),
        sa.Column('candidate_name', sa.Text(), nullable=True),
        sa.Column('candidate_party', sa.Text(), nullable=True),
        sa.Column('voting_record_url', sa.Text(), nullable=True),
        sa.Column('exhaustion_gap', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('contacts',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('profile_id', sa.Text(), nullable=False),
        sa.Column('external_id', sa.Text(), nullable=True),
        sa.Column('first_name', sa.Text(), nullable=True),
        sa.Column('last_name', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('social_handle', sa.Text(), nullable=True),
        sa.Column('profile_url', sa.Text(), nullable=True),
        sa.Column('source', sa.Text(), nullable=True),
        sa.Column('company', sa.Text(), nullable=True),
        sa.Column('job_title', sa.Text(), nullable=True),
        sa.Column('lead_score', sa.Integer(), nullable=True),
        sa.Column('lead_status', sa.Text(), nullable=True),
        sa.Column('riding', sa.Text(), nullable=True),
        sa.Column('voter_intent', sa.Text(), nullable=True),
        sa.Column('donor_intent', sa.Text(), nullable=True),
        sa.Column('issues_care', sa.JSON(), nullable=True),
        sa.Column('support_level', sa.Integer(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contacts_profile_id', 'contacts', ['profile_id'])

    op.create_table('agent_runs',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('profile_id', sa.Text(), nullable=False),
        sa.Column('contact_id', sa.Text(), nullable=True),
        sa.Column('agent_type', sa.Text(), nullable=False),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('input_data', sa.JSON(), nullable=True),
        sa.Column('output_data', sa.JSON(), nullable=True),
        sa.Column('llm_provider', sa.Text(), nullable=True),
        sa.Column('tokens_used', sa.Integer(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_agent_runs_profile_id', 'agent_runs', ['profile_id'])

    op.create_table('activity_events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('profile_id', sa.Text(), nullable=False),
        sa.Column('agent_run_id', sa.Text(), nullable=True),
        sa.Column('contact_id', sa.Text(), nullable=True),
        sa.Column('event_type', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('detail', sa.Text(), nullable=True),
        sa.Column('icon', sa.Text(), nullable=True),
        sa.Column('color', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['agent_run_id'], ['agent_runs.id']),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_activity_events_profile_id', 'activity_events', ['profile_id'])

    op.create_table('sentiment_readings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('profile_id', sa.Text(), nullable=False),
        sa.Column('contact_id', sa.Text(), nullable=False),
        sa.Column('issue', sa.Text(), nullable=True),
        sa.Column('sentiment_score', sa.Integer(), nullable=False),
        sa.Column('intent_type', sa.Text(), nullable=False),
        sa.Column('source', sa.Text(), nullable=True),
        sa.Column('raw_signal', sa.Text(), nullable=True),
        sa.Column('recorded_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sentiment_readings_profile_id', 'sentiment_readings', ['profile_id'])

    op.create_table('integrations',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('profile_id', sa.Text(), nullable=False),
        sa.Column('provider', sa.Text(), nullable=False),
        sa.Column('api_key', sa.Text(), nullable=True),
        sa.Column('api_secret', sa.Text(), nullable=True),
        sa.Column('access_token', sa.Text(), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('endpoint_url', sa.Text(), nullable=True),
        sa.Column('extra_config', sa.JSON(), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=True),
        sa.Column('last_tested_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_integrations_profile_id', 'integrations', ['profile_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_integrations_profile_id', table_name='integrations')
    op.drop_table('integrations')
    op.drop_index('ix_sentiment_readings_profile_id', table_name='sentiment_readings')
    op.drop_table('sentiment_readings')
    op.drop_index('ix_activity_events_profile_id', table_name='activity_events')
    op.drop_table('activity_events')
    op.drop_index('ix_agent_runs_profile_id', table_name='agent_runs')
    op.drop_table('agent_runs')
    op.drop_index('ix_contacts_profile_id', table_name='contacts')
    op.drop_table('contacts')
    op.drop_table('profiles')
