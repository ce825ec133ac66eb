"""Create workflow, content, notification and audit tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

_TIMESTAMPED_TABLES = (
    'workflow_definitions',
    'workflow_states',
    'workflow_roles',
    'workflow_transitions',
    'workflow_role_permissions',
    'content_items',
    'workflow_notifications',
    'audit_events',
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
    ]


def upgrade() -> None:
    """Create workflow engine tables."""
    op.create_table(
        'workflow_definitions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('description', sa.String(512), nullable=True),
        sa.Column('content_types', postgresql.JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('is_default', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('initial_state', sa.String(64), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        'idx_workflow_definitions_content_types',
        'workflow_definitions',
        ['content_types'],
        postgresql_using='gin',
    )

    op.create_table(
        'workflow_states',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('workflow_definition_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workflow_definitions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('key', sa.String(64), nullable=False),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('description', sa.String(512), nullable=True),
        sa.Column('color', sa.String(16), nullable=False, server_default='#6c757d'),
        sa.Column('icon', sa.String(64), nullable=False, server_default='fas fa-circle'),
        sa.Column('sort_order', sa.Integer, nullable=False, server_default='0'),
        sa.Column('is_initial', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_published', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_final', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_workflow_states_workflow_definition_id', 'workflow_states', ['workflow_definition_id'])
    op.create_index('idx_workflow_states_definition_key', 'workflow_states', ['workflow_definition_id', 'key'], unique=True)

    op.create_table(
        'workflow_roles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('workflow_definition_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workflow_definitions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_key', sa.String(64), nullable=False),
        sa.Column('display_name', sa.String(128), nullable=False),
        sa.Column('description', sa.String(512), nullable=True),
        sa.Column('priority', sa.Integer, nullable=False, server_default='0'),
        sa.Column('can_create', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('can_edit', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('can_delete', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('can_view_all', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('allowed_from_states', postgresql.JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('allowed_to_states', postgresql.JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_workflow_roles_workflow_definition_id', 'workflow_roles', ['workflow_definition_id'])
    op.create_index('idx_workflow_roles_definition_key', 'workflow_roles', ['workflow_definition_id', 'role_key'], unique=True)

    op.create_table(
        'workflow_transitions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('workflow_definition_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workflow_definitions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('from_state_key', sa.String(64), nullable=False),
        sa.Column('to_state_key', sa.String(64), nullable=False),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('description', sa.String(512), nullable=True),
        sa.Column('required_permission', sa.String(128), nullable=True),
        sa.Column('css_class', sa.String(64), nullable=False, server_default='btn-primary'),
        sa.Column('icon', sa.String(64), nullable=False, server_default='fas fa-arrow-right'),
        sa.Column('sort_order', sa.Integer, nullable=False, server_default='0'),
        sa.Column('requires_comment', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('send_notification', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('notification_template', sa.String(1024), nullable=True),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_workflow_transitions_workflow_definition_id', 'workflow_transitions', ['workflow_definition_id'])
    op.create_index('ix_workflow_transitions_from_state_key', 'workflow_transitions', ['from_state_key'])

    op.create_table(
        'workflow_role_permissions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('transition_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workflow_transitions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workflow_roles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('can_execute', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('requires_approval', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('approval_role_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workflow_roles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('conditions', sa.String(1024), nullable=True),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_workflow_role_permissions_transition_id', 'workflow_role_permissions', ['transition_id'])
    op.create_index('ix_workflow_role_permissions_role_id', 'workflow_role_permissions', ['role_id'])

    op.create_table(
        'content_items',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('content_type', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('owner_id', sa.String(128), nullable=True),
        sa.Column('workflow_state', sa.String(64), nullable=False),
        sa.Column('last_reviewer_id', sa.String(128), nullable=True),
        sa.Column('last_reviewed_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('review_comment', sa.Text, nullable=True),
        sa.Column('published', sa.DateTime(timezone=True), nullable=True),
        sa.Column('published_artifact_id', postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_content_items_content_type', 'content_items', ['content_type'])
    op.create_index('ix_content_items_workflow_state', 'content_items', ['workflow_state'])
    op.create_index('idx_content_items_type_state', 'content_items', ['content_type', 'workflow_state'])

    op.create_table(
        'workflow_notifications',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('content_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('content_type', sa.String(64), nullable=False),
        sa.Column('content_title', sa.String(255), nullable=True),
        sa.Column('actor_id', sa.String(128), nullable=False),
        sa.Column('category', sa.String(32), nullable=False),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('is_read', sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_workflow_notifications_content_id', 'workflow_notifications', ['content_id'])
    op.create_index('ix_workflow_notifications_is_read', 'workflow_notifications', ['is_read'])

    # Audit action is stored as a constrained string, not a native enum
    op.create_table(
        'audit_events',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('actor_id', sa.String(128), nullable=True),
        sa.Column('action', sa.String(32), nullable=False),
        sa.Column('entity_type', sa.String(50), nullable=False),
        sa.Column('entity_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('diff_json', postgresql.JSONB, nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_audit_events_actor_id', 'audit_events', ['actor_id'])
    op.create_index('ix_audit_events_entity_id', 'audit_events', ['entity_id'])

    # Add trigger for updated_at timestamp
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    for table in _TIMESTAMPED_TABLES:
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW
            EXECUTE FUNCTION update_updated_at_column();
        """)


def downgrade() -> None:
    """Drop workflow engine tables."""
    for table in _TIMESTAMPED_TABLES:
        op.execute(f'DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}')
    op.execute('DROP FUNCTION IF EXISTS update_updated_at_column()')

    op.drop_table('audit_events')
    op.drop_table('workflow_notifications')
    op.drop_table('content_items')
    op.drop_table('workflow_role_permissions')
    op.drop_table('workflow_transitions')
    op.drop_table('workflow_roles')
    op.drop_table('workflow_states')
    op.drop_table('workflow_definitions')
