"""Create users, clubs, events, recruitments and their submissions"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '3a7c5e9d2b14'
down_revision = None
branch_labels = None
depends_on = None

JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    # Students and club admins
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('roll_number', sa.String(50), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('club_name', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('roll_number')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_club_name'), 'users', ['club_name'])

    # Club profiles
    op.create_table(
        'clubs',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('popular_people', JSON, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_clubs_name'), 'clubs', ['name'], unique=True)

    # Events
    op.create_table(
        'events',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('club_name', sa.String(50), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('event_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('event_time', sa.String(50), nullable=False),
        sa.Column('venue', sa.String(200), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('event_type', sa.String(20), nullable=False),
        sa.Column('tags', JSON, nullable=False),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('registration_deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_events_club_name_event_date', 'events', ['club_name', 'event_date'])
    op.create_index('ix_events_is_active_event_date', 'events', ['is_active', 'event_date'])

    op.create_table(
        'event_registrations',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_name', sa.String(100), nullable=False),
        sa.Column('roll_number', sa.String(50), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('additional_info', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='registered'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'student_id', name='uq_event_registrations_event_student')
    )
    op.create_index('ix_event_registrations_student_created', 'event_registrations', ['student_id', 'created_at'])

    # Recruitments
    op.create_table(
        'recruitments',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('club_name', sa.String(50), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('eligibility', sa.Text(), nullable=False),
        sa.Column('application_process', sa.Text(), nullable=False),
        sa.Column('application_deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('tags', JSON, nullable=False),
        sa.Column('positions', JSON, nullable=False),
        sa.Column('questions', JSON, nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_recruitments_club_name_deadline', 'recruitments', ['club_name', 'application_deadline'])
    op.create_index('ix_recruitments_is_active_deadline', 'recruitments', ['is_active', 'application_deadline'])

    op.create_table(
        'club_applications',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('recruitment_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_name', sa.String(100), nullable=False),
        sa.Column('roll_number', sa.String(50), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(30), nullable=False),
        sa.Column('applied_position', sa.String(200), nullable=False),
        sa.Column('experience', sa.Text(), nullable=False),
        sa.Column('skills', sa.Text(), nullable=False),
        sa.Column('why_join', sa.Text(), nullable=False),
        sa.Column('portfolio', sa.Text(), nullable=False),
        sa.Column('resume', sa.Text(), nullable=False),
        sa.Column('answers', JSON, nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='applied'),
        sa.Column('feedback', sa.Text(), nullable=False, server_default=''),
        sa.Column('interview_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['recruitment_id'], ['recruitments.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('recruitment_id', 'student_id', name='uq_club_applications_recruitment_student')
    )
    op.create_index('ix_club_applications_student_created', 'club_applications', ['student_id', 'created_at'])


def downgrade():
    op.drop_index('ix_club_applications_student_created', table_name='club_applications')
    op.drop_table('club_applications')
    op.drop_index('ix_recruitments_is_active_deadline', table_name='recruitments')
    op.drop_index('ix_recruitments_club_name_deadline', table_name='recruitments')
    op.drop_table('recruitments')
    op.drop_index('ix_event_registrations_student_created', table_name='event_registrations')
    op.drop_table('event_registrations')
    op.drop_index('ix_events_is_active_event_date', table_name='events')
    op.drop_index('ix_events_club_name_event_date', table_name='events')
    op.drop_table('events')
    op.drop_index(op.f('ix_clubs_name'), table_name='clubs')
    op.drop_table('clubs')
    op.drop_index(op.f('ix_users_club_name'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
