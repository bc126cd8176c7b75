"""Create widget_types and widgets tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1b2c3d4e5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create widget_types and widgets tables."""
    op.create_table(
        'widget_types',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_widget_types_code', 'widget_types', ['code'], unique=True)
    op.create_index('ix_widget_types_is_active', 'widget_types', ['is_active'])

    # No ON DELETE CASCADE: removing a type leaves its widgets in place
    op.create_table(
        'widgets',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('widget_type_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['widget_type_id'], ['widget_types.id'], name='fk_widgets_widget_type'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_widgets_widget_type_id', 'widgets', ['widget_type_id'])
    op.create_index('ix_widgets_is_active', 'widgets', ['is_active'])
    op.create_index('ix_widgets_name', 'widgets', ['name'])


def downgrade():
    """Drop widget tables."""
    op.drop_index('ix_widgets_name', 'widgets')
    op.drop_index('ix_widgets_is_active', 'widgets')
    op.drop_index('ix_widgets_widget_type_id', 'widgets')
    op.drop_table('widgets')
    op.drop_index('ix_widget_types_is_active', 'widget_types')
    op.drop_index('ix_widget_types_code', 'widget_types')
    op.drop_table('widget_types')
