"""create measurements table

Revision ID: 3b9e6f1c2d4a
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b9e6f1c2d4a'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'measurements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('systolic', sa.SmallInteger(), nullable=False),
        sa.Column('diastolic', sa.SmallInteger(), nullable=False),
        sa.Column('pulse', sa.SmallInteger(), nullable=True),
        sa.Column('measured_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint('systolic BETWEEN 40 AND 260', name='ck_measurements_systolic_range'),
        sa.CheckConstraint('diastolic BETWEEN 20 AND 200', name='ck_measurements_diastolic_range'),
        sa.CheckConstraint('pulse IS NULL OR pulse BETWEEN 20 AND 250', name='ck_measurements_pulse_range'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index(
        'idx_measurements_measured_at',
        'measurements',
        [sa.text('measured_at DESC')],
    )


def downgrade():
    op.drop_index('idx_measurements_measured_at', table_name='measurements')
    op.drop_table('measurements')
