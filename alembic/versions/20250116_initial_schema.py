"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2025-01-16 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create crash_records table
    op.create_table(
        'crash_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('report_number', sa.String(length=20), nullable=True),
        sa.Column('report_seq_no', sa.Integer(), nullable=True),
        sa.Column('dot_number', sa.String(length=20), nullable=True),
        sa.Column('report_date', sa.Date(), nullable=True),
        sa.Column('report_state', sa.String(length=2), nullable=True),
        sa.Column('fatalities', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('injuries', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tow_away', sa.String(length=1), nullable=True),
        sa.Column('hazmat_released', sa.String(length=1), nullable=True),
        sa.Column('trafficway_desc', sa.String(length=100), nullable=True),
        sa.Column('access_control_desc', sa.String(length=50), nullable=True),
        sa.Column('road_surface_condition', sa.String(length=50), nullable=True),
        sa.Column('weather_condition', sa.String(length=50), nullable=True),
        sa.Column('light_condition', sa.String(length=50), nullable=True),
        sa.Column('vehicle_id_number', sa.String(length=20), nullable=True),
        sa.Column('vehicle_license_number', sa.String(length=20), nullable=True),
        sa.Column('vehicle_license_state', sa.String(length=2), nullable=True),
        sa.Column('severity_weight', sa.Integer(), nullable=True),
        sa.Column('time_weight', sa.Integer(), nullable=True),
        sa.Column('citation_issued', sa.String(length=10), nullable=True),
        sa.Column('seq_num', sa.Integer(), nullable=True),
        sa.Column('not_preventable', sa.String(length=1), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('fatalities >= 0', name='ck_crash_records_fatalities_nonneg'),
        sa.CheckConstraint('injuries >= 0', name='ck_crash_records_injuries_nonneg')
    )
    op.create_index(op.f('ix_crash_records_report_date'), 'crash_records', ['report_date'], unique=False)
    op.create_index(op.f('ix_crash_records_road_surface_condition'), 'crash_records', ['road_surface_condition'], unique=False)
    op.create_index(op.f('ix_crash_records_weather_condition'), 'crash_records', ['weather_condition'], unique=False)

    # Create crash_summary table
    op.create_table(
        'crash_summary',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('month', sa.Integer(), nullable=True),
        sa.Column('road_condition', sa.String(length=50), nullable=True),
        sa.Column('weather_condition', sa.String(length=50), nullable=True),
        sa.Column('light_condition', sa.String(length=50), nullable=True),
        sa.Column('crash_count', sa.Integer(), nullable=False),
        sa.Column('fatalities', sa.Integer(), nullable=False),
        sa.Column('injuries', sa.Integer(), nullable=False),
        sa.Column('avg_severity', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_crash_summary_year'), 'crash_summary', ['year'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_crash_summary_year'), table_name='crash_summary')
    op.drop_table('crash_summary')

    op.drop_index(op.f('ix_crash_records_weather_condition'), table_name='crash_records')
    op.drop_index(op.f('ix_crash_records_road_surface_condition'), table_name='crash_records')
    op.drop_index(op.f('ix_crash_records_report_date'), table_name='crash_records')
    op.drop_table('crash_records')
