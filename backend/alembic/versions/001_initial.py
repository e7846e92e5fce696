"""Initial migration - create track tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create tracks table
    op.create_table(
        'tracks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('distance_km', sa.Float(), nullable=True),
        sa.Column('elevation_gain_m', sa.Float(), nullable=True),
        sa.Column('elevation_loss_m', sa.Float(), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=True),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('start_lat', sa.Float(), nullable=True),
        sa.Column('start_lon', sa.Float(), nullable=True),
        sa.Column('end_lat', sa.Float(), nullable=True),
        sa.Column('end_lon', sa.Float(), nullable=True),
        sa.Column('source_filename', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    # Create track_points table
    op.create_table(
        'track_points',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'track_id', sa.String(36),
            sa.ForeignKey('tracks.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('altitude', sa.Float(), nullable=True),
        sa.Column('time', sa.DateTime(), nullable=True),
        sa.Column('speed', sa.Float(), nullable=True),
        sa.Column('bearing', sa.Float(), nullable=True),
        sa.Column('accuracy', sa.Float(), nullable=True),
    )
    op.create_index('ix_track_points_track_id', 'track_points', ['track_id'])

    # Create waypoints table
    op.create_table(
        'waypoints',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'track_id', sa.String(36),
            sa.ForeignKey('tracks.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('waypoint_type', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('altitude', sa.Float(), nullable=True),
        sa.Column('time', sa.DateTime(), nullable=True),
        sa.Column('distance_km', sa.Float(), nullable=True),
        sa.Column('duration_s', sa.Float(), nullable=True),
    )
    op.create_index('ix_waypoints_track_id', 'waypoints', ['track_id'])


def downgrade() -> None:
    op.drop_index('ix_waypoints_track_id', table_name='waypoints')
    op.drop_table('waypoints')
    op.drop_index('ix_track_points_track_id', table_name='track_points')
    op.drop_table('track_points')
    op.drop_table('tracks')
