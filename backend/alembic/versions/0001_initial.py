"""initial schema: parking spots and tickets

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def upgrade() -> None:
    op.create_table('parking',
        sa.Column('parking_number', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.text('true')),
    )
    op.create_index('ix_parking_type', 'parking', ['type'])
    op.create_table('ticket',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('parking_number', sa.Integer(), sa.ForeignKey('parking.parking_number'), nullable=False),
        sa.Column('vehicle_reg_number', sa.String(length=10), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('in_time', sa.DateTime(), nullable=False),
        sa.Column('out_time', sa.DateTime(), nullable=True),
        sa.Column('is_returning_user', sa.Boolean(), nullable=False, server_default=sa.text('false')),
    )
    op.create_index('ix_ticket_vehicle_reg_number', 'ticket', ['vehicle_reg_number'])
    # open-session lookup by vehicle
    op.create_index('ix_ticket_open', 'ticket', ['vehicle_reg_number', 'out_time'])


def downgrade() -> None:
    op.drop_index('ix_ticket_open', table_name='ticket')
    op.drop_index('ix_ticket_vehicle_reg_number', table_name='ticket')
    op.drop_table('ticket')
    op.drop_index('ix_parking_type', table_name='parking')
    op.drop_table('parking')
