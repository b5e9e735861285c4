"""create nominations table

Revision ID: 4d2e9a1c7b30
Revises:
Create Date: 2025-08-02 10:12:41.208113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from nomination_service.constants import ALL_DOMAINS, ALL_GENDERS, sql_in_list


# revision identifiers, used by Alembic.
revision: str = '4d2e9a1c7b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


UPDATED_AT_FUNCTION = """
CREATE OR REPLACE FUNCTION nominations_set_updated_at()
RETURNS TRIGGER AS $$
BEGIN
    -- Only fill in when the writer left the timestamp untouched
    IF NEW.updated_at IS NOT DISTINCT FROM OLD.updated_at THEN
        NEW.updated_at = clock_timestamp();
    END IF;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;
"""

UPDATED_AT_TRIGGER = """
CREATE TRIGGER trg_nominations_updated_at
    BEFORE UPDATE ON nominations
    FOR EACH ROW
    EXECUTE FUNCTION nominations_set_updated_at();
"""


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'nominations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('course', sa.String(length=255), nullable=False),
        sa.Column('phone_no', sa.String(length=20), nullable=False),
        sa.Column('domain', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('insta_id', sa.String(length=255), nullable=True),
        sa.Column('github_id', sa.String(length=255), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_nominations_email'),
        sa.CheckConstraint(f"domain in {sql_in_list(ALL_DOMAINS)}", name='ck_nominations_domain'),
        sa.CheckConstraint(f"gender in {sql_in_list(ALL_GENDERS)}", name='ck_nominations_gender'),
    )
    op.create_index('idx_nominations_domain', 'nominations', ['domain'], unique=False)
    op.create_index('idx_nominations_created_at', 'nominations', ['created_at'], unique=False)

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute(UPDATED_AT_FUNCTION)
        op.execute(UPDATED_AT_TRIGGER)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS trg_nominations_updated_at ON nominations")
        op.execute("DROP FUNCTION IF EXISTS nominations_set_updated_at()")
    op.drop_index('idx_nominations_created_at', table_name='nominations')
    op.drop_index('idx_nominations_domain', table_name='nominations')
    op.drop_table('nominations')
