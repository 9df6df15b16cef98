"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-02-26

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from complyflow.infrastructure.persistence.postgresql.models import BaseModel

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_EXPIRE_TRIALS_FUNCTION = """
CREATE OR REPLACE FUNCTION expire_trials() RETURNS integer AS $$
DECLARE
    affected integer;
BEGIN
    UPDATE organizations
    SET subscription_tier = 'free', trial_ends_at = NULL, updated_at = NOW()
    WHERE trial_ends_at < NOW() AND subscription_tier <> 'free';
    GET DIAGNOSTICS affected = ROW_COUNT;
    RETURN affected;
END;
$$ LANGUAGE plpgsql;
"""


def upgrade() -> None:
    bind = op.get_bind()
    bind.execute(sa.text("CREATE EXTENSION IF NOT EXISTS vector"))
    BaseModel.metadata.create_all(bind=bind)
    bind.execute(sa.text(_EXPIRE_TRIALS_FUNCTION))


def downgrade() -> None:
    bind = op.get_bind()
    bind.execute(sa.text("DROP FUNCTION IF EXISTS expire_trials()"))
    BaseModel.metadata.drop_all(bind=bind)
