"""Add role and was_disputed to feedbacks

Existing installs created before buyer/seller roles and one-shot disputes
get both columns with defaults that match the previous behavior.

Revision ID: 8b52e0c4f6a1
Revises: 3c1f7a2d9e04
Create Date: 2026-03-17 15:40:09.552817

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8b52e0c4f6a1"
down_revision = "3c1f7a2d9e04"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column(
        "feedbacks",
        sa.Column(
            "role", sa.String(length=20), nullable=False, server_default="buyer"
        ),
    )
    op.add_column(
        "feedbacks",
        sa.Column(
            "was_disputed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
    )

    # Disputes rejected before this column existed must stay closed
    op.execute(
        sa.text(
            "UPDATE feedbacks SET was_disputed = true "
            "WHERE resolution_status = 'rejected'"
        )
    )


def downgrade() -> None:
    op.drop_column("feedbacks", "was_disputed")
    op.drop_column("feedbacks", "role")
