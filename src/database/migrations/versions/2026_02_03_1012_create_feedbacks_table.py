"""Create feedbacks table

Revision ID: 3c1f7a2d9e04
Revises:
Create Date: 2026-02-03 10:12:44.118203

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3c1f7a2d9e04"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "feedbacks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "author_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "recipient_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("ticket_number", sa.String(), nullable=False),
        sa.Column(
            "disputed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("dispute_reason", sa.Text(), nullable=True),
        sa.Column("disputed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "resolved_by_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolution_status", sa.String(length=20), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "rating >= 1 AND rating <= 5", name="ck_feedbacks_rating_range"
        ),
    )

    op.create_index("ix_feedbacks_author_id", "feedbacks", ["author_id"])
    op.create_index("ix_feedbacks_recipient_id", "feedbacks", ["recipient_id"])
    op.create_index("ix_feedbacks_ticket_number", "feedbacks", ["ticket_number"])
    op.create_index(
        "idx_feedback_unique",
        "feedbacks",
        ["author_id", "recipient_id", "ticket_number"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("idx_feedback_unique", table_name="feedbacks")
    op.drop_index("ix_feedbacks_ticket_number", table_name="feedbacks")
    op.drop_index("ix_feedbacks_recipient_id", table_name="feedbacks")
    op.drop_index("ix_feedbacks_author_id", table_name="feedbacks")
    op.drop_table("feedbacks")
