"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-09-14

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    ]

def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=256), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "construction_site",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_construction_site_project_id", "construction_site", ["project_id"])

    op.create_table(
        "defect",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("site_id", sa.Integer(), sa.ForeignKey("construction_site.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("creator_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("assignee_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="SET NULL"), nullable=True),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="NEW"),
        sa.Column("priority", sa.String(length=32), nullable=False, server_default="MEDIUM"),
        sa.Column("deadline", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_defect_site_id", "defect", ["site_id"])
    op.create_index("ix_defect_creator_id", "defect", ["creator_id"])
    op.create_index("ix_defect_assignee_id", "defect", ["assignee_id"])
    op.create_index("ix_defect_status", "defect", ["status"])
    op.create_index("ix_defect_priority", "defect", ["priority"])

    op.create_table(
        "comment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("defect_id", sa.Integer(), sa.ForeignKey("defect.id", ondelete="CASCADE"), nullable=False),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_comment_defect_id", "comment", ["defect_id"])
    op.create_index("ix_comment_author_id", "comment", ["author_id"])

    op.create_table(
        "attachment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("defect_id", sa.Integer(), sa.ForeignKey("defect.id", ondelete="CASCADE"), nullable=False),
        sa.Column("file_name", sa.String(length=512), nullable=False),
        sa.Column("file_path", sa.String(length=1024), nullable=True),
        sa.Column("content_type", sa.String(length=128), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_attachment_defect_id", "attachment", ["defect_id"])

def downgrade():
    op.drop_table("attachment")
    op.drop_table("comment")
    op.drop_table("defect")
    op.drop_table("construction_site")
    op.drop_table("project")
    op.drop_table("user")
