"""create_sheet_rows_table

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2025-03-20 10:00:00.000000

"""

import sqlalchemy as sa
import sqlalchemy_utils
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a9b7d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sheet_rows",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(binary=False), nullable=False),
        sa.Column("sheet_name", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("cells", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_sheet_rows_sheet_name", "sheet_rows", ["sheet_name"], unique=False)
    op.create_index(
        "ix_sheet_rows_sheet_position", "sheet_rows", ["sheet_name", "position"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_sheet_rows_sheet_position", table_name="sheet_rows")
    op.drop_index("ix_sheet_rows_sheet_name", table_name="sheet_rows")
    op.drop_table("sheet_rows")
