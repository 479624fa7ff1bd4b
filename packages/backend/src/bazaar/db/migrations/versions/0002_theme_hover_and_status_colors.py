"""Theme customization: hover, card and status colors, button radius, extra images

Revision ID: 0002_theme_extras
Revises: 0001_initial
Create Date: 2026-10-20 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002_theme_extras'
down_revision: Union[str, None] = '0001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_COLORS = (
    "button_hover_color",
    "button_hover_text_color",
    "card_background_color",
    "nav_bar_hover_color",
    "link_hover_color",
    "success_color",
    "warning_color",
    "error_color",
)
_IMAGES = ("about_image", "footer_image")


def upgrade() -> None:
    with op.batch_alter_table("theme_customizations") as batch:
        for name in _COLORS:
            batch.add_column(sa.Column(name, sa.String(30), nullable=True))
        batch.add_column(sa.Column("button_border_radius", sa.String(20), nullable=True))
        for name in _IMAGES:
            batch.add_column(sa.Column(name, sa.Text(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("theme_customizations") as batch:
        for name in (*_IMAGES, "button_border_radius", *reversed(_COLORS)):
            batch.drop_column(name)
