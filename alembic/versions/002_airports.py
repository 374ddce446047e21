"""Airports table with (name, city), IATA and ICAO uniqueness.

Revision ID: 002_airports
Revises: 001_national_parks
Create Date: 2025-08-09

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_airports"
down_revision: Union[str, None] = "001_national_parks"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "airports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("iata_code", sa.String(3), nullable=False),
        sa.Column("icao_code", sa.String(4), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=False),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=False),
        sa.Column("elevation", sa.Integer, nullable=True),
        sa.Column("timezone", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("name", "city", name="airports_name_city_unique"),
        sa.UniqueConstraint("iata_code", name="airports_iata_code_unique"),
        sa.UniqueConstraint("icao_code", name="airports_icao_code_unique"),
    )


def downgrade() -> None:
    op.drop_table("airports")
