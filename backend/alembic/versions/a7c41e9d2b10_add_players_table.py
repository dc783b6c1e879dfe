"""add players table

Revision ID: a7c41e9d2b10
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a7c41e9d2b10"
down_revision = None
branch_labels = None
depends_on = None

RACES = ("HUMAN", "DWARF", "ELF", "GIANT", "ORC", "TROLL", "HOBBIT")
PROFESSIONS = ("WARRIOR", "ROGUE", "SORCERER", "CLERIC", "PALADIN", "NAZGUL", "WARLOCK", "DRUID")


def upgrade() -> None:
    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=12), nullable=False),
        sa.Column("title", sa.String(length=30), nullable=False),
        sa.Column("race", sa.Enum(*RACES, name="race"), nullable=False),
        sa.Column("profession", sa.Enum(*PROFESSIONS, name="profession"), nullable=False),
        sa.Column("birthday", sa.DateTime(), nullable=False),
        sa.Column("banned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("experience", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("until_next_level", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_players_name"), "players", ["name"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_players_name"), table_name="players")
    op.drop_table("players")

    # Postgres keeps the enum types around after the table is gone.
    if op.get_bind().dialect.name == "postgresql":
        sa.Enum(name="profession").drop(op.get_bind(), checkfirst=True)
        sa.Enum(name="race").drop(op.get_bind(), checkfirst=True)
