import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from game.db.base import Base


class Race(str, enum.Enum):
    HUMAN = "HUMAN"
    DWARF = "DWARF"
    ELF = "ELF"
    GIANT = "GIANT"
    ORC = "ORC"
    TROLL = "TROLL"
    HOBBIT = "HOBBIT"


class Profession(str, enum.Enum):
    WARRIOR = "WARRIOR"
    ROGUE = "ROGUE"
    SORCERER = "SORCERER"
    CLERIC = "CLERIC"
    PALADIN = "PALADIN"
    NAZGUL = "NAZGUL"
    WARLOCK = "WARLOCK"
    DRUID = "DRUID"


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(12), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(30), nullable=False)
    race: Mapped[Race] = mapped_column(Enum(Race, name="race"), nullable=False)
    profession: Mapped[Profession] = mapped_column(
        Enum(Profession, name="profession"), nullable=False
    )

    # Naive UTC; the API exchanges it as epoch milliseconds.
    birthday: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    experience: Mapped[int] = mapped_column(Integer, nullable=False)
    # Derived from experience, see PlayerService.
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    until_next_level: Mapped[int] = mapped_column(Integer, nullable=False)
