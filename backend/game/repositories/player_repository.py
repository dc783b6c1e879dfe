"""
Data access for player records.

The repository is the only component that talks to the SQLAlchemy session
directly. Services hand it Filter objects and a PageRequest; it turns them
into SELECT statements.
"""

import enum
import logging
from dataclasses import dataclass, field

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from game.models.player import Player
from game.services.filters import UNCONSTRAINED, Filter

logger = logging.getLogger(__name__)


class PlayerOrder(str, enum.Enum):
    ID = "ID"
    NAME = "NAME"
    EXPERIENCE = "EXPERIENCE"
    BIRTHDAY = "BIRTHDAY"
    LEVEL = "LEVEL"

    @property
    def column(self):
        return {
            PlayerOrder.ID: Player.id,
            PlayerOrder.NAME: Player.name,
            PlayerOrder.EXPERIENCE: Player.experience,
            PlayerOrder.BIRTHDAY: Player.birthday,
            PlayerOrder.LEVEL: Player.level,
        }[self]


@dataclass(frozen=True)
class PageRequest:
    page_number: int = 0
    page_size: int = 3
    order: PlayerOrder = PlayerOrder.ID

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


@dataclass
class Page:
    items: list[Player] = field(default_factory=list)
    page_number: int = 0
    page_size: int = 0
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return -(-self.total // self.page_size)


class PlayerRepository:
    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, stmt: Select, filters: Filter) -> Select:
        clause = filters.clause(Player)
        if clause is not None:
            stmt = stmt.where(clause)
        return stmt

    def insert_and_flush(self, player: Player) -> Player:
        self.db.add(player)
        self.db.flush()
        self.db.refresh(player)
        return player

    def find_by_id(self, player_id: int) -> Player | None:
        return self.db.get(Player, player_id)

    def find_page(self, filters: Filter = UNCONSTRAINED, page: PageRequest | None = None) -> Page:
        page = page or PageRequest()
        stmt = (
            self._filtered(select(Player), filters)
            .order_by(page.order.column, Player.id)
            .offset(page.offset)
            .limit(page.page_size)
        )
        items = list(self.db.execute(stmt).scalars().all())
        logger.debug(
            "Fetched %d players (page=%d size=%d order=%s)",
            len(items), page.page_number, page.page_size, page.order.value,
        )
        return Page(
            items=items,
            page_number=page.page_number,
            page_size=page.page_size,
            total=self.count(filters),
        )

    def count(self, filters: Filter = UNCONSTRAINED) -> int:
        stmt = self._filtered(select(func.count(Player.id)), filters)
        return self.db.execute(stmt).scalar_one()

    def save(self, player: Player) -> Player:
        self.db.add(player)
        self.db.flush()
        return player

    def delete(self, player: Player) -> None:
        self.db.delete(player)
        self.db.flush()
