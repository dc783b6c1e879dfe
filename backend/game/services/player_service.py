"""
Player service: validation, derived stats and CRUD over PlayerRepository.

Level and experience-to-next-level are never taken from input; they are
recomputed from experience on every create and update.
"""

import logging
import math
from datetime import datetime

from game.core.epoch import from_epoch_millis
from game.models.player import Player, Profession, Race
from game.repositories.player_repository import Page, PageRequest, PlayerRepository
from game.schemas.player import PlayerCreate, PlayerUpdate
from game.services.exceptions import BadRequestError, NotFoundError
from game.services.filters import UNCONSTRAINED, Contains, Equals, Filter, range_filter

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 12
MAX_TITLE_LENGTH = 30
MIN_BIRTH_YEAR = 2000
MAX_BIRTH_YEAR = 3000
MAX_EXPERIENCE = 10_000_000

# Order matters: update applies fields in this order after validating all of them.
UPDATABLE_FIELDS = ("name", "title", "race", "profession", "birthday", "banned", "experience")


def calculate_level(experience: int) -> int:
    return int(math.sqrt(2500 + 200 * experience) - 50) // 100


def calculate_until_next_level(level: int, experience: int) -> int:
    return 50 * (level + 1) * (level + 2) - experience


class PlayerService:
    def __init__(self, repository: PlayerRepository):
        self.repository = repository

    # --- validation -------------------------------------------------------

    def check_id(self, player_id: int) -> None:
        if player_id is None or player_id <= 0:
            raise BadRequestError("Invalid ID", field="id")

    def check_name(self, name: str | None) -> None:
        if name is None or len(name) > MAX_NAME_LENGTH:
            raise BadRequestError("Invalid name", field="name")

    def check_title(self, title: str | None) -> None:
        if not title or len(title) > MAX_TITLE_LENGTH:
            raise BadRequestError("Invalid title", field="title")

    def check_race(self, race: Race | None) -> None:
        if race is None:
            raise BadRequestError("Invalid race", field="race")

    def check_profession(self, profession: Profession | None) -> None:
        if profession is None:
            raise BadRequestError("Invalid profession", field="profession")

    def check_birthday(self, birthday: datetime | None) -> None:
        if birthday is None:
            raise BadRequestError("Birthday is invalid", field="birthday")
        if birthday.year < MIN_BIRTH_YEAR or birthday.year > MAX_BIRTH_YEAR:
            raise BadRequestError("Birthday is out of bounds", field="birthday")

    def check_experience(self, experience: int | None) -> None:
        if experience is None or experience < 0 or experience > MAX_EXPERIENCE:
            raise BadRequestError("Invalid experience", field="experience")

    def _check_field(self, field: str, value) -> None:
        # banned is a plain flag with nothing to check once present.
        check = getattr(self, f"check_{field}", None)
        if check is not None:
            check(value)

    # --- derived stats ----------------------------------------------------

    def _apply_derived_stats(self, player: Player) -> None:
        player.level = calculate_level(player.experience)
        player.until_next_level = calculate_until_next_level(player.level, player.experience)

    # --- listing ----------------------------------------------------------

    def find_all_players(self, filters: Filter = UNCONSTRAINED, page: PageRequest | None = None) -> Page:
        return self.repository.find_page(filters, page)

    def get_count_players(self, filters: Filter = UNCONSTRAINED) -> int:
        return self.repository.count(filters)

    # --- CRUD -------------------------------------------------------------

    def create_player(self, data: PlayerCreate) -> Player:
        try:
            self.check_name(data.name)
            self.check_title(data.title)
            self.check_race(data.race)
            self.check_profession(data.profession)
            self.check_birthday(data.birthday)
            self.check_experience(data.experience)
        except BadRequestError as e:
            logger.warning("Rejected player create: %s", e.message)
            raise

        player = Player(
            name=data.name,
            title=data.title,
            race=data.race,
            profession=data.profession,
            birthday=data.birthday,
            banned=False if data.banned is None else data.banned,
            experience=data.experience,
        )
        self._apply_derived_stats(player)
        player = self.repository.insert_and_flush(player)
        logger.info("Created player %s (level %d)", player.id, player.level)
        return player

    def get_player_by_id(self, player_id: int) -> Player:
        self.check_id(player_id)
        player = self.repository.find_by_id(player_id)
        if player is None:
            raise NotFoundError("No such player", id=player_id)
        return player

    def update_player(self, player_id: int, data: PlayerUpdate) -> Player:
        player = self.get_player_by_id(player_id)
        mask = data.update_mask()
        fields = [f for f in UPDATABLE_FIELDS if f in mask]

        # Validate everything first so a rejected update leaves the record untouched.
        try:
            for field in fields:
                self._check_field(field, mask[field])
        except BadRequestError as e:
            logger.warning("Rejected update of player %s: %s", player_id, e.message)
            raise

        for field in fields:
            setattr(player, field, mask[field])
        self._apply_derived_stats(player)

        player = self.repository.save(player)
        logger.info("Updated player %s fields=%s", player_id, ",".join(fields) or "-")
        return player

    def delete_player(self, player_id: int) -> None:
        player = self.get_player_by_id(player_id)
        self.repository.delete(player)
        logger.info("Deleted player %s", player_id)

    # --- filters ----------------------------------------------------------

    def filter_by_name(self, name: str | None) -> Filter:
        return UNCONSTRAINED if name is None else Contains("name", name)

    def filter_by_title(self, title: str | None) -> Filter:
        return UNCONSTRAINED if title is None else Contains("title", title)

    def filter_by_race(self, race: Race | None) -> Filter:
        return UNCONSTRAINED if race is None else Equals("race", race)

    def filter_by_profession(self, profession: Profession | None) -> Filter:
        return UNCONSTRAINED if profession is None else Equals("profession", profession)

    def filter_by_experience(self, min_experience: int | None, max_experience: int | None) -> Filter:
        return range_filter("experience", min_experience, max_experience)

    def filter_by_level(self, min_level: int | None, max_level: int | None) -> Filter:
        return range_filter("level", min_level, max_level)

    def filter_by_until_next_level(self, min_until: int | None, max_until: int | None) -> Filter:
        return range_filter("until_next_level", min_until, max_until)

    def filter_by_birthday(self, after: int | None, before: int | None) -> Filter:
        """``after``/``before`` are epoch milliseconds."""
        return range_filter(
            "birthday",
            None if after is None else from_epoch_millis(after),
            None if before is None else from_epoch_millis(before),
        )

    def filter_by_banned(self, banned: bool | None) -> Filter:
        return UNCONSTRAINED if banned is None else Equals("banned", banned)
