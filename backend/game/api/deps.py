from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from game.db.session import SessionLocal
from game.repositories.player_repository import PlayerRepository
from game.services.player_service import PlayerService


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_player_service(db: Session = Depends(get_db)) -> PlayerService:
    return PlayerService(PlayerRepository(db))
