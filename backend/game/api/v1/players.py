from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from game.api.deps import get_db, get_player_service
from game.core.settings import settings
from game.models.player import Profession, Race
from game.repositories.player_repository import PageRequest, PlayerOrder
from game.schemas.player import PlayerCreate, PlayerOut, PlayerUpdate
from game.services.filters import Filter, combine
from game.services.player_service import PlayerService

router = APIRouter()


class PlayerFilterParams(BaseModel):
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    # Epoch milliseconds.
    after: int | None = None
    before: int | None = None
    banned: bool | None = None
    min_experience: int | None = None
    max_experience: int | None = None
    min_level: int | None = None
    max_level: int | None = None
    min_until_next_level: int | None = None
    max_until_next_level: int | None = None


def _filters(service: PlayerService, p: PlayerFilterParams) -> Filter:
    return combine(
        service.filter_by_name(p.name),
        service.filter_by_title(p.title),
        service.filter_by_race(p.race),
        service.filter_by_profession(p.profession),
        service.filter_by_birthday(p.after, p.before),
        service.filter_by_banned(p.banned),
        service.filter_by_experience(p.min_experience, p.max_experience),
        service.filter_by_level(p.min_level, p.max_level),
        service.filter_by_until_next_level(p.min_until_next_level, p.max_until_next_level),
    )


@router.get("/players", response_model=list[PlayerOut])
def list_players(
    params: PlayerFilterParams = Depends(),
    order: PlayerOrder = PlayerOrder.ID,
    page_number: int = Query(default=0, ge=0),
    page_size: int | None = Query(default=None, ge=1),
    service: PlayerService = Depends(get_player_service),
):
    size = min(page_size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    page = service.find_all_players(
        _filters(service, params),
        PageRequest(page_number=page_number, page_size=size, order=order),
    )
    return page.items


@router.get("/players/count", response_model=int)
def count_players(
    params: PlayerFilterParams = Depends(),
    service: PlayerService = Depends(get_player_service),
):
    return service.get_count_players(_filters(service, params))


@router.post("/players", response_model=PlayerOut, status_code=201)
def create_player(
    payload: PlayerCreate,
    db: Session = Depends(get_db),
    service: PlayerService = Depends(get_player_service),
):
    player = service.create_player(payload)
    db.commit()
    db.refresh(player)
    return player


@router.get("/players/{player_id}", response_model=PlayerOut)
def get_player(
    player_id: int,
    service: PlayerService = Depends(get_player_service),
):
    return service.get_player_by_id(player_id)


@router.patch("/players/{player_id}", response_model=PlayerOut)
def update_player(
    player_id: int,
    payload: PlayerUpdate,
    db: Session = Depends(get_db),
    service: PlayerService = Depends(get_player_service),
):
    player = service.update_player(player_id, payload)
    db.commit()
    db.refresh(player)
    return player


@router.delete("/players/{player_id}")
def delete_player(
    player_id: int,
    db: Session = Depends(get_db),
    service: PlayerService = Depends(get_player_service),
):
    service.delete_player(player_id)
    db.commit()
    return Response(status_code=200)
