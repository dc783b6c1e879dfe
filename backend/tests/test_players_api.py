from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from game.api.deps import get_db
from game.core.epoch import to_epoch_millis
from game.db.base import Base
from game.db.session import enable_sqlite_pragmas
import game.models.player  # noqa: F401
from game.main import app


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_pragmas(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _player(**overrides):
    payload = {
        "name": "Thorin",
        "title": "King under the Mountain",
        "race": "DWARF",
        "profession": "WARRIOR",
        "birthday": to_epoch_millis(datetime(2008, 2, 2)),
        "experience": 100,
    }
    payload.update(overrides)
    return payload


def test_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_player_crud_flow(client):
    r = client.post("/api/v1/players", json=_player())
    assert r.status_code == 201
    created = r.json()
    assert created["id"] > 0
    assert created["level"] == 1
    assert created["until_next_level"] == 200
    assert created["banned"] is False
    assert created["birthday"] == to_epoch_millis(datetime(2008, 2, 2))

    pid = created["id"]
    g = client.get(f"/api/v1/players/{pid}")
    assert g.status_code == 200
    assert g.json() == created

    u = client.patch(f"/api/v1/players/{pid}", json={"experience": 0, "title": "Exile"})
    assert u.status_code == 200
    assert u.json()["level"] == 0
    assert u.json()["until_next_level"] == 100
    assert u.json()["title"] == "Exile"
    assert u.json()["name"] == "Thorin"

    d = client.delete(f"/api/v1/players/{pid}")
    assert d.status_code == 200

    missing = client.get(f"/api/v1/players/{pid}")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "No such player"


def test_create_rejects_invalid_input(client):
    r = client.post("/api/v1/players", json=_player(name="N" * 13))
    assert r.status_code == 400
    assert r.json()["field"] == "name"

    r = client.post("/api/v1/players", json=_player(birthday=to_epoch_millis(datetime(1999, 1, 1))))
    assert r.status_code == 400
    assert r.json()["detail"] == "Birthday is out of bounds"

    r = client.post("/api/v1/players", json={"name": "Nobody"})
    assert r.status_code == 400

    assert client.get("/api/v1/players/count").json() == 0


def test_bad_and_unknown_ids(client):
    assert client.get("/api/v1/players/0").status_code == 400
    assert client.get("/api/v1/players/-1").status_code == 400
    assert client.get("/api/v1/players/999999").status_code == 404
    assert client.patch("/api/v1/players/999999", json={"name": "X"}).status_code == 404
    assert client.delete("/api/v1/players/999999").status_code == 404
    assert client.delete("/api/v1/players/0").status_code == 400


def test_update_rejects_invalid_field(client):
    pid = client.post("/api/v1/players", json=_player()).json()["id"]

    r = client.patch(f"/api/v1/players/{pid}", json={"title": "", "experience": 5000})
    assert r.status_code == 400

    g = client.get(f"/api/v1/players/{pid}").json()
    assert g["title"] == "King under the Mountain"
    assert g["experience"] == 100


def test_list_and_count_with_filters(client):
    client.post("/api/v1/players", json=_player(name="Thorin", experience=0))
    client.post("/api/v1/players", json=_player(name="Balin", experience=300, banned=True))
    client.post("/api/v1/players", json=_player(name="Dwalin", experience=5000))
    client.post(
        "/api/v1/players",
        json=_player(name="Elrond", race="ELF", profession="CLERIC", experience=100_000),
    )

    default_page = client.get("/api/v1/players")
    assert default_page.status_code == 200
    assert [p["name"] for p in default_page.json()] == ["Thorin", "Balin", "Dwalin"]

    second = client.get("/api/v1/players", params={"page_number": 1})
    assert [p["name"] for p in second.json()] == ["Elrond"]

    dwarves = client.get("/api/v1/players", params={"race": "DWARF", "banned": "false", "page_size": 10})
    assert [p["name"] for p in dwarves.json()] == ["Thorin", "Dwalin"]

    by_exp = client.get(
        "/api/v1/players", params={"order": "EXPERIENCE", "min_experience": 300, "page_size": 10}
    )
    assert [p["name"] for p in by_exp.json()] == ["Balin", "Dwalin", "Elrond"]

    assert client.get("/api/v1/players/count").json() == 4
    assert client.get("/api/v1/players/count", params={"name": "alin"}).json() == 2
    assert client.get("/api/v1/players/count", params={"min_level": 2, "max_level": 9}).json() == 2
    assert client.get("/api/v1/players/count", params={"max_until_next_level": 100}).json() == 1


def test_patch_skips_null_fields(client):
    pid = client.post("/api/v1/players", json=_player(experience=0)).json()["id"]

    r = client.patch(f"/api/v1/players/{pid}", json={"name": None, "banned": None, "experience": 100})
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Thorin"
    assert body["banned"] is False
    assert body["experience"] == 100
    assert body["level"] == 1
    assert body["until_next_level"] == 200


@pytest.mark.parametrize("millis", [300_000_000_000_000, -300_000_000_000_000, -1])
def test_out_of_range_epoch_birthday_is_bad_request(client, millis):
    r = client.post("/api/v1/players", json=_player(birthday=millis))
    assert r.status_code == 400
    assert r.json()["detail"] == "Birthday is out of bounds"

    pid = client.post("/api/v1/players", json=_player()).json()["id"]
    u = client.patch(f"/api/v1/players/{pid}", json={"birthday": millis})
    assert u.status_code == 400


def test_birthday_filters_with_huge_bounds(client):
    client.post("/api/v1/players", json=_player())

    huge = 300_000_000_000_000
    r = client.get("/api/v1/players", params={"after": huge})
    assert r.status_code == 200
    assert r.json() == []

    assert client.get("/api/v1/players/count", params={"before": huge}).json() == 1
    assert client.get("/api/v1/players/count", params={"after": -huge}).json() == 1
