from fastapi.testclient import TestClient

import neon_ttt
from neon_ttt import config
from neon_ttt.main import create_app
from neon_ttt.store import JsonFileStore, MemoryStore


def test_health(client):
    assert client.get("/health").json() == {"message": "Healthy"}


def test_index_serves_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "Neon Tic Tac Toe" in resp.text
    assert 'id="gameBoard"' in resp.text


def test_initial_state(client):
    snap = client.get("/state").json()
    assert snap["page"] == "home"
    assert snap["game"]["board"] == [""] * 9
    assert snap["game"]["current"] == "X"
    assert snap["profile"]["logged_in"] is False


def test_startup_loads_persisted_session():
    store = MemoryStore({config.STORAGE_KEY: '{"name":"Ann","stats":{"matchesPlayed":2,"matchesWon":1}}'})
    with TestClient(create_app(store)) as c:
        profile = c.get("/profile").json()
    assert profile["name"] == "Ann"
    assert profile["win_percentage"] == 50


def test_login_flows(client):
    body = client.post("/login/google", json={"name": " Ann "}).json()
    assert body["accepted"] is True
    assert body["notice"]["title"] == "Welcome!"
    assert body["snapshot"]["profile"]["name"] == "Ann"

    body = client.post("/login/guest", json={"name": "Bo"}).json()
    assert body["snapshot"]["profile"]["name"] == "Bo (Guest)"


def test_cancelled_login(client):
    body = client.post("/login/google", json={}).json()
    assert body["accepted"] is False
    assert body["notice"]["title"] == "Login Cancelled"


def test_full_game_over_http(client, store, saved_record):
    client.post("/login/google", json={"name": "Ann"})
    for index in (0, 3, 1, 4):
        assert client.post("/move", json={"index": index}).json()["accepted"] is True
    body = client.post("/move", json={"index": 2}).json()
    assert body["snapshot"]["game"]["status"] == "won"
    assert body["snapshot"]["game"]["winning_line"] == [0, 1, 2]
    assert body["snapshot"]["profile"]["matches_won"] == 1
    assert saved_record(store).stats.matches_won == 1


def test_occupied_cell_is_not_an_error(client):
    client.post("/move", json={"index": 4})
    resp = client.post("/move", json={"index": 4})
    assert resp.status_code == 200
    assert resp.json()["accepted"] is False


def test_out_of_range_move_is_rejected(client):
    resp = client.post("/move", json={"index": 9})
    assert resp.status_code == 422
    assert client.get("/state").json()["game"]["board"] == [""] * 9


def test_restart_and_logout(client):
    client.post("/login/google", json={"name": "Ann"})
    client.post("/move", json={"index": 0})
    body = client.post("/restart").json()
    assert body["snapshot"]["game"]["board"] == [""] * 9
    body = client.post("/logout").json()
    assert body["notice"]["title"] == "Logged Out"
    assert body["snapshot"]["page"] == "home"


def test_generic_event_endpoint(client):
    body = client.post("/events", json={"type": "login", "name": "Ann", "mode": "guest"}).json()
    assert body["event"] == "login"
    assert body["snapshot"]["profile"]["name"] == "Ann (Guest)"
    body = client.post("/events", json={"type": "cell", "index": 8}).json()
    assert body["snapshot"]["game"]["board"][8] == "X"
    body = client.post("/events", json={"type": "restart"}).json()
    assert body["notice"]["title"] == "Game Restarted"


def test_unknown_event_is_rejected(client):
    assert client.post("/events", json={"type": "teleport"}).status_code == 422


def test_shutdown_persists_session(saved_record):
    store = MemoryStore()
    with TestClient(create_app(store)) as c:
        c.post("/login/google", json={"name": "Ann"})
        store.data.clear()
    assert saved_record(store).name == "Ann"


def test_startup_survives_undecodable_store_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_bytes(b"\xff\xfe garbage")
    with TestClient(create_app(JsonFileStore(str(path)))) as c:
        snap = c.get("/state").json()
        assert snap["page"] == "home"
        assert c.post("/login/google", json={"name": "Ann"}).json()["accepted"] is True
    assert JsonFileStore(str(path)).load(config.STORAGE_KEY) is not None


def test_event_errors_name_only_the_matching_member(client):
    detail = client.post("/events", json={"type": "cell"}).json()["detail"]
    assert len(detail) == 1
    assert detail[0]["loc"][-1] == "index"


def test_unknown_event_type_reports_invalid_tag(client):
    detail = client.post("/events", json={"type": "teleport"}).json()["detail"]
    assert len(detail) == 1
    assert detail[0]["type"] == "union_tag_invalid"


def test_app_reports_package_version(client):
    assert client.get("/openapi.json").json()["info"]["version"] == neon_ttt.__version__
    assert config.APP_VERSION == neon_ttt.__version__
