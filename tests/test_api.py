import pytest
from httpx import ASGITransport, AsyncClient

from tenistas.api import create_app
from tenistas.config import AppConfig


NOVAK = {
    "name": "Novak Djokovic",
    "country": "Serbia",
    "weight": 77,
    "height": 188,
    "handedness": "right-handed",
    "points": 14000,
    "birth_date": "1987-05-22",
}


def _sample_csv() -> str:
    return """id,nombre,pais,altura,peso,puntos,mano,fecha_nacimiento
1,Novak Djokovic,Serbia,188,77,12030,DIESTRO,1987-05-22
2,Nobody,,190,80,100,ZURDO,1990-01-01
3,Rafael Nadal,España,185,85,8270,ZURDO,1986-06-03
"""


@pytest.fixture
async def client(tmp_path):
    config = AppConfig(cache_size=5, database_path=str(tmp_path / "api.sqlite"))
    app = create_app(config)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_create_and_fetch_player(client: AsyncClient):
    resp = await client.post("/players", json=NOVAK)
    assert resp.status_code == 201
    created = resp.json()
    assert created["id"] > 0
    assert created["created_at"] is not None

    resp = await client.get(f"/players/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Novak Djokovic"


@pytest.mark.anyio
async def test_invalid_player_is_rejected(client: AsyncClient):
    resp = await client.post("/players", json={**NOVAK, "height": 500})
    assert resp.status_code == 422
    assert resp.json()["detail"]["field"] == "height"


@pytest.mark.anyio
async def test_update_and_delete(client: AsyncClient):
    created = (await client.post("/players", json=NOVAK)).json()

    resp = await client.put(f"/players/{created['id']}", json={**NOVAK, "points": 15000})
    assert resp.status_code == 200
    assert resp.json()["points"] == 15000

    resp = await client.delete(f"/players/{created['id']}")
    assert resp.status_code == 204

    resp = await client.get(f"/players/{created['id']}")
    assert resp.status_code == 404

    resp = await client.get("/players", params={"include_deleted": "true"})
    assert [player["is_deleted"] for player in resp.json()] == [True]


@pytest.mark.anyio
async def test_update_missing_player(client: AsyncClient):
    resp = await client.put("/players/404", json=NOVAK)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_import_reports_rejected_rows(client: AsyncClient):
    files = {"file": ("players.csv", _sample_csv(), "text/csv")}
    resp = await client.post("/players/import", files=files)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert [player["name"] for player in body["saved"]] == ["Novak Djokovic", "Rafael Nadal"]
    assert body["rejected"][0]["name"] == "Nobody"

    resp = await client.get("/players")
    assert len(resp.json()) == 2


@pytest.mark.anyio
async def test_import_malformed_file(client: AsyncClient):
    files = {"file": ("players.json", "{oops", "application/json")}
    resp = await client.post("/players/import", files=files)
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Error importing players")


@pytest.mark.anyio
async def test_import_unsupported_type(client: AsyncClient):
    files = {"file": ("players.yaml", "- a", "text/yaml")}
    resp = await client.post("/players/import", files=files)
    assert resp.status_code == 400


@pytest.mark.anyio
@pytest.mark.parametrize("fmt", ["csv", "json", "xml"])
async def test_export_formats(client: AsyncClient, fmt: str):
    await client.post("/players", json=NOVAK)

    resp = await client.get("/players/export", params={"format": fmt})
    assert resp.status_code == 200
    assert "Novak Djokovic" in resp.text
    assert f"players.{fmt}" in resp.headers["content-disposition"]


@pytest.mark.anyio
async def test_xml_export_of_unrepresentable_name_is_an_error(client: AsyncClient):
    await client.post("/players", json={**NOVAK, "name": "Novak\u000bDjokovic"})

    resp = await client.get("/players/export", params={"format": "xml"})
    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Error exporting players")


@pytest.mark.anyio
async def test_export_unknown_format(client: AsyncClient):
    resp = await client.get("/players/export", params={"format": "yaml"})
    assert resp.status_code == 400
