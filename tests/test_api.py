import pytest
from httpx import ASGITransport, AsyncClient
from app.main import app
from app.analysis import content_hash
from app.engine import QueryEngine

PREFIX = "/api/v1"


# ensure a fresh store for tests
@pytest.fixture(autouse=True)
def fresh_engine():
    app.state.engine = QueryEngine()
    yield


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_create_get_delete():
    async with client() as ac:
        # create
        resp = await ac.post(f"{PREFIX}/strings", json={"value": "level"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["value"] == "level"
        assert data["properties"]["is_palindrome"] == True
        sha = data["id"]
        assert sha == content_hash("level")
        assert data["created_at"].endswith("Z")

        # duplicate -> 409
        resp2 = await ac.post(f"{PREFIX}/strings", json={"value": "level"})
        assert resp2.status_code == 409
        assert resp2.json()["detail"] == "String already exists in the system"

        # get by value
        resp3 = await ac.get(f"{PREFIX}/strings/level")
        assert resp3.status_code == 200
        assert resp3.json()["id"] == sha

        # delete by value
        resp5 = await ac.delete(f"{PREFIX}/strings/level")
        assert resp5.status_code == 204

        # get after delete -> 404
        resp6 = await ac.get(f"{PREFIX}/strings/level")
        assert resp6.status_code == 404

        # delete again -> 404
        resp7 = await ac.delete(f"{PREFIX}/strings/level")
        assert resp7.status_code == 404

        # re-create after delete
        resp8 = await ac.post(f"{PREFIX}/strings", json={"value": "level"})
        assert resp8.status_code == 201


@pytest.mark.asyncio
async def test_create_rejects_bad_bodies():
    async with client() as ac:
        resp = await ac.post(f"{PREFIX}/strings", json={"value": ""})
        assert resp.status_code == 400

        resp2 = await ac.post(f"{PREFIX}/strings", json={})
        assert resp2.status_code == 400

        resp3 = await ac.post(f"{PREFIX}/strings", json={"value": 42})
        assert resp3.status_code == 422

        resp4 = await ac.post(f"{PREFIX}/strings", content=b'{"value": "\\ud800"}',
                              headers={"content-type": "application/json"})
        assert resp4.status_code == 422
        assert resp4.json()["detail"] == '"value" must be valid Unicode text'


@pytest.mark.asyncio
async def test_properties_of_hello_world():
    async with client() as ac:
        resp = await ac.post(f"{PREFIX}/strings", json={"value": "hello world"})
        props = resp.json()["properties"]
        assert props["length"] == 11
        assert props["is_palindrome"] == False
        assert props["word_count"] == 2
        assert props["unique_characters"] == 8
        assert props["character_frequency_map"]["l"] == 3
        assert props["sha256_hash"] == resp.json()["id"]


@pytest.mark.asyncio
async def test_list_and_filters():
    async with client() as ac:
        await ac.post(f"{PREFIX}/strings", json={"value": "racecar"})
        await ac.post(f"{PREFIX}/strings", json={"value": "hello world"})
        await ac.post(f"{PREFIX}/strings", json={"value": "a"})
        await ac.post(f"{PREFIX}/strings", json={"value": "noon"})

        resp = await ac.get(f"{PREFIX}/strings")
        assert resp.json()["count"] == 4
        assert resp.json()["filters_applied"] == {}
        assert [d["value"] for d in resp.json()["data"]] == ["racecar", "hello world", "a", "noon"]

        resp = await ac.get(f"{PREFIX}/strings", params={"is_palindrome": "true"})
        assert resp.status_code == 200
        assert resp.json()["count"] == 3
        assert resp.json()["filters_applied"] == {"is_palindrome": True}

        resp2 = await ac.get(f"{PREFIX}/strings", params={"min_length": 5, "max_length": 10})
        assert resp2.status_code == 200
        assert [d["value"] for d in resp2.json()["data"]] == ["racecar"]

        resp3 = await ac.get(f"{PREFIX}/strings", params={"contains_character": "z"})
        assert resp3.status_code == 200
        assert resp3.json()["count"] == 0

        resp4 = await ac.get(f"{PREFIX}/strings", params={"min_length": -1})
        assert resp4.status_code == 422

        resp5 = await ac.get(f"{PREFIX}/strings", params={"contains_character": "ab"})
        assert resp5.status_code == 422


@pytest.mark.asyncio
async def test_natural_language_filter():
    async with client() as ac:
        await ac.post(f"{PREFIX}/strings", json={"value": "racecar"})
        await ac.post(f"{PREFIX}/strings", json={"value": "hello world"})
        await ac.post(f"{PREFIX}/strings", json={"value": "a man a plan"})

        resp = await ac.get(f"{PREFIX}/strings/filter-by-natural-language",
                            params={"query": "all single word palindromic strings"})
        assert resp.status_code == 200
        js = resp.json()
        assert js["interpreted_query"]["parsed_filters"] == {"is_palindrome": True, "word_count": 1}
        assert js["interpreted_query"]["original"] == "all single word palindromic strings"
        assert [d["value"] for d in js["data"]] == ["racecar"]

        resp2 = await ac.get(f"{PREFIX}/strings/filter-by-natural-language",
                             params={"query": "give me strings shorter than 20"})
        assert resp2.json()["interpreted_query"]["parsed_filters"] == {"max_length": 19}
        assert resp2.json()["count"] == 3

        resp3 = await ac.get(f"{PREFIX}/strings/filter-by-natural-language",
                             params={"query": "show me everything"})
        assert resp3.status_code == 400
        assert resp3.json()["detail"] == "Unable to parse natural language query"


@pytest.mark.asyncio
async def test_healthz():
    async with client() as ac:
        resp = await ac.get(f"{PREFIX}/healthz")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}
