# tests/test_search.py

import pytest


@pytest.mark.parametrize("query", ["", "a", " b "])
def test_search_query_too_short(client, query):
    response = client.get("/api/v1/search", params={"q": query})

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_mixed_search(client, movies, music, shorts):
    data = client.get("/api/v1/search?q=nolan").json()["data"]

    types = {item["type"] for item in data["items"]}
    assert types == {"short"}
    assert data["total"] == 1

    data = client.get("/api/v1/search?q=in").json()["data"]
    titles = {(item["type"], item["title"]) for item in data["items"]}
    assert ("movie", "Inception") in titles
    assert ("music", "Blinding Lights") in titles
    assert ("music", "Levitating") in titles
    assert data["total"] == len(data["items"])
    assert data["hasMore"] is False


def test_search_restricted_to_type(client, movies, music):
    data = client.get("/api/v1/search?q=in&type=music").json()["data"]

    assert {item["type"] for item in data["items"]} == {"music"}


def test_search_has_more_per_type(client, movies, music):
    data = client.get("/api/v1/search?q=in&limit=1").json()["data"]

    assert data["hasMore"] is True
    assert len({item["type"] for item in data["items"]}) == len(data["items"])


def test_trending(client, movies, music):
    client.get(f"/api/v1/movies/{movies[2].movie_id}")

    trending_movies = client.get("/api/v1/search/trending/movies").json()["data"]
    assert [item["title"] for item in trending_movies["items"]] == ["Dark"]

    trending_music = client.get("/api/v1/search/trending/music").json()["data"]
    assert [item["title"] for item in trending_music["items"]] == [
        "Blinding Lights",
        "Levitating",
    ]


def test_recommendations_require_auth(client):
    assert client.get("/api/v1/search/recommendations").status_code == 401


def test_recommendations_follow_history(client, user, movies, music):
    client.post(
        "/api/v1/engagement/history",
        json={
            "entityId": music[0].music_id,
            "entityType": "music",
            "progress": 100,
            "duration": 200,
        },
        headers=user["headers"],
    )

    items = client.get(
        "/api/v1/search/recommendations", headers=user["headers"]
    ).json()["data"]

    assert items
    assert {item["type"] for item in items} == {"music"}
    assert music[0].music_id not in [item["id"] for item in items]


def test_search_route_documents_mixed_page_size(client):
    schema = client.get("/openapi.json").json()

    description = schema["paths"]["/api/v1/search"]["get"]["description"]
    assert "3 x limit" in description
