# tests/test_engagement.py

import pytest
from sqlalchemy import func, select
from app.models import FavoriteModel


def favorite(client, headers, entity_id, entity_type="movie"):
    return client.post(
        "/api/v1/engagement/favorites",
        json={"entityId": entity_id, "entityType": entity_type},
        headers=headers,
    )


def test_engagement_requires_auth(client):
    assert client.get("/api/v1/engagement/favorites").status_code == 401
    assert client.post("/api/v1/engagement/ratings", json={}).status_code == 401


def test_favorite_twice_keeps_one_row(client, db, user, movies):
    movie_id = movies[0].movie_id

    first = favorite(client, user["headers"], movie_id)
    second = favorite(client, user["headers"], movie_id)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["data"]["favoriteId"] == second.json()["data"]["favoriteId"]
    count = db.execute(
        select(func.count()).select_from(FavoriteModel).where(FavoriteModel.user_id == user["id"])
    ).scalar_one()
    assert count == 1


def test_favorite_unknown_entity(client, user):
    response = favorite(client, user["headers"], 999, "music")

    assert response.status_code == 404


def test_favorites_listing_and_check(client, user, movies, music):
    favorite(client, user["headers"], movies[0].movie_id)
    favorite(client, user["headers"], music[0].music_id, "music")

    everything = client.get("/api/v1/engagement/favorites", headers=user["headers"]).json()["data"]
    assert everything["total"] == 2

    only_music = client.get(
        "/api/v1/engagement/favorites?entityType=music", headers=user["headers"]
    ).json()["data"]
    assert only_music["total"] == 1
    assert only_music["items"][0]["entityType"] == "music"

    check = client.get(
        f"/api/v1/engagement/favorites/movie/{movies[0].movie_id}/check", headers=user["headers"]
    ).json()["data"]
    assert check == {"isFavorited": True}


def test_remove_favorite_is_idempotent(client, user, movies):
    movie_id = movies[0].movie_id
    favorite(client, user["headers"], movie_id)

    url = f"/api/v1/engagement/favorites/movie/{movie_id}"
    assert client.delete(url, headers=user["headers"]).status_code == 200
    assert client.delete(url, headers=user["headers"]).status_code == 200

    check = client.get(f"{url}/check", headers=user["headers"]).json()["data"]
    assert check == {"isFavorited": False}


@pytest.mark.parametrize("score", [0, 6, -1])
def test_rating_out_of_range(client, user, movies, score):
    response = client.post(
        "/api/v1/engagement/ratings",
        json={"entityId": movies[0].movie_id, "entityType": "movie", "rating": score},
        headers=user["headers"],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Rating must be between 1 and 5"


def test_rating_upsert_and_summary(client, user, other_user, movies):
    movie_id = movies[0].movie_id
    body = {"entityId": movie_id, "entityType": "movie", "rating": 3}

    client.post("/api/v1/engagement/ratings", json=body, headers=user["headers"])
    updated = client.post(
        "/api/v1/engagement/ratings",
        json={**body, "rating": 5, "comment": "Even better the second time"},
        headers=user["headers"],
    )
    client.post(
        "/api/v1/engagement/ratings", json={**body, "rating": 4}, headers=other_user["headers"]
    )

    assert updated.json()["data"]["rating"] == 5
    mine = client.get(
        f"/api/v1/engagement/ratings/movie/{movie_id}", headers=user["headers"]
    ).json()["data"]
    assert mine["comment"] == "Even better the second time"

    summary = client.get(f"/api/v1/engagement/ratings/movie/{movie_id}/summary").json()["data"]
    assert summary["count"] == 2
    assert summary["average"] == 4.5
    assert summary["distribution"] == {"1": 0, "2": 0, "3": 0, "4": 1, "5": 1}


def test_remove_rating(client, user, movies):
    movie_id = movies[0].movie_id
    client.post(
        "/api/v1/engagement/ratings",
        json={"entityId": movie_id, "entityType": "movie", "rating": 2},
        headers=user["headers"],
    )

    url = f"/api/v1/engagement/ratings/movie/{movie_id}"
    assert client.delete(url, headers=user["headers"]).status_code == 200
    assert client.get(url, headers=user["headers"]).status_code == 404


def test_watchlist(client, user, movies):
    movie_id = movies[1].movie_id
    response = client.post(
        "/api/v1/engagement/watchlist", json={"movieId": movie_id}, headers=user["headers"]
    )
    assert response.status_code == 200
    assert response.json()["data"]["movie"]["title"] == "Interstellar"

    listing = client.get("/api/v1/engagement/watchlist", headers=user["headers"]).json()["data"]
    assert listing["total"] == 1
    assert listing["items"][0]["movie"]["genres"] == ["Sci-Fi"]

    check = client.get(
        f"/api/v1/engagement/watchlist/{movie_id}/check", headers=user["headers"]
    ).json()["data"]
    assert check == {"inWatchlist": True}

    client.delete(f"/api/v1/engagement/watchlist/{movie_id}", headers=user["headers"])
    listing = client.get("/api/v1/engagement/watchlist", headers=user["headers"]).json()["data"]
    assert listing["total"] == 0


def test_watchlist_unknown_movie(client, user):
    response = client.post(
        "/api/v1/engagement/watchlist", json={"movieId": 404}, headers=user["headers"]
    )

    assert response.status_code == 404


def test_history_last_write_wins(client, user, movies):
    movie_id = movies[0].movie_id
    body = {"entityId": movie_id, "entityType": "movie", "progress": 600, "duration": 8880}

    client.post("/api/v1/engagement/history", json=body, headers=user["headers"])
    client.post(
        "/api/v1/engagement/history",
        json={**body, "progress": 4440, "duration": 8800},
        headers=user["headers"],
    )

    history = client.get("/api/v1/engagement/history", headers=user["headers"]).json()["data"]
    assert history["total"] == 1
    assert history["items"][0]["progress"] == 4440
    assert history["items"][0]["duration"] == 8800

    progress = client.get(
        f"/api/v1/engagement/history/movie/{movie_id}/progress", headers=user["headers"]
    ).json()["data"]
    assert progress["percentage"] == 50.5
    assert progress["lastWatched"] is not None


def test_watch_progress_missing(client, user, movies):
    response = client.get(
        f"/api/v1/engagement/history/movie/{movies[0].movie_id}/progress", headers=user["headers"]
    )

    assert response.status_code == 404


def test_clear_history(client, user, movies, music):
    client.post(
        "/api/v1/engagement/history",
        json={
            "entityId": movies[0].movie_id,
            "entityType": "movie",
            "progress": 60,
            "duration": 100,
        },
        headers=user["headers"],
    )
    client.post(
        "/api/v1/engagement/history",
        json={
            "entityId": music[0].music_id,
            "entityType": "music",
            "progress": 30,
            "duration": 200,
        },
        headers=user["headers"],
    )

    response = client.delete("/api/v1/engagement/history", headers=user["headers"])

    assert response.json()["data"] == {"removed": 2}
    history = client.get("/api/v1/engagement/history", headers=user["headers"]).json()["data"]
    assert history["total"] == 0


def test_stats(client, user, movies, music):
    favorite(client, user["headers"], movies[0].movie_id)
    client.post(
        "/api/v1/engagement/ratings",
        json={"entityId": movies[0].movie_id, "entityType": "movie", "rating": 4},
        headers=user["headers"],
    )
    client.post(
        "/api/v1/engagement/history",
        json={
            "entityId": movies[0].movie_id,
            "entityType": "movie",
            "progress": 3000,
            "duration": 8880,
        },
        headers=user["headers"],
    )
    client.post(
        "/api/v1/engagement/history",
        json={
            "entityId": music[0].music_id,
            "entityType": "music",
            "progress": 90,
            "duration": 200,
        },
        headers=user["headers"],
    )

    stats = client.get("/api/v1/engagement/stats", headers=user["headers"]).json()["data"]

    assert stats == {
        "favorites": 1,
        "ratings": 1,
        "watchlist": 0,
        "historyEntries": 2,
        "totalMinutesWatched": 52,
    }
