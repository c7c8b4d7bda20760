# tests/test_movies.py

from app.models import EntityType, RatingModel
from tests.conftest import add_movie


def test_empty_catalog_page(client):
    response = client.get("/api/v1/movies?page=1&limit=20")

    assert response.status_code == 200
    assert response.json()["data"] == {
        "items": [],
        "total": 0,
        "page": 1,
        "limit": 20,
        "hasMore": False,
    }


def test_envelope_shape(client):
    response = client.get("/api/v1/movies")
    body = response.json()

    assert set(body) == {"status", "statusCode", "message", "data", "requestId", "timestamp"}
    assert body["status"] == "success"
    assert body["requestId"] == response.headers["X-Request-ID"]


def test_pagination_limits_and_has_more(client, db):
    for i in range(25):
        add_movie(db, f"Movie {i:02d}")

    first = client.get("/api/v1/movies?page=1&limit=10").json()["data"]
    assert len(first["items"]) == 10
    assert first["total"] == 25
    assert first["hasMore"] is True

    last = client.get("/api/v1/movies?page=3&limit=10").json()["data"]
    assert len(last["items"]) == 5
    assert last["hasMore"] is False

    beyond = client.get("/api/v1/movies?page=4&limit=10").json()["data"]
    assert beyond["items"] == []
    assert beyond["hasMore"] is False


def test_newest_first(client, db):
    add_movie(db, "Older")
    add_movie(db, "Newer")

    items = client.get("/api/v1/movies").json()["data"]["items"]

    assert [item["title"] for item in items] == ["Newer", "Older"]


def test_filter_by_genre(client, movies):
    data = client.get("/api/v1/movies?genre=sci-fi").json()["data"]

    assert data["total"] == 2
    assert {item["title"] for item in data["items"]} == {"Inception", "Interstellar"}
    assert all("Sci-Fi" in item["genres"] for item in data["items"])


def test_filter_by_year_and_type(client, movies):
    by_year = client.get("/api/v1/movies?year=2014").json()["data"]
    assert [item["title"] for item in by_year["items"]] == ["Interstellar"]

    by_type = client.get("/api/v1/movies?type=tv").json()["data"]
    assert [item["title"] for item in by_type["items"]] == ["Dark"]
    assert by_type["items"][0]["type"] == "tv"


def test_invalid_filters_are_rejected(client):
    assert client.get("/api/v1/movies?limit=0").status_code == 400
    assert client.get("/api/v1/movies?limit=101").status_code == 400
    assert client.get("/api/v1/movies?page=0").status_code == 400
    assert client.get("/api/v1/movies?type=cartoon").status_code == 400


def test_movie_detail_counts_views(client, db, movies, user):
    movie = movies[0]
    db.add(
        RatingModel(
            user_id=user["id"],
            entity_id=movie.movie_id,
            entity_type=EntityType.movie.value,
            rating=5,
            comment="Masterpiece",
        )
    )
    db.commit()

    first = client.get(f"/api/v1/movies/{movie.movie_id}").json()["data"]
    second = client.get(f"/api/v1/movies/{movie.movie_id}").json()["data"]

    assert first["viewCount"] == 1
    assert second["viewCount"] == 2
    assert second["genres"] == ["Action", "Sci-Fi"]
    assert second["recentRatings"][0]["rating"] == 5
    assert second["recentRatings"][0]["user"]["username"] == "alice"


def test_movie_detail_missing(client):
    response = client.get("/api/v1/movies/999")

    assert response.status_code == 404
    assert response.json()["message"] == "Movie not found"


def test_genres_sorted(client, movies):
    data = client.get("/api/v1/movies/genres").json()["data"]

    assert data == ["Action", "Sci-Fi", "Thriller"]


def test_trending_only_viewed(client, movies):
    client.get(f"/api/v1/movies/{movies[1].movie_id}")
    client.get(f"/api/v1/movies/{movies[1].movie_id}")
    client.get(f"/api/v1/movies/{movies[2].movie_id}")

    data = client.get("/api/v1/movies/trending").json()["data"]

    assert [item["title"] for item in data] == ["Interstellar", "Dark"]


def test_search_movies(client, movies):
    by_director = client.get("/api/v1/movies/search?q=nolan").json()["data"]
    assert {item["title"] for item in by_director} == {"Inception", "Interstellar"}

    by_description = client.get("/api/v1/movies/search?q=time travel").json()["data"]
    assert [item["title"] for item in by_description] == ["Dark"]


def test_search_movies_short_query(client):
    response = client.get("/api/v1/movies/search?q=a")

    assert response.status_code == 400


def test_shorts(client, shorts):
    data = client.get("/api/v1/shorts").json()["data"]
    assert data["total"] == 2
    assert data["items"][0]["title"] == "Cat plays piano"

    feed = client.get("/api/v1/movies/feed/shorts?limit=1").json()["data"]
    assert len(feed["items"]) == 1
    assert feed["hasMore"] is True

    detail = client.get(f"/api/v1/shorts/{shorts[0].short_id}").json()["data"]
    assert detail["videoUrl"] == "https://cdn.example.com/s1.mp4"

    assert client.get("/api/v1/shorts/999").status_code == 404
