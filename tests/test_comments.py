# tests/test_comments.py

from sqlalchemy import func, select
from app.models import CommentLikeModel, CommentModel, NotificationModel


def post_comment(client, headers, entity_id, content="Great movie", entity_type="movie", **extra):
    return client.post(
        "/api/v1/comments",
        json={"entityId": entity_id, "entityType": entity_type, "content": content, **extra},
        headers=headers,
    )


def test_create_comment(client, user, movies):
    response = post_comment(client, user["headers"], movies[0].movie_id, rating=5)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["content"] == "Great movie"
    assert data["rating"] == 5
    assert data["user"]["username"] == "alice"
    assert data["likesCount"] == 0


def test_comment_validation(client, user, movies):
    empty = post_comment(client, user["headers"], movies[0].movie_id, content="")
    too_long = post_comment(client, user["headers"], movies[0].movie_id, content="x" * 5001)
    bad_rating = post_comment(client, user["headers"], movies[0].movie_id, rating=9)

    assert empty.status_code == 400
    assert too_long.status_code == 400
    assert bad_rating.status_code == 400


def test_comment_on_missing_entity(client, user):
    response = post_comment(client, user["headers"], 12345, entity_type="short")

    assert response.status_code == 404


def test_entity_comments_with_reply_preview(client, db, user, other_user, movies):
    movie_id = movies[0].movie_id
    parent = post_comment(client, user["headers"], movie_id).json()["data"]
    for i in range(4):
        client.post(
            f"/api/v1/comments/{parent['commentId']}/replies",
            json={"content": f"reply {i}"},
            headers=other_user["headers"],
        )

    data = client.get(f"/api/v1/comments/entity/movie/{movie_id}").json()["data"]

    assert data["total"] == 1
    top = data["items"][0]
    assert top["replyCount"] == 4
    assert [reply["content"] for reply in top["replies"]] == ["reply 3", "reply 2", "reply 1"]

    notifications = db.execute(
        select(func.count())
        .select_from(NotificationModel)
        .where(NotificationModel.user_id == user["id"], NotificationModel.type == "comment_reply")
    ).scalar_one()
    assert notifications == 4


def test_reply_inherits_entity(client, user, other_user, music):
    parent = post_comment(
        client, user["headers"], music[0].music_id, entity_type="music"
    ).json()["data"]

    reply = client.post(
        f"/api/v1/comments/{parent['commentId']}/replies",
        json={"content": "Agreed"},
        headers=other_user["headers"],
    ).json()["data"]

    assert reply["entityType"] == "music"
    assert reply["entityId"] == music[0].music_id
    assert reply["parentId"] == parent["commentId"]


def test_reply_to_missing_parent(client, user):
    response = client.post(
        "/api/v1/comments/999/replies", json={"content": "hello"}, headers=user["headers"]
    )

    assert response.status_code == 404


def test_replies_oldest_first(client, user, other_user, movies):
    parent = post_comment(client, user["headers"], movies[0].movie_id).json()["data"]
    for text in ("first", "second"):
        client.post(
            f"/api/v1/comments/{parent['commentId']}/replies",
            json={"content": text},
            headers=other_user["headers"],
        )

    data = client.get(f"/api/v1/comments/{parent['commentId']}/replies").json()["data"]

    assert [reply["content"] for reply in data["items"]] == ["first", "second"]


def test_only_author_can_edit_or_delete(client, user, other_user, movies):
    comment = post_comment(client, user["headers"], movies[0].movie_id).json()["data"]
    url = f"/api/v1/comments/{comment['commentId']}"

    hijack = client.put(url, json={"content": "hijack"}, headers=other_user["headers"])
    assert hijack.status_code == 403
    assert client.delete(url, headers=other_user["headers"]).status_code == 403

    edited = client.put(url, json={"content": "Edited"}, headers=user["headers"])
    assert edited.json()["data"]["content"] == "Edited"


def test_delete_cascades_replies_and_likes(client, db, user, other_user, movies):
    parent = post_comment(client, user["headers"], movies[0].movie_id).json()["data"]
    reply = client.post(
        f"/api/v1/comments/{parent['commentId']}/replies",
        json={"content": "nested"},
        headers=other_user["headers"],
    ).json()["data"]
    client.post(f"/api/v1/comments/{reply['commentId']}/like", headers=user["headers"])
    client.post(f"/api/v1/comments/{parent['commentId']}/like", headers=other_user["headers"])

    response = client.delete(f"/api/v1/comments/{parent['commentId']}", headers=user["headers"])

    assert response.status_code == 200
    assert db.execute(select(func.count()).select_from(CommentModel)).scalar_one() == 0
    assert db.execute(select(func.count()).select_from(CommentLikeModel)).scalar_one() == 0


def test_like_and_unlike(client, user, other_user, movies):
    comment = post_comment(client, user["headers"], movies[0].movie_id).json()["data"]
    url = f"/api/v1/comments/{comment['commentId']}/like"

    liked = client.post(url, headers=other_user["headers"])
    assert liked.json()["data"] == {"commentId": comment["commentId"], "likesCount": 1}
    assert client.post(url, headers=other_user["headers"]).status_code == 409

    viewed = client.get(
        f"/api/v1/comments/{comment['commentId']}", headers=other_user["headers"]
    ).json()["data"]
    assert viewed["isLiked"] is True

    unliked = client.delete(url, headers=other_user["headers"])
    assert unliked.json()["data"]["likesCount"] == 0
    assert client.delete(url, headers=other_user["headers"]).status_code == 404

    count = client.get(f"/api/v1/comments/{comment['commentId']}/likes").json()["data"]
    assert count["likesCount"] == 0


def test_my_comments_only_top_level(client, user, movies):
    parent = post_comment(client, user["headers"], movies[0].movie_id).json()["data"]
    client.post(
        f"/api/v1/comments/{parent['commentId']}/replies",
        json={"content": "self reply"},
        headers=user["headers"],
    )

    data = client.get("/api/v1/comments/me", headers=user["headers"]).json()["data"]

    assert data["total"] == 1
    assert data["items"][0]["commentId"] == parent["commentId"]
