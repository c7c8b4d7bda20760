# tests/test_social.py


def test_follow_and_stats(client, user, other_user):
    response = client.post(f"/api/v1/social/follow/{other_user['id']}", headers=user["headers"])

    assert response.status_code == 200
    assert response.json()["data"] == {"followers": 1, "following": 0}

    check = client.get(
        f"/api/v1/social/follow/{other_user['id']}/check", headers=user["headers"]
    ).json()["data"]
    assert check == {"isFollowing": True}

    followers = client.get(f"/api/v1/social/users/{other_user['id']}/followers").json()["data"]
    assert followers["total"] == 1
    assert followers["items"][0]["username"] == "alice"

    following = client.get(f"/api/v1/social/users/{user['id']}/following").json()["data"]
    assert following["items"][0]["userId"] == other_user["id"]


def test_follow_errors(client, user, other_user):
    me = client.post(f"/api/v1/social/follow/{user['id']}", headers=user["headers"])
    assert me.status_code == 400

    missing = client.post("/api/v1/social/follow/999", headers=user["headers"])
    assert missing.status_code == 404

    client.post(f"/api/v1/social/follow/{other_user['id']}", headers=user["headers"])
    twice = client.post(f"/api/v1/social/follow/{other_user['id']}", headers=user["headers"])
    assert twice.status_code == 409


def test_unfollow(client, user, other_user):
    url = f"/api/v1/social/follow/{other_user['id']}"
    client.post(url, headers=user["headers"])

    response = client.delete(url, headers=user["headers"])
    assert response.status_code == 200
    assert response.json()["data"]["followers"] == 0

    assert client.delete(url, headers=user["headers"]).status_code == 404


def create_list(client, headers, name="Favourites", is_public=True):
    return client.post(
        "/api/v1/social/lists",
        json={"name": name, "description": "Best of", "isPublic": is_public},
        headers=headers,
    )


def test_list_lifecycle(client, user, movies, music):
    created = create_list(client, user["headers"])
    assert created.status_code == 201
    list_id = created.json()["data"]["listId"]

    item = client.post(
        f"/api/v1/social/lists/{list_id}/items",
        json={"entityId": movies[0].movie_id, "entityType": "movie"},
        headers=user["headers"],
    )
    assert item.status_code == 201
    client.post(
        f"/api/v1/social/lists/{list_id}/items",
        json={"entityId": music[0].music_id, "entityType": "music"},
        headers=user["headers"],
    )

    duplicate = client.post(
        f"/api/v1/social/lists/{list_id}/items",
        json={"entityId": movies[0].movie_id, "entityType": "movie"},
        headers=user["headers"],
    )
    assert duplicate.status_code == 409

    detail = client.get(f"/api/v1/social/lists/{list_id}").json()["data"]
    assert detail["itemCount"] == 2
    assert detail["items"]["total"] == 2

    item_id = item.json()["data"]["itemId"]
    client.delete(f"/api/v1/social/lists/{list_id}/items/{item_id}", headers=user["headers"])
    detail = client.get(f"/api/v1/social/lists/{list_id}").json()["data"]
    assert detail["itemCount"] == 1

    renamed = client.put(
        f"/api/v1/social/lists/{list_id}", json={"name": "Renamed"}, headers=user["headers"]
    )
    assert renamed.json()["data"]["name"] == "Renamed"

    deleted = client.delete(f"/api/v1/social/lists/{list_id}", headers=user["headers"])
    assert deleted.status_code == 200
    assert client.get(f"/api/v1/social/lists/{list_id}").status_code == 404


def test_list_owner_only(client, user, other_user, movies):
    list_id = create_list(client, user["headers"]).json()["data"]["listId"]

    update = client.put(
        f"/api/v1/social/lists/{list_id}", json={"name": "Mine"}, headers=other_user["headers"]
    )
    add = client.post(
        f"/api/v1/social/lists/{list_id}/items",
        json={"entityId": movies[0].movie_id, "entityType": "movie"},
        headers=other_user["headers"],
    )
    delete = client.delete(f"/api/v1/social/lists/{list_id}", headers=other_user["headers"])

    assert update.status_code == 403
    assert add.status_code == 403
    assert delete.status_code == 403


def test_private_lists_hidden_from_others(client, user, other_user):
    private = create_list(client, user["headers"], "Secret", is_public=False)
    private_id = private.json()["data"]["listId"]
    create_list(client, user["headers"], "Open")

    url = f"/api/v1/social/lists/{private_id}"
    assert client.get(url).status_code == 404
    assert client.get(url, headers=other_user["headers"]).status_code == 404
    assert client.get(url, headers=user["headers"]).status_code == 200

    public_view = client.get(f"/api/v1/social/users/{user['id']}/lists").json()["data"]
    owner_view = client.get(
        f"/api/v1/social/users/{user['id']}/lists", headers=user["headers"]
    ).json()["data"]
    assert [item["name"] for item in public_view["items"]] == ["Open"]
    assert owner_view["total"] == 2


def test_list_name_validation(client, user):
    response = create_list(client, user["headers"], name="")

    assert response.status_code == 400
