"""Subscribe and like toggles over HTTP."""

from __future__ import annotations

from tests.factories.media import CommentFactory, VideoFactory
from tests.factories.user import UserFactory
from tests.helpers.http import API, assert_envelope, bearer, login


def test_subscribe_toggles_on_then_off(client, session):
    UserFactory(username="fan")
    channel_id = UserFactory(username="channel").id
    headers = bearer(login(client, "fan")["access_token"])
    before = assert_envelope(client.get(f"{API}/users/c/channel", headers=headers), 200)
    baseline = before["data"]["subscribers_count"]
    assert before["data"]["is_subscribed"] is False

    first = assert_envelope(client.post(f"{API}/subscriptions/c/{channel_id}", headers=headers), 200)
    assert first["message"] == "Subscribed successfully"
    assert first["data"] == {"created": True, "kind": "subscription", "target_id": channel_id}

    subscribers = assert_envelope(client.get(f"{API}/subscriptions/c/{channel_id}"), 200)
    assert [u["username"] for u in subscribers["data"]["items"]] == ["fan"]

    profile = assert_envelope(client.get(f"{API}/users/c/channel", headers=headers), 200)
    assert profile["data"]["is_subscribed"] is True
    assert profile["data"]["subscribers_count"] == baseline + 1

    second = assert_envelope(client.post(f"{API}/subscriptions/c/{channel_id}", headers=headers), 200)
    assert second["message"] == "Unsubscribed successfully"
    assert second["data"]["created"] is False

    subscribers = assert_envelope(client.get(f"{API}/subscriptions/c/{channel_id}"), 200)
    assert subscribers["data"]["items"] == []

    after = assert_envelope(client.get(f"{API}/users/c/channel", headers=headers), 200)
    assert after["data"]["is_subscribed"] is False
    assert after["data"]["subscribers_count"] == baseline


def test_subscribe_to_self_and_unknown(client, session):
    me_id = UserFactory(username="solo").id
    headers = bearer(login(client, "solo")["access_token"])

    own = client.post(f"{API}/subscriptions/c/{me_id}", headers=headers)
    assert assert_envelope(own, 400)["message"] == "You cannot subscribe to your own channel"

    assert_envelope(client.post(f"{API}/subscriptions/c/999999", headers=headers), 404)


def test_toggle_requires_auth(client, session):
    channel_id = UserFactory().id
    assert_envelope(client.post(f"{API}/subscriptions/c/{channel_id}"), 401)


def test_like_video_and_comment(client, session):
    UserFactory(username="liker")
    video = VideoFactory()
    comment = CommentFactory(video=video)
    video_id, comment_id = video.id, comment.id
    headers = bearer(login(client, "liker")["access_token"])

    liked = assert_envelope(client.post(f"{API}/likes/toggle/v/{video_id}", headers=headers), 200)
    assert liked["message"] == "Video liked"
    liked_comment = client.post(f"{API}/likes/toggle/c/{comment_id}", headers=headers)
    assert assert_envelope(liked_comment, 200)["message"] == "Comment liked"

    detail = assert_envelope(client.get(f"{API}/videos/{video_id}", headers=headers), 200)
    assert detail["data"]["likes_count"] == 1
    assert detail["data"]["is_liked"] is True

    listing = assert_envelope(client.get(f"{API}/likes/videos", headers=headers), 200)
    assert [v["id"] for v in listing["data"]["items"]] == [video_id]

    unliked = assert_envelope(client.post(f"{API}/likes/toggle/v/{video_id}", headers=headers), 200)
    assert unliked["message"] == "Video unliked"
    listing = assert_envelope(client.get(f"{API}/likes/videos", headers=headers), 200)
    assert listing["data"]["items"] == []
