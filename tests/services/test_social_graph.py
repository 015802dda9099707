"""Social Graph: tests for follow toggles and the chat threads they create or delete.

Tests cover:
    - mutual follow creates a thread seeded with the greeting
    - unfollow hard-deletes the thread and its history
    - re-following recreates a fresh thread (greeting only, no old history)
    - unknown profiles are a no-op
    - seeded threads for non-mutual users are dropped on construction
    - threads come back as snapshots
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from snowboard_swap.core.social_models import UserChatMessage, UserChatThread, UserProfile
from snowboard_swap.services.social_graph import GREETING_TEXT, SocialGraph


@pytest.fixture
def mia():
    return UserProfile(id=uuid4(), display_name="Mia", is_following_me=True)


@pytest.fixture
def graph(mia):
    return SocialGraph(users=[mia])


def test_follow_back_creates_seeded_thread(graph, mia):
    profile = graph.toggle_follow(mia.id)
    assert profile.can_chat
    thread = graph.thread(mia.id)
    assert [m.text for m in thread.messages] == [GREETING_TEXT]
    assert thread.messages[0].is_current_user is False


def test_one_sided_follow_creates_nothing():
    noah = UserProfile(id=uuid4(), display_name="Noah")
    graph = SocialGraph(users=[noah])
    assert graph.toggle_follow(noah.id).is_following
    assert graph.thread(noah.id) is None


def test_unfollow_deletes_thread_and_history(graph, mia):
    graph.toggle_follow(mia.id)
    thread = graph.thread(mia.id)
    graph.send_message("See you on the slopes", thread)

    graph.toggle_follow(mia.id)
    assert graph.thread(mia.id) is None
    assert graph.threads() == ()


def test_refollow_recreates_fresh_thread(graph, mia):
    graph.toggle_follow(mia.id)
    old = graph.thread(mia.id)
    graph.send_message("first chat", old)
    graph.toggle_follow(mia.id)

    graph.toggle_follow(mia.id)
    fresh = graph.thread(mia.id)
    assert fresh.id != old.id
    assert [m.text for m in fresh.messages] == [GREETING_TEXT]


def test_counterparty_unfollow_deletes_thread(graph, mia):
    graph.toggle_follow(mia.id)
    graph.set_follows_me(mia.id, False)
    assert graph.thread(mia.id) is None
    graph.set_follows_me(mia.id, True)
    assert graph.thread(mia.id) is not None


def test_unknown_profile_is_noop(graph):
    assert graph.toggle_follow(uuid4()) is None
    assert graph.set_follows_me(uuid4(), True) is None


def test_send_message_rules(graph, mia):
    graph.toggle_follow(mia.id)
    thread = graph.thread(mia.id)
    assert graph.send_message("   ", thread) is None
    message = graph.send_message(" Hey! ", thread)
    assert message.text == "Hey!"
    assert message.is_current_user
    stray = UserChatThread(id=uuid4(), user=mia)
    assert graph.send_message("hi", stray) is None


def test_refresh_thread_user(graph, mia):
    graph.toggle_follow(mia.id)
    profile = graph.user(mia.id)
    profile.home_resort = "Laax"
    graph.refresh_thread_user(profile)
    assert graph.thread(mia.id).user.home_resort == "Laax"


def test_construction_drops_threads_without_mutual_follow():
    friend = UserProfile(id=uuid4(), display_name="Friend", is_following=True, is_following_me=True)
    stranger = UserProfile(id=uuid4(), display_name="Stranger", is_following=True)
    history = [
        UserChatMessage(
            id=uuid4(), is_current_user=True, text="yo",
            timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
    ]
    graph = SocialGraph(
        users=[friend, stranger],
        threads=[
            UserChatThread(id=uuid4(), user=friend, messages=history),
            UserChatThread(id=uuid4(), user=stranger, messages=list(history)),
        ],
    )
    assert [t.user.id for t in graph.threads()] == [friend.id]
    assert graph.thread(friend.id).messages == history


def test_threads_are_snapshots(graph, mia):
    graph.toggle_follow(mia.id)
    graph.thread(mia.id).messages.clear()
    graph.threads()[0].messages.append("forged")
    graph.threads()[0].user.display_name = "Impostor"
    stored = graph.thread(mia.id)
    assert [m.text for m in stored.messages] == [GREETING_TEXT]
    assert stored.user.display_name == "Mia"
