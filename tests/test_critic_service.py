from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from comments.models import Comment, Critic
from comments.services import CriticService
from comments.services.critic_service import MOST_ACTIVE_LIMIT


def add(comment_service, email, times=1):
    for i in range(times):
        comment_service.add_comment(
            Comment(movie_id="573a1390f29313caabcd4135", email=email, text=f"comment {i}")
        )


def test_empty_collection(critic_service):
    assert critic_service.most_active_commenters() == []


def test_most_active_commenters(comment_service, critic_service):
    add(comment_service, "a@x.com", 2)
    add(comment_service, "b@x.com", 1)

    assert critic_service.most_active_commenters() == [
        Critic(id="a@x.com", num_comments=2),
        Critic(id="b@x.com", num_comments=1),
    ]


def test_limited_and_sorted(comment_service, critic_service):
    for n in range(1, 26):
        add(comment_service, f"user{n}@x.com", n)

    critics = critic_service.most_active_commenters()

    assert len(critics) == MOST_ACTIVE_LIMIT
    assert critics[0] == Critic(id="user25@x.com", num_comments=25)
    assert all(c.num_comments >= 1 for c in critics)
    counts = [c.num_comments for c in critics]
    assert counts == sorted(counts, reverse=True)


def test_pipeline_sent_to_store():
    collection = MagicMock()
    collection.aggregate.return_value = iter([{"_id": "a@x.com", "count": 3}])

    assert CriticService(collection).most_active_commenters() == [Critic(id="a@x.com", num_comments=3)]
    collection.aggregate.assert_called_once_with([
        {"$group": {"_id": "$email", "count": {"$sum": 1}}},
        {"$sort": {"count": -1}},
        {"$limit": 20},
    ])


def test_store_unavailable_propagates():
    collection = MagicMock()
    collection.aggregate.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(ServerSelectionTimeoutError):
        CriticService(collection).most_active_commenters()
