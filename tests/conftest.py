import os

import django
import mongomock
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mflix.settings")
django.setup()

from comments.services import CommentService, CriticService


@pytest.fixture
def collection():
    client = mongomock.MongoClient()
    yield client["sample_mflix"]["comments"]
    client.close()


@pytest.fixture
def comment_service(collection):
    return CommentService(collection)


@pytest.fixture
def critic_service(collection):
    return CriticService(collection)
