import logging

from pymongo import MongoClient
from django.conf import settings

logger = logging.getLogger(__name__)


class MongoService:
    def __init__(self, uri=None, db_name=None, client=None):
        if client is None:
            client = MongoClient(
                uri or settings.MONGO_URI,
                serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
            )
        self.client = client
        self.db = self.client[db_name or settings.MONGO_DB_NAME]

    @property
    def comments(self):
        return self.db[settings.MONGO_COMMENTS_COLLECTION]

    def close(self):
        self.client.close()


_mongo_service = None


def get_mongo_service():
    global _mongo_service
    if _mongo_service is None:
        logger.info("Opening MongoDB connection to database %s", settings.MONGO_DB_NAME)
        _mongo_service = MongoService()
    return _mongo_service


def close_mongo_service():
    global _mongo_service
    if _mongo_service is not None:
        _mongo_service.close()
        _mongo_service = None
