from .comment_service import CommentService
from .critic_service import CriticService
from .mongo_service import MongoService, close_mongo_service, get_mongo_service


def get_comment_service():
    return CommentService(get_mongo_service().comments)


def get_critic_service():
    return CriticService(get_mongo_service().comments)
