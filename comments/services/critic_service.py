from comments.models import Critic

MOST_ACTIVE_LIMIT = 20


class CriticService:
    def __init__(self, collection):
        self.collection = collection

    def most_active_commenters(self):
        """Top commenters by number of comments, at most MOST_ACTIVE_LIMIT of them.

        Equal counts come back in whatever order the server sorts them.
        """
        pipeline = [
            {"$group": {"_id": "$email", "count": {"$sum": 1}}},
            {"$sort": {"count": -1}},
            {"$limit": MOST_ACTIVE_LIMIT},
        ]
        return [Critic.from_document(doc) for doc in self.collection.aggregate(pipeline)]
