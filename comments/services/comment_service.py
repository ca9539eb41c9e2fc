import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, WriteError

from comments.errors import InvalidIdentifier, InvalidOperation
from comments.models import Comment, normalize_date, utc_now

logger = logging.getLogger(__name__)


def to_object_id(value):
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not value:
        raise InvalidIdentifier(value)
    try:
        return ObjectId(value)
    except InvalidId as e:
        raise InvalidIdentifier(value) from e


def _movie_ref(movie_id):
    # movie_id is only a reference, kept verbatim when it isn't an ObjectId
    if isinstance(movie_id, str) and ObjectId.is_valid(movie_id):
        return ObjectId(movie_id)
    return movie_id


class CommentService:
    """Reads and writes documents of the comments collection.

    The collection handle is opened elsewhere (see MongoService) and passed in.
    Edits and deletes are only allowed for the email that wrote the comment.
    """

    def __init__(self, collection):
        self.collection = collection

    def get_comment(self, comment_id):
        """Return the Comment with this id, or None if there isn't one."""
        doc = self.collection.find_one({"_id": to_object_id(comment_id)})
        if doc is None:
            return None
        return Comment.from_document(doc)

    def get_movie_comments(self, movie_id):
        cursor = self.collection.find({"movie_id": _movie_ref(movie_id)}).sort("date", -1)
        return [Comment.from_document(doc) for doc in cursor]

    def add_comment(self, comment):
        """Insert a comment and return it as read back from the collection.

        A missing id is generated here and a missing date defaults to now.
        Raises InvalidOperation if the insert is rejected (duplicate id...)
        or if nothing can be read back afterwards.
        """
        missing = [field for field in ("movie_id", "email", "text") if not getattr(comment, field)]
        if missing:
            raise InvalidOperation(f"Comment is missing required fields: {', '.join(missing)}")

        if comment.id is None:
            oid = ObjectId()
        else:
            try:
                oid = to_object_id(comment.id)
            except InvalidIdentifier as e:
                raise InvalidOperation(f"Comment id {comment.id!r} is not a valid identifier") from e

        to_insert = {
            "_id": oid,
            "name": comment.name,
            "movie_id": _movie_ref(comment.movie_id),
            "email": comment.email,
            "text": comment.text,
            "date": normalize_date(comment.date) or utc_now(),
        }

        logger.info("Going to insert comment %s dated %s", oid, to_insert["date"])
        try:
            self.collection.insert_one(to_insert)
        except DuplicateKeyError as e:
            logger.error("Could not insert comment %s: duplicate id", oid)
            raise InvalidOperation(f"A comment with id {oid} already exists") from e
        except WriteError as e:
            logger.error("Could not insert comment %s: %s", oid, e)
            raise InvalidOperation(f"Comment insertion was rejected: {e}") from e

        inserted = self.collection.find_one({"_id": oid})
        if inserted is None:
            raise InvalidOperation("Comment insertion failed")
        return Comment.from_document(inserted)

    def update_comment(self, comment_id, text, email):
        """Set a new text (and refresh the date) if `email` owns the comment.

        Returns False when the text is empty, the comment doesn't exist,
        belongs to someone else, or no document was modified.
        """
        oid = to_object_id(comment_id)
        if not text:
            logger.warning("Refusing to blank the text of comment %s", oid)
            return False
        to_edit = self.collection.find_one({"_id": oid})
        if to_edit is None:
            logger.warning("Comment %s not found, nothing to update", oid)
            return False
        if to_edit.get("email") != email:
            logger.warning("Only the author of comment %s can edit it", oid)
            return False

        update = {"$set": {"text": text, "date": utc_now()}}
        try:
            result = self.collection.update_one({"_id": oid, "email": email}, update)
        except WriteError as e:
            logger.error("Could not update comment %s: %s", oid, e)
            return False

        if result.modified_count == 0:
            logger.warning("Comment %s was not modified", oid)
            return False
        logger.info("Updated comment %s", oid)
        return True

    def delete_comment(self, comment_id, email):
        oid = to_object_id(comment_id)
        to_delete = self.collection.find_one({"_id": oid})
        if to_delete is None:
            logger.warning("Comment %s not found, nothing to delete", oid)
            return False
        if to_delete.get("email") != email:
            logger.warning("Only the author of comment %s can delete it", oid)
            return False

        try:
            result = self.collection.delete_one({"_id": oid, "email": email})
        except WriteError as e:
            logger.error("Could not delete comment %s: %s", oid, e)
            return False

        if result.deleted_count != 1:
            return False
        logger.info("Deleted comment %s", oid)
        return True
