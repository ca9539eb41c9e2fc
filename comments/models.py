from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId


def utc_now():
    return normalize_date(datetime.now(timezone.utc))


def normalize_date(value):
    # BSON dates are stored in UTC with millisecond resolution
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def _as_str(value):
    if isinstance(value, ObjectId):
        return str(value)
    return value


@dataclass
class Comment:
    movie_id: Optional[str] = None
    email: Optional[str] = None
    text: Optional[str] = None
    name: Optional[str] = None
    id: Optional[str] = None
    date: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc):
        return cls(
            id=_as_str(doc.get("_id")),
            movie_id=_as_str(doc.get("movie_id")),
            email=doc.get("email"),
            name=doc.get("name"),
            text=doc.get("text"),
            date=normalize_date(doc.get("date")),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "movie_id": self.movie_id,
            "name": self.name,
            "email": self.email,
            "text": self.text,
            "date": self.date.isoformat() if self.date else None,
        }


@dataclass(frozen=True)
class Critic:
    """One row of the most active commenters report."""
    id: str
    num_comments: int

    @classmethod
    def from_document(cls, doc):
        return cls(id=doc["_id"], num_comments=int(doc["count"]))

    def to_dict(self):
        return {"id": self.id, "numComments": self.num_comments}
