# blog_api/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from bson import ObjectId

from blog_api.utils.datetime_utils import DateTimeUtils


@dataclass
class Comment:
    """Entry of the 'comments' array embedded in a post document."""
    comment_id: ObjectId
    user: str  # user id of the comment author
    text: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)

    def to_document(self) -> dict:
        return {'_id': self.comment_id, 'user': self.user, 'text': self.text, 'created_at': self.created_at}


@dataclass
class Post:
    """
    Document structure of the MongoDB 'posts' collection.
    Comments live inside the post and are deleted with it.
    """
    post_id: ObjectId
    title: str
    content: str
    category: str
    author: str  # user id of the creator, never reassigned
    image_url: Optional[str] = None
    comments: List[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    def to_document(self) -> dict:
        return {
            '_id': self.post_id,
            'title': self.title,
            'content': self.content,
            'category': self.category,
            'author': self.author,
            'image_url': self.image_url,
            'comments': [comment.to_document() for comment in self.comments],
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
