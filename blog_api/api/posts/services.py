# blog_api/api/posts/services.py
import logging
from typing import Optional, Dict, Any, List, Callable
from datetime import datetime

from bson import ObjectId
from marshmallow import ValidationError
from pymongo import DESCENDING
from pymongo.database import Database

from blog_api.api.posts.presenters import present_comment, present_post, referenced_user_ids
from blog_api.api.posts.search import build_filter
from blog_api.api.users.services import UserService
from blog_api.core.exceptions import ForbiddenError, NotFoundError
from blog_api.core.permissions import can_modify
from blog_api.models.post import Comment, Post
from blog_api.utils.datetime_utils import DateTimeUtils

UPDATABLE_FIELDS = ('title', 'content', 'category', 'image_url')
# Newest first; the ObjectId breaks ties between posts created in the same millisecond.
LISTING_ORDER = [('created_at', DESCENDING), ('_id', DESCENDING)]

LOOKUP_NOT_FOUND = "No posts found of this id"
MUTATION_NOT_FOUND = "Post not found"


def _require_text(**values: Optional[str]):
    errors = {
        name: [f"{name.capitalize()} is required"]
        for name, value in values.items()
        if not isinstance(value, str) or not value.strip()
    }
    if errors:
        raise ValidationError(errors)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _object_id(value: str, not_found_message: str) -> ObjectId:
    """Parses a path id. Malformed ids are reported exactly like missing posts."""
    if not ObjectId.is_valid(value):
        raise NotFoundError(not_found_message)
    return ObjectId(value)


def _from_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Stored post -> plain dict with string ids and UTC-aware timestamps."""
    post = DateTimeUtils.from_mongo(dict(doc))
    post['post_id'] = str(post.pop('_id'))
    post['comments'] = [_comment_from_document(c) for c in post.get('comments') or []]
    return post


def _comment_from_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    comment = dict(doc)
    comment['comment_id'] = str(comment.pop('_id'))
    return comment


class PostService:
    """
    Business logic for posts and their embedded comments.
    All MongoDB access for the 'posts' collection goes through here.

    Mutations read the post, check permissions, then write once, with no
    transaction; concurrent writers to the same post race and the last one wins.
    """
    def __init__(self, db: Database, user_service: UserService,
                 clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.posts = db['posts']
        self.user_service = user_service
        self.clock = clock or DateTimeUtils.now

    # --- helpers ---

    def _get_post_document(self, post_id: str, not_found_message: str = MUTATION_NOT_FOUND) -> Dict[str, Any]:
        doc = self.posts.find_one({'_id': _object_id(post_id, not_found_message)})
        if doc is None:
            raise NotFoundError(not_found_message)
        return doc

    def _populate(self, posts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        users = self.user_service.get_users_by_ids(referenced_user_ids(posts))
        return [present_post(post, users) for post in posts]

    # --- posts ---

    def create_post(self, author_id: str, title: str, content: str, category: str,
                    image_url: Optional[str] = None) -> Dict[str, Any]:
        """Creates a post owned by author_id."""
        _require_text(title=title, content=content, category=category)
        try:
            created_at = self.clock()
            new_post = Post(
                post_id=ObjectId(), title=title, content=content, category=category,
                author=str(author_id), image_url=image_url or None,
                created_at=created_at, updated_at=created_at
            )
            doc = DateTimeUtils.for_mongo(new_post.to_document())
            self.posts.insert_one(doc)
            logging.info(f"Post created (post_id: {new_post.post_id}, author: {author_id})")
            return self._populate([_from_document(doc)])[0]
        except Exception as e:
            logging.error(f"Post creation failed (author: {author_id}): {e}", exc_info=True)
            raise

    def get_posts(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """All posts matching the optional search term, newest first."""
        cursor = self.posts.find(build_filter(search)).sort(LISTING_ORDER)
        return self._populate([_from_document(doc) for doc in cursor])

    def get_post_by_id(self, post_id: str) -> Dict[str, Any]:
        return self._populate([_from_document(self._get_post_document(post_id, LOOKUP_NOT_FOUND))])[0]

    def update_post(self, post_id: str, actor_id: str, actor_role: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partial update. Only fields in UPDATABLE_FIELDS that are present and
        non-blank in the patch overwrite the stored values.
        """
        doc = self._get_post_document(post_id)
        if not can_modify(actor_id, actor_role, doc.get('author')):
            raise ForbiddenError("You are not allowed to update this post")

        changes = {
            name: patch[name] for name in UPDATABLE_FIELDS
            if name in patch and not _is_blank(patch[name])
        }
        if not changes:
            return self._populate([_from_document(doc)])[0]

        changes['updated_at'] = self.clock()
        self.posts.update_one({'_id': doc['_id']}, {'$set': DateTimeUtils.for_mongo(changes)})
        logging.info(f"Post updated (post_id: {post_id}, fields: {sorted(changes)})")
        return self.get_post_by_id(post_id)

    def delete_post(self, post_id: str, actor_id: str, actor_role: str) -> None:
        doc = self._get_post_document(post_id)
        if not can_modify(actor_id, actor_role, doc.get('author')):
            raise ForbiddenError("You are not allowed to delete this post")

        self.posts.delete_one({'_id': doc['_id']})
        logging.info(f"Post deleted (post_id: {post_id}, by: {actor_id})")

    # --- comments ---

    def add_comment(self, post_id: str, actor_id: str, text: str) -> Dict[str, Any]:
        """Appends a comment written by actor_id and returns it."""
        _require_text(text=text)
        doc = self._get_post_document(post_id)

        created_at = self.clock()
        new_comment = Comment(comment_id=ObjectId(), user=str(actor_id), text=text, created_at=created_at)
        comment_doc = DateTimeUtils.for_mongo(new_comment.to_document())

        result = self.posts.update_one(
            {'_id': doc['_id']},
            {'$push': {'comments': comment_doc}, '$set': {'updated_at': comment_doc['created_at']}}
        )
        if result.matched_count == 0:
            # Deleted between the read and the write
            raise NotFoundError(MUTATION_NOT_FOUND)
        logging.info(f"Comment added (post_id: {post_id}, comment_id: {new_comment.comment_id})")

        users = self.user_service.get_users_by_ids([new_comment.user])
        return present_comment(_comment_from_document(comment_doc), users)

    def delete_comment(self, post_id: str, comment_id: str, actor_id: str, actor_role: str) -> None:
        """
        Removes exactly one comment with $pull. Comments appended concurrently
        survive and the remaining ones keep their order.
        """
        doc = self._get_post_document(post_id)
        comments = doc.get('comments') or []

        target = next((c for c in comments if str(c.get('_id')) == comment_id), None)
        if target is None:
            raise NotFoundError("Comment not found", error_code="COMMENT_NOT_FOUND")
        if not can_modify(actor_id, actor_role, target.get('user')):
            raise ForbiddenError("You are not allowed to delete this comment")

        self.posts.update_one(
            {'_id': doc['_id']},
            {'$pull': {'comments': {'_id': target['_id']}},
             '$set': {'updated_at': DateTimeUtils.for_mongo(self.clock())}}
        )
        logging.info(f"Comment deleted (post_id: {post_id}, comment_id: {comment_id}, by: {actor_id})")
