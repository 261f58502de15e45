# blog_api/api/posts/presenters.py
"""
Read-side join between post documents and the users they reference.

Stored documents keep plain user ids in 'author' and in each comment's
'user'. Before a post goes out, those ids are replaced by the user's public
fields and every comment gains an 'author_name'. The stored documents are
never modified; the presenters work on copies.
"""
from typing import Any, Dict, Iterable, Set

AUTHOR_FIELDS = ('name', 'email')
COMMENT_USER_FIELDS = ('name',)


def referenced_user_ids(posts: Iterable[Dict[str, Any]]) -> Set[str]:
    """All user ids a batch of posts points to (authors and commenters)."""
    user_ids = set()
    for post in posts:
        if post.get('author'):
            user_ids.add(post['author'])
        for comment in post.get('comments') or []:
            if comment.get('user'):
                user_ids.add(comment['user'])
    return user_ids


def resolve_user(user_id, users: Dict[str, Dict[str, Any]], fields) -> Any:
    """The selected public fields of a user, or the bare id when the user is unknown."""
    user = users.get(user_id)
    if user is None:
        return user_id
    resolved = {'user_id': user_id}
    resolved.update({name: user.get(name) for name in fields})
    return resolved


def present_comment(comment: Dict[str, Any], users: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    view = dict(comment)
    view['user'] = resolve_user(comment.get('user'), users, COMMENT_USER_FIELDS)
    if isinstance(view['user'], dict):
        view['author_name'] = view['user'].get('name')
    return view


def present_post(post: Dict[str, Any], users: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    view = dict(post)
    view['author'] = resolve_user(post.get('author'), users, AUTHOR_FIELDS)
    view['comments'] = [present_comment(c, users) for c in post.get('comments') or []]
    return view
