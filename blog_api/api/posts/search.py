# blog_api/api/posts/search.py
import re
from typing import Any, Dict, Optional

SEARCH_FIELDS = ('title', 'content', 'category')


def build_filter(search: Optional[str]) -> Dict[str, Any]:
    """
    Turns the ?search= query value into a MongoDB filter for the posts collection.

    A missing or blank term yields an empty filter (every post). Otherwise a
    post matches when the trimmed term appears, ignoring case, in its title,
    content or category. The term is escaped, so it is matched literally and
    never interpreted as a pattern.
    """
    term = search.strip() if isinstance(search, str) else ''
    if not term:
        return {}

    pattern = re.escape(term)
    return {'$or': [{field: {'$regex': pattern, '$options': 'i'}} for field in SEARCH_FIELDS]}
