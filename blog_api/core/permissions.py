# blog_api/core/permissions.py
from typing import Optional

ADMIN_ROLE = "admin"
DEFAULT_ROLE = "user"


def can_modify(actor_id: Optional[str], actor_role: Optional[str], owner_id: Optional[str]) -> bool:
    """
    Ownership check used before every mutation of a post or comment.

    Administrators may modify anything; everyone else only what they own.
    An anonymous actor (no id) never owns anything.
    """
    if actor_role == ADMIN_ROLE:
        return True
    return actor_id is not None and str(actor_id) == str(owner_id)
