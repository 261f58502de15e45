# blog_api/api/users/services.py
import logging
from typing import Dict, Any, Iterable, List

from bson import ObjectId
from pymongo.database import Database


def _id_candidates(user_id: str) -> List[Any]:
    # The auth service may key users by ObjectId or by plain string.
    if ObjectId.is_valid(user_id):
        return [ObjectId(user_id), user_id]
    return [user_id]


class UserService:
    """
    Read access to the 'users' collection.
    Used to resolve author and comment user references into display data.
    """
    def __init__(self, db: Database):
        self.db = db
        self.users = db['users']

    def get_users_by_ids(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Fetches every distinct id in a single query, keyed by the id as a string.
        Ids without a user document are left out of the result.
        """
        wanted = {str(user_id) for user_id in user_ids if user_id}
        if not wanted:
            return {}

        lookup = [candidate for user_id in wanted for candidate in _id_candidates(user_id)]
        try:
            users = {}
            for doc in self.users.find({'_id': {'$in': lookup}}, {'name': 1, 'email': 1}):
                user_id = str(doc.pop('_id'))
                users[user_id] = dict(doc, user_id=user_id)
            return users
        except Exception as e:
            logging.error(f"User lookup failed (user_ids: {sorted(wanted)}): {e}", exc_info=True)
            raise
