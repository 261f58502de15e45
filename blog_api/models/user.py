# blog_api/models/user.py
from dataclasses import dataclass

from blog_api.core.permissions import DEFAULT_ROLE


@dataclass
class User:
    """
    Document structure of the MongoDB 'users' collection.
    Written by the auth service; this API only reads it.
    """
    user_id: str
    name: str
    email: str
    role: str = DEFAULT_ROLE

    def to_document(self) -> dict:
        return {'_id': self.user_id, 'name': self.name, 'email': self.email, 'role': self.role}
