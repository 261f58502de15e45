# blog_api/api/users/schemas.py
from marshmallow import Schema, fields


class UserReferenceSchema(Schema):
    """Resolved user embedded in post and comment responses."""
    user_id = fields.Str(data_key='_id')
    name = fields.Str()
    email = fields.Str()


def dump_user_reference(value):
    """A resolved user is rendered as an object; an unresolved reference stays a bare id."""
    if isinstance(value, dict):
        return UserReferenceSchema().dump(value)
    return value
