# blog_api/api/comments/schemas.py
from marshmallow import Schema, fields, pre_load, EXCLUDE, ValidationError

from blog_api.api.users.schemas import dump_user_reference


def not_blank(value: str):
    if not value.strip():
        raise ValidationError("Comment text is required")


class CommentCreateSchema(Schema):
    """
    POST /api/posts/{post_id}/comments
    The body field is 'text'; older clients send 'comment', which is accepted when 'text' is absent.
    """
    class Meta:
        unknown = EXCLUDE

    text = fields.Str(required=True, validate=not_blank,
                      error_messages={"required": "Comment text is required"})

    @pre_load
    def accept_legacy_comment_field(self, data, **kwargs):
        if isinstance(data, dict) and 'text' not in data and 'comment' in data:
            data = dict(data)
            data['text'] = data.pop('comment')
        return data


class CommentResponseSchema(Schema):
    """A comment as returned to clients, with its user resolved."""
    comment_id = fields.Str(data_key='_id')
    # Resolved user object, or the bare user id when the user no longer exists.
    user = fields.Function(lambda comment: dump_user_reference(comment.get('user')))
    text = fields.Str()
    # Only present when the user could be resolved.
    author_name = fields.Str(data_key='authorName')
    created_at = fields.DateTime(data_key='createdAt')
