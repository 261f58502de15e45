# blog_api/api/posts/schemas.py
from marshmallow import Schema, fields, EXCLUDE, ValidationError

from blog_api.api.comments.schemas import CommentResponseSchema
from blog_api.api.users.schemas import dump_user_reference


def required_text(label: str):
    """Validator rejecting empty and whitespace-only strings."""
    def validate(value: str):
        if not value.strip():
            raise ValidationError(f"{label} is required")
    return validate


# --- request schemas ---

class PostCreateSchema(Schema):
    """Validates the body of POST /api/posts."""
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=required_text("Title"),
                       error_messages={"required": "Title is required"})
    content = fields.Str(required=True, validate=required_text("Content"),
                         error_messages={"required": "Content is required"})
    category = fields.Str(required=True, validate=required_text("Category"),
                          error_messages={"required": "Category is required"})
    image_url = fields.Str(data_key='imageUrl', load_default=None, allow_none=True)


class PostUpdateSchema(Schema):
    """
    Validates the body of PUT/PATCH /api/posts/{post_id}.
    Every field is optional; empty values leave the stored value unchanged.
    """
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(allow_none=True)
    content = fields.Str(allow_none=True)
    category = fields.Str(allow_none=True)
    image_url = fields.Str(data_key='imageUrl', allow_none=True)


# --- response schemas ---

class PostResponseSchema(Schema):
    """Final JSON shape of a post."""
    post_id = fields.Str(data_key='_id')
    title = fields.Str()
    content = fields.Str()
    category = fields.Str(allow_none=True)
    image_url = fields.Str(data_key='imageUrl', allow_none=True)
    author = fields.Function(lambda post: dump_user_reference(post.get('author')))
    comments = fields.List(fields.Nested(CommentResponseSchema))
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')
