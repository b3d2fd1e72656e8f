"""Marshmallow schemas for blog posts."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class BlogPostSchema(Schema):
    """Validate a blog post file and serialize it for the API."""

    class Meta:
        unknown = EXCLUDE

    slug = fields.Str(required=True, validate=validate.Regexp(r"^[a-z0-9][a-z0-9-]*$"))
    title = fields.Str(required=True, validate=validate.Length(min=1))
    description = fields.Str(load_default="")
    content = fields.Str(load_default="")
    date = fields.Date(required=True)
    category = fields.Str(load_default="")
    tags = fields.List(fields.Str(), load_default=list)


class BlogPostSummarySchema(BlogPostSchema):
    class Meta:
        exclude = ("content",)
