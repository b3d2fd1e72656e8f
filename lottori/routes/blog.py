"""Blog post routes."""

from __future__ import annotations

from flask import Blueprint

from lottori.cache import blog_posts
from lottori.errors import NotFoundError
from lottori.schemas.blog import BlogPostSchema, BlogPostSummarySchema
from lottori.utils.responses import ok

blog_bp = Blueprint("blog", __name__)

_summary_schema = BlogPostSummarySchema(many=True)
_post_schema = BlogPostSchema()


@blog_bp.get("/blog")
def list_posts():
    return ok(_summary_schema.dump(blog_posts()))


@blog_bp.get("/blog/<slug>")
def get_post(slug: str):
    for post in blog_posts():
        if post["slug"] == slug:
            return ok(_post_schema.dump(post))
    raise NotFoundError(message=f"Post {slug} not found")
