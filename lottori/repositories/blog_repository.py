"""Repository for blog posts stored as one JSON file per post."""

from __future__ import annotations

import json
import logging
import os
import pathlib
from typing import Any

from marshmallow import ValidationError as MarshmallowValidationError

from lottori.schemas.blog import BlogPostSchema

logger = logging.getLogger(__name__)


class BlogRepository:
    """Read ``<blog_dir>/*.json``; posts come back newest first."""

    def __init__(self, blog_dir: str | os.PathLike[str]) -> None:
        self.blog_dir = pathlib.Path(blog_dir)
        self._schema = BlogPostSchema()

    def list_files(self) -> list[pathlib.Path]:
        if not self.blog_dir.is_dir():
            return []
        return sorted(p for p in self.blog_dir.iterdir() if p.suffix == ".json")

    def load_all(self) -> list[dict[str, Any]]:
        posts: list[dict[str, Any]] = []
        for path in self.list_files():
            try:
                with path.open("r", encoding="utf-8") as f:
                    posts.append(self._schema.load(json.load(f)))
            except (OSError, ValueError, MarshmallowValidationError):
                logger.warning("Skipping invalid blog post %s", path, exc_info=True)

        posts.sort(key=lambda p: p["date"], reverse=True)
        return posts
