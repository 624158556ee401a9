import re
from typing import Dict, List, Tuple

from .posts import Post


def slugify_tag(tag: str) -> str:
    """
    Convert a tag like 'Outdoor Trips' into a URL-friendly slug: 'outdoor-trips'.
    """
    s = tag.strip().lower()
    s = re.sub(r"[\s_]+", "-", s)
    s = re.sub(r"[^a-z0-9-]", "", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "tag"


class TagIndex:
    """
    tag -> posts carrying it, in registry order.

    Buckets are filled in one pass over registry.all(), which is already
    sorted, so no per-tag sort is needed.
    """

    def __init__(self, buckets: Dict[str, Tuple[Post, ...]]):
        self._buckets = buckets

    @classmethod
    def build(cls, registry) -> "TagIndex":
        buckets: Dict[str, List[Post]] = {}
        for post in registry.all():
            for tag in post.tags:
                buckets.setdefault(tag, []).append(post)
        return cls({tag: tuple(posts) for tag, posts in buckets.items()})

    def tags(self) -> List[str]:
        return sorted(self._buckets)

    def posts_for(self, tag: str) -> Tuple[Post, ...]:
        return self._buckets.get(tag, ())

    def count_for(self, tag: str) -> int:
        return len(self._buckets.get(tag, ()))

    def __contains__(self, tag):
        return tag in self._buckets

    def __len__(self):
        return len(self._buckets)
