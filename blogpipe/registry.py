from functools import cached_property
from typing import Iterable, Optional, Tuple

from .errors import DuplicatePathError
from .posts import Post
from .tags import TagIndex


def sort_key(post: Post):
    """Newest first; same-day posts by ascending path."""
    return (-post.date.toordinal(), post.path)


class Registry:
    """
    The sorted, deduplicated set of posts for one build.

    Construction checks path uniqueness and sorts; the value is never
    mutated afterwards.
    """

    def __init__(self, posts: Iterable[Post] = ()):
        seen = {}
        for post in posts:
            other = seen.get(post.path)
            if other is not None:
                raise DuplicatePathError(post.path, other.source, post.source)
            seen[post.path] = post
        self._posts = tuple(sorted(seen.values(), key=sort_key))
        self._by_path = seen

    @classmethod
    def build(cls, posts: Iterable[Post]) -> "Registry":
        return cls(posts)

    def all(self) -> Tuple[Post, ...]:
        return self._posts

    def by_path(self, path: str) -> Optional[Post]:
        return self._by_path.get(path)

    def by_tag(self, tag: str) -> Tuple[Post, ...]:
        return self.tag_index.posts_for(tag)

    @cached_property
    def tag_index(self) -> TagIndex:
        return TagIndex.build(self)

    def __len__(self):
        return len(self._posts)

    def __iter__(self):
        return iter(self._posts)

    def __eq__(self, other):
        if not isinstance(other, Registry):
            return NotImplemented
        return self._posts == other._posts

    def __repr__(self):
        return f"Registry({len(self._posts)} posts)"
