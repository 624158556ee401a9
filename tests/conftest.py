from datetime import date

import pytest

from blogpipe.posts import Post


@pytest.fixture
def make_post():
    """Build a Post from short keyword arguments."""

    def _make(path, title="T", day="2020-01-01", tags=(), desc="d", **kwargs):
        source = kwargs.pop("source", path.lstrip("/") + ".md")
        return Post(
            path=path,
            title=title,
            date=date.fromisoformat(day),
            tags=tuple(tags),
            desc=desc,
            source=source,
            **kwargs,
        )

    return _make


@pytest.fixture
def p1(make_post):
    return make_post("/a", title="A", day="2020-01-01", tags=["x"], desc="d1")


@pytest.fixture
def p2(make_post):
    return make_post("/b", title="B", day="2021-01-01", tags=["x", "y"], desc="d2")


@pytest.fixture
def site(tmp_path):
    """A config file plus a small content tree."""
    posts = tmp_path / "posts"
    (posts / "trip").mkdir(parents=True)

    (posts / "first.md").write_text(
        "---\n"
        "title: First post\n"
        "date: 2020-03-01\n"
        "tags: [rust, async]\n"
        "desc: Where it began\n"
        "---\n"
        "Hello *world*.\n",
        encoding="utf-8",
    )
    (posts / "trip" / "index.md").write_text(
        "---\n"
        "title: A trip\n"
        "date: '2021-05-11'\n"
        "tags: travel, rust\n"
        "desc: Pictures & notes\n"
        "imageURL: https://example.com/trip.png\n"
        "---\n"
        "![The coast](coast.jpg)\n",
        encoding="utf-8",
    )
    (posts / "wip.md").write_text(
        "---\ntitle: Not yet\ndate: 2021-06-01\ndesc: later\ndraft: true\n---\nTBD\n",
        encoding="utf-8",
    )

    config = tmp_path / "config.yml"
    config.write_text(
        "site_title: Test Blog\n"
        "site_description: Notes about code\n"
        "site_url: https://blog.example.com/\n"
        "content_root: posts\n"
        "output_dir: _site\n"
        "workers: 2\n",
        encoding="utf-8",
    )
    return tmp_path
