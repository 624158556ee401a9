from datetime import date, datetime

import pytest

from blogpipe.errors import DateParseError, MetadataError
from blogpipe.posts import Post, clean_tags, extract, path_from_document


def meta(**overrides):
    raw = {"title": "Hello", "date": "2021-05-11", "desc": "A summary"}
    raw.update(overrides)
    return {k: v for k, v in raw.items() if v is not ...}


class TestPathFromDocument:
    @pytest.mark.parametrize(
        "document_path,expected",
        [
            ("hello.md", "/hello"),
            ("posts/hello.md", "/posts/hello"),
            ("/posts/hello.mdx", "/posts/hello"),
            ("posts/trip/index.md", "/posts/trip"),
            ("index.md", "/"),
            ("./about.md", "/about"),
            ("posts\\win.md", "/posts/win"),
        ],
    )
    def test_paths(self, document_path, expected):
        assert path_from_document(document_path) == expected


class TestExtract:
    def test_valid_metadata(self):
        post = extract("posts/hello.md", meta(tags=["x", "y"], imageURL="https://e.com/i.png"))
        assert post == Post(
            path="/posts/hello",
            title="Hello",
            date=date(2021, 5, 11),
            tags=("x", "y"),
            desc="A summary",
            image_url="https://e.com/i.png",
        )
        assert post.source == "posts/hello.md"

    def test_post_is_immutable(self):
        post = extract("a.md", meta())
        with pytest.raises(AttributeError):
            post.title = "changed"

    @pytest.mark.parametrize("field", ["title", "date", "desc"])
    def test_missing_required_field(self, field):
        with pytest.raises(MetadataError) as excinfo:
            extract("a.md", meta(**{field: ...}))
        err = excinfo.value
        assert (err.document_path, err.field_name, err.reason) == ("a.md", field, "missing")

    @pytest.mark.parametrize("field", ["title", "desc"])
    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_required_field(self, field, value):
        with pytest.raises(MetadataError) as excinfo:
            extract("a.md", meta(**{field: value}))
        assert excinfo.value.field_name == field
        assert excinfo.value.reason == "missing"

    def test_invalid_date(self):
        with pytest.raises(MetadataError) as excinfo:
            extract("a.md", meta(date="2021-02-30"))
        err = excinfo.value
        assert (err.field_name, err.reason) == ("date", "invalid")
        assert isinstance(err.__cause__, DateParseError)
        assert str(err) == "a.md: field 'date' is invalid"

    def test_yaml_date_object_is_accepted(self):
        assert extract("a.md", meta(date=date(2020, 1, 2))).date == date(2020, 1, 2)

    def test_datetime_with_time_is_invalid(self):
        with pytest.raises(MetadataError) as excinfo:
            extract("a.md", meta(date=datetime(2020, 1, 2, 10, 30)))
        assert excinfo.value.reason == "invalid"

    def test_tags_default_to_empty(self):
        assert extract("a.md", meta()).tags == ()

    def test_tags_trimmed_and_deduplicated(self):
        post = extract("a.md", meta(tags=[" rust ", "", "async", "rust", "  "]))
        assert post.tags == ("rust", "async")

    def test_blank_image_url_is_absent(self):
        assert extract("a.md", meta(imageURL="  ")).image_url is None

    @pytest.mark.parametrize("url", ["/relative.png", "trip.png", "ftp://e.com/x.png"])
    def test_non_absolute_image_url(self, url):
        with pytest.raises(MetadataError) as excinfo:
            extract("a.md", meta(imageURL=url))
        assert (excinfo.value.field_name, excinfo.value.reason) == ("imageURL", "invalid")

    def test_extract_has_no_side_effects(self):
        raw = meta(tags=["b", "a"])
        snapshot = dict(raw)
        extract("a.md", raw)
        assert raw == snapshot


def test_clean_tags_accepts_comma_separated_string():
    assert clean_tags("travel, rust,,travel") == ("travel", "rust")


@pytest.mark.parametrize("raw", [2021, True, {"a": 1}, ["ok", ["nested"]], ["ok", {"k": "v"}]])
def test_tags_of_unsupported_shape_are_invalid(raw):
    with pytest.raises(MetadataError) as excinfo:
        extract("a.md", meta(tags=raw))
    err = excinfo.value
    assert (err.document_path, err.field_name, err.reason) == ("a.md", "tags", "invalid")


def test_scalar_items_in_tag_list_become_strings():
    assert extract("a.md", meta(tags=[2021, "rust", True])).tags == ("2021", "rust", "True")
