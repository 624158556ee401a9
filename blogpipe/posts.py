from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import PurePosixPath
from typing import Optional, Tuple
from urllib.parse import urlparse

from . import dates
from .errors import DateParseError, MetadataError

REQUIRED_FIELDS = ("title", "date", "desc")


@dataclass(frozen=True)
class Post:
    path: str
    title: str
    date: date
    tags: Tuple[str, ...] = ()
    desc: str = ""
    image_url: Optional[str] = None
    # Where the post came from; only used to name documents in errors.
    source: str = field(default="", compare=False)


def path_from_document(document_path: str) -> str:
    """
    Canonical site path for a document location:

      "posts/hello.md"       -> "/posts/hello"
      "posts/trip/index.md"  -> "/posts/trip"
      "index.md"             -> "/"
    """
    p = PurePosixPath(str(document_path).replace("\\", "/"))
    parts = [part for part in p.with_suffix("").parts if part not in ("/", ".", "")]
    if parts and parts[-1] == "index":
        parts = parts[:-1]
    return "/" + "/".join(parts)


def _required_text(document_path: str, raw_metadata: dict, name: str) -> str:
    value = raw_metadata.get(name)
    if value is None:
        raise MetadataError(document_path, name, MetadataError.MISSING)
    text = str(value).strip()
    if not text:
        raise MetadataError(document_path, name, MetadataError.MISSING)
    return text


def clean_tags(raw, document_path: str = "") -> Tuple[str, ...]:
    """
    Accepts a list or a comma-separated string ("tags: rust, async").
    Trims each tag; drops empty and repeated ones, keeping first-seen order.

    Any other shape (a number, a mapping, nested lists) raises MetadataError.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        raise MetadataError(document_path, "tags", MetadataError.INVALID)

    tags = []
    for t in raw:
        if t is None:
            continue
        if isinstance(t, (list, tuple, dict)):
            raise MetadataError(document_path, "tags", MetadataError.INVALID)
        tag = str(t).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def is_absolute_url(url: str) -> bool:
    """True for "https://host/..." style URLs (http or https, with a host)."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _image_url(document_path: str, raw) -> Optional[str]:
    if raw is None:
        return None
    url = str(raw).strip()
    if not url:
        return None
    if not is_absolute_url(url):
        raise MetadataError(document_path, "imageURL", MetadataError.INVALID)
    return url


def extract(document_path: str, raw_metadata: dict) -> Post:
    """
    Validate one document's front matter and build its Post.

    Raises MetadataError naming the document and the offending field.
    """
    for name in REQUIRED_FIELDS:
        _required_text(document_path, raw_metadata, name)

    raw_date = raw_metadata["date"]
    # Callers may hand over a date object; a datetime has a time-of-day
    # and is rejected by normalize().
    if isinstance(raw_date, date) and not isinstance(raw_date, datetime):
        raw_date = raw_date.isoformat()
    try:
        post_date = dates.normalize(raw_date)
    except DateParseError as exc:
        raise MetadataError(document_path, "date", MetadataError.INVALID) from exc

    return Post(
        path=path_from_document(document_path),
        title=_required_text(document_path, raw_metadata, "title"),
        date=post_date,
        tags=clean_tags(raw_metadata.get("tags"), document_path),
        desc=_required_text(document_path, raw_metadata, "desc"),
        image_url=_image_url(document_path, raw_metadata.get("imageURL")),
        source=str(document_path),
    )
