"""
RSS 2.0 feed for the whole registry, newest first.

The output carries no build timestamp, so an unchanged registry produces a
byte-identical file.
"""
import html
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import dates
from .errors import FeedGenerationError
from .posts import is_absolute_url

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelMeta:
    title: str
    link: str
    description: str
    language: Optional[str] = None


def _text(value) -> str:
    # quote=True also covers " and '
    return html.escape(str(value), quote=True)


def post_link(site_url: str, path: str) -> str:
    return f"{site_url.rstrip('/')}{path}"


def generate(registry, channel: ChannelMeta) -> str:
    site_url = channel.link.rstrip("/")
    if not is_absolute_url(site_url):
        raise FeedGenerationError(f"channel link must be an absolute URL, got {channel.link!r}")

    items_xml = []
    for post in registry.all():
        link = _text(post_link(site_url, post.path))
        items_xml.append(f"""    <item>
      <title>{_text(post.title)}</title>
      <link>{link}</link>
      <guid isPermaLink="true">{link}</guid>
      <description>{_text(post.desc)}</description>
      <pubDate>{dates.rfc822(post.date)}</pubDate>
    </item>""")

    language_xml = ""
    if channel.language:
        language_xml = f"\n    <language>{_text(channel.language)}</language>"

    rss_xml = f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>{_text(channel.title)}</title>
    <link>{_text(site_url)}</link>
    <description>{_text(channel.description)}</description>{language_xml}
{chr(10).join(items_xml)}
  </channel>
</rss>
"""

    # Escaping cannot fix characters XML 1.0 forbids outright (e.g. \x01).
    try:
        ET.fromstring(rss_xml.encode("utf-8"))
    except ET.ParseError as exc:
        raise FeedGenerationError(str(exc)) from exc

    log.debug("Generated feed with %d items", len(items_xml))
    return rss_xml


def write_feed(rss_xml: str, output_dir: Path, filename: str = "index.xml") -> Path:
    """Write the feed, replacing any earlier file at the same location."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    feed_path = output_dir / filename
    feed_path.write_text(rss_xml, encoding="utf-8")
    log.info("Wrote %s", feed_path)
    return feed_path
