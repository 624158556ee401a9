"""
Build driver: config -> documents -> posts -> registry -> pages + feed.

Any BuildError aborts the whole build with exit status 1.
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from .config import DEFAULT_CONFIG_NAME, load_config
from .discover import discover_documents, extract_all
from .errors import BuildError
from .feed import ChannelMeta, generate, write_feed
from .registry import Registry
from .render import copy_css, write_pages

log = logging.getLogger("blogpipe")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build the static site and its RSS feed.")
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_NAME,
        help=f"path to the YAML config (default: ./{DEFAULT_CONFIG_NAME})",
    )
    parser.add_argument(
        "--reference-year",
        type=int,
        default=None,
        help="year treated as 'this year' for display dates (default: the build's start year)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-document detail")
    return parser.parse_args(argv)


def setup_logging(verbose: bool = False):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    log.propagate = False


def build_registry(cfg: dict):
    """Discover and extract every document. Returns (registry, bodies)."""
    documents = discover_documents(
        cfg["content_root"],
        extensions=cfg["extensions"],
        include_drafts=cfg["include_drafts"],
    )
    posts = extract_all(documents, workers=cfg["workers"])
    registry = Registry.build(posts)
    bodies = {p.path: d.body for p, d in zip(posts, documents)}
    log.info("Registry holds %d posts, %d tags", len(registry), len(registry.tag_index))
    return registry, bodies


def build_site(cfg: dict, reference_year: int) -> Path:
    """Run one full build. Returns the path of the feed written."""
    output_dir = Path(cfg["output_dir"])
    registry, bodies = build_registry(cfg)

    channel = ChannelMeta(
        title=cfg["site_title"],
        link=cfg["site_url"],
        description=cfg["site_description"],
        language=cfg["language"],
    )
    rss_xml = generate(registry, channel)

    output_dir.mkdir(parents=True, exist_ok=True)
    write_pages(registry, bodies, cfg, output_dir, reference_year)
    copy_css(cfg["css_path"], output_dir)
    return write_feed(rss_xml, output_dir, cfg["feed_filename"])


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    # captured once; display dates never depend on the reader's clock
    reference_year = args.reference_year or datetime.now().year

    try:
        cfg = load_config(Path(args.config))
        build_site(cfg, reference_year)
    except BuildError as exc:
        log.error("Build failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
