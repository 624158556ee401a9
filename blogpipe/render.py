"""
Page composition for the site.

Everything here only reads the Registry / TagIndex through their query
methods; no ordering or filtering is recomputed.
"""
import html
import logging
import shutil
from pathlib import Path

import markdown
from bs4 import BeautifulSoup

from . import dates
from .errors import DuplicatePathError
from .tags import slugify_tag

log = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


# -----------------------
# Post bodies
# -----------------------

def wrap_images_with_figures(html_fragment: str) -> str:
    """
    Wrap <img> tags in <figure> with <figcaption> using the alt text.
    """
    soup = BeautifulSoup(html_fragment, "html.parser")

    for img in soup.find_all("img"):
        if img.find_parent("figure"):
            continue

        alt = img.get("alt", "").strip()
        figure = soup.new_tag("figure")
        figure["class"] = "post-figure"

        img.replace_with(figure)
        figure.append(img)

        if alt:
            caption = soup.new_tag("figcaption")
            caption.string = alt
            figure.append(caption)

    return str(soup)


def render_body(body_md: str) -> str:
    """Markdown body -> HTML fragment."""
    raw_html = markdown.markdown(body_md, extensions=MARKDOWN_EXTENSIONS)
    return wrap_images_with_figures(raw_html)


# -----------------------
# HTML helpers
# -----------------------

def tag_href(tag: str) -> str:
    return f"/tags/{slugify_tag(tag)}/"


def tag_slugs(tag_index) -> dict:
    """
    slug -> tag. Two tags sharing a slug would write the same page.
    """
    slugs = {}
    for tag in tag_index.tags():
        slug = slugify_tag(tag)
        if slug in slugs:
            raise DuplicatePathError(f"/tags/{slug}", f"tag '{slugs[slug]}'", f"tag '{tag}'")
        slugs[slug] = tag
    return slugs


def reserved_paths(cfg: dict, slugs: dict) -> dict:
    """
    Site paths written by something other than a post page: path -> owner.
    """
    reserved = {
        "/": "post listing",
        "/tags": "tag listing",
        "/style.css": "stylesheet",
        "/" + cfg["feed_filename"].strip("/"): "feed",
    }
    for slug, tag in slugs.items():
        reserved[f"/tags/{slug}"] = f"tag '{tag}'"
    return reserved


def check_post_paths(registry, reserved: dict):
    """A post page must not land where a listing, tag page or asset goes."""
    for post in registry.all():
        owner = reserved.get(post.path)
        if owner is not None:
            raise DuplicatePathError(post.path, post.source, owner)


def render_post_summary(post, reference_year: int) -> str:
    pills = "".join(
        f'<li><a href="{tag_href(t)}" class="post-tag">#{html.escape(t)}</a></li>'
        for t in post.tags
    )
    tags_html = f'<ul class="post-tags">{pills}</ul>' if pills else ""
    return f"""<article class="post-summary">
  <a href="{html.escape(post.path)}"><h2>{html.escape(post.title)}</h2></a>
  <p>{html.escape(post.desc)}</p>
  <footer class="post-footer">
    <time datetime="{post.date.isoformat()}">{dates.display(post.date, reference_year)}</time>
    {tags_html}
  </footer>
</article>"""


def page_shell(cfg: dict, page_title: str, content_html: str, *, description: str = "",
               image_url: str = None) -> str:
    site_title = html.escape(cfg["site_title"])
    feed_href = "/" + cfg["feed_filename"]
    head_extra = ""
    if description:
        head_extra += f'\n  <meta name="description" content="{html.escape(description)}">'
    if image_url:
        head_extra += f'\n  <meta property="og:image" content="{html.escape(image_url)}">'

    return f"""<!DOCTYPE html>
<html lang="{html.escape(cfg.get("language") or "en")}">
<head>
  <meta charset="utf-8">
  <title>{html.escape(page_title)}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta property="og:site_name" content="{site_title}">{head_extra}
  <link rel="stylesheet" href="/style.css">
  <link rel="alternate" type="application/rss+xml" title="{site_title} – RSS" href="{feed_href}">
</head>
<body>
<header class="site-header">
  <h1 class="site-title"><a href="/">{site_title}</a></h1>
  <nav class="site-links">
    <a href="/tags/">Tags</a>
    <a href="{feed_href}">RSS</a>
  </nav>
</header>
<main class="content">
{content_html}
</main>
</body>
</html>
"""


# -----------------------
# Page renderers
# -----------------------

def render_home_page(registry, cfg: dict, reference_year: int) -> str:
    posts = registry.all()
    if posts:
        content = "\n".join(render_post_summary(p, reference_year) for p in posts)
    else:
        content = "<p>No posts yet.</p>"
    return page_shell(cfg, cfg["site_title"], content, description=cfg["site_description"])


def render_post_page(post, body_html: str, cfg: dict, reference_year: int) -> str:
    tags_html = " ".join(
        f'<a href="{tag_href(t)}" class="post-tag">#{html.escape(t)}</a>' for t in post.tags
    )
    content = f"""<article class="post">
  <header class="post-header">
    <h1>{html.escape(post.title)}</h1>
    <time datetime="{post.date.isoformat()}">{dates.display(post.date, reference_year)}</time>
    <div class="post-tags">{tags_html}</div>
  </header>
  <div class="post-body">
{body_html}
  </div>
</article>"""
    return page_shell(
        cfg,
        f"{post.title} – {cfg['site_title']}",
        content,
        description=post.desc,
        image_url=post.image_url,
    )


def render_tag_index_page(tag_index, cfg: dict) -> str:
    """Tag name + count + link to its page."""
    if len(tag_index):
        items = []
        for tag in tag_index.tags():
            items.append(
                f'<li class="tag-index-item">'
                f'<a href="{tag_href(tag)}" class="tag-index-link">#{html.escape(tag)}</a> '
                f'<span class="tag-index-count">({tag_index.count_for(tag)})</span>'
                f'</li>'
            )
        content = '<h2>Tags</h2>\n<ul class="tag-index-list">' + "".join(items) + "</ul>"
    else:
        content = "<h2>Tags</h2>\n<p>No tags yet.</p>"
    return page_shell(cfg, f"Tags – {cfg['site_title']}", content)


def render_tag_page(tag: str, tag_index, cfg: dict, reference_year: int) -> str:
    posts = tag_index.posts_for(tag)
    summaries = "\n".join(render_post_summary(p, reference_year) for p in posts)
    content = f"<h2>#{html.escape(tag)}</h2>\n{summaries}"
    return page_shell(cfg, f"#{tag} – {cfg['site_title']}", content)


# -----------------------
# Writers
# -----------------------

def _write(out_path: Path, text: str):
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    log.info("Wrote %s", out_path)


def page_file(output_dir: Path, site_path: str) -> Path:
    """ "/" -> index.html, "/posts/a" -> posts/a/index.html """
    rel = site_path.strip("/")
    return (output_dir / rel / "index.html") if rel else (output_dir / "index.html")


def write_pages(registry, bodies: dict, cfg: dict, output_dir: Path, reference_year: int):
    """
    Write home, post, tag index and per-tag pages.

    bodies maps post path -> Markdown body.
    """
    output_dir = Path(output_dir)
    tag_index = registry.tag_index
    slugs = tag_slugs(tag_index)
    check_post_paths(registry, reserved_paths(cfg, slugs))

    for post in registry.all():
        body_html = render_body(bodies.get(post.path, ""))
        _write(page_file(output_dir, post.path), render_post_page(post, body_html, cfg, reference_year))

    _write(output_dir / "index.html", render_home_page(registry, cfg, reference_year))
    _write(output_dir / "tags" / "index.html", render_tag_index_page(tag_index, cfg))

    for slug, tag in slugs.items():
        _write(output_dir / "tags" / slug / "index.html", render_tag_page(tag, tag_index, cfg, reference_year))


def copy_css(css_src, output_dir: Path):
    """Copy the stylesheet into the output directory as style.css."""
    if css_src is None:
        return
    css_src = Path(css_src)
    if not css_src.exists():
        log.warning("CSS file not found at %s", css_src)
        return
    dest = Path(output_dir) / "style.css"
    shutil.copy2(css_src, dest)
    log.info("Copied CSS to %s", dest)
