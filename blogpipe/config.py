from pathlib import Path

import yaml

from .errors import ConfigError
from .posts import is_absolute_url

DEFAULT_CONFIG_NAME = "config.yml"


def _as_list(value, default):
    # extensions can be a string or a list
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(x) for x in value]
    return list(default)


def load_config(config_path: Path) -> dict:
    """
    Load the YAML config and apply defaults.

    content_root, output_dir and css_path are resolved relative to the
    directory holding the config file.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(config_path, "config file not found")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(config_path, f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(config_path, "top level must be a mapping")

    try:
        workers = max(1, int(data.get("workers", 4)))
    except (TypeError, ValueError) as exc:
        raise ConfigError(config_path, "workers must be an integer") from exc

    # feed links and guids must be absolute
    site_url = str(data.get("site_url") or "").strip().rstrip("/")
    if not is_absolute_url(site_url):
        raise ConfigError(config_path, "site_url must be an absolute http(s) URL")

    project_root = config_path.resolve().parent
    css_path = data.get("css_path", "style.css")

    cfg = {
        "site_title": data.get("site_title", "Blog"),
        "site_description": data.get("site_description", ""),
        "site_url": site_url,
        "language": data.get("language"),
        "content_root": (project_root / data.get("content_root", "posts")).resolve(),
        "output_dir": (project_root / data.get("output_dir", "_site")).resolve(),
        "feed_filename": data.get("feed_filename", "index.xml"),
        "css_path": (project_root / css_path).resolve() if css_path else None,
        "extensions": [
            e if e.startswith(".") else f".{e}"
            for e in _as_list(data.get("extensions"), [".md", ".markdown"])
        ],
        "include_drafts": bool(data.get("include_drafts", False)),
        "workers": workers,
    }
    return cfg
