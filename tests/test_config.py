import pytest

from blogpipe.config import load_config
from blogpipe.errors import ConfigError


def test_defaults_applied(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("site_url: https://e.com/\n", encoding="utf-8")
    cfg = load_config(config)
    assert cfg["site_title"] == "Blog"
    assert cfg["site_url"] == "https://e.com"
    assert cfg["content_root"] == (tmp_path / "posts").resolve()
    assert cfg["output_dir"] == (tmp_path / "_site").resolve()
    assert cfg["feed_filename"] == "index.xml"
    assert cfg["extensions"] == [".md", ".markdown"]
    assert cfg["include_drafts"] is False
    assert cfg["workers"] == 4


def test_values_override_defaults(site):
    cfg = load_config(site / "config.yml")
    assert cfg["site_title"] == "Test Blog"
    assert cfg["site_url"] == "https://blog.example.com"
    assert cfg["workers"] == 2


def test_extension_string(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("site_url: https://e.com\nextensions: mdx\n", encoding="utf-8")
    assert load_config(config)["extensions"] == [".mdx"]


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yml")


@pytest.mark.parametrize(
    "text", ["- a\n- b\n", "site_title: [oops\n", "site_url: https://e.com\nworkers: many\n"]
)
def test_malformed_file(tmp_path, text):
    config = tmp_path / "config.yml"
    config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(config)


@pytest.mark.parametrize(
    "text", ["", "site_title: Blog\n", "site_url: ''\n", "site_url: /blog\n", "site_url: example.com\n",
             "site_url: ftp://example.com\n"],
)
def test_site_url_must_be_absolute(tmp_path, text):
    config = tmp_path / "config.yml"
    config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        load_config(config)
    assert "site_url" in str(excinfo.value)
