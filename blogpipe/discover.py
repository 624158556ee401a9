import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, NamedTuple

import yaml

from .errors import MetadataError
from .posts import Post, extract

log = logging.getLogger(__name__)

FRONT_MATTER_FENCE = "---"
TRUTHY = ("true", "yes", "1", "y", "on")
YAML_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class FrontMatterLoader(yaml.SafeLoader):
    """
    SafeLoader without the implicit timestamp type: an unquoted
    `date: 2021-05-11` stays a string and is validated by dates.normalize.
    """


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != YAML_TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class Document(NamedTuple):
    path: str        # relative to content_root, "/" separated
    metadata: dict
    body: str


def split_front_matter(document_path: str, text: str):
    """
    Split a document into (metadata, body).

      ---
      title: Hello
      date: 2021-05-11
      ---
      Markdown body...

    A document without a leading fence has empty metadata.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_FENCE:
        return {}, text

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_FENCE:
            block = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1:]).strip()
            break
    else:
        # opening fence never closed
        raise MetadataError(document_path, "front matter", MetadataError.INVALID)

    try:
        metadata = yaml.load(block, Loader=FrontMatterLoader) or {}
    except (yaml.YAMLError, ValueError) as exc:
        raise MetadataError(document_path, "front matter", MetadataError.INVALID) from exc
    if not isinstance(metadata, dict):
        raise MetadataError(document_path, "front matter", MetadataError.INVALID)
    return metadata, body


def is_draft(metadata: dict) -> bool:
    value = metadata.get("draft", False)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


def discover_documents(content_root: Path, extensions=(".md", ".markdown"),
                       include_drafts: bool = False) -> List[Document]:
    """
    Walk content_root and read every document with a matching suffix.

    Returned in relative-path order so that a build is reproducible.
    Drafts are skipped unless include_drafts=True.
    """
    content_root = Path(content_root)
    suffixes = {e.lower() for e in extensions}

    files = sorted(
        (f for f in content_root.rglob("*") if f.is_file() and f.suffix.lower() in suffixes),
        key=lambda f: f.relative_to(content_root).as_posix(),
    )

    documents = []
    for f in files:
        rel = f.relative_to(content_root).as_posix()
        metadata, body = split_front_matter(rel, f.read_text(encoding="utf-8"))
        if is_draft(metadata) and not include_drafts:
            log.debug("Skipping draft %s", rel)
            continue
        documents.append(Document(rel, metadata, body))

    log.info("Found %d documents under %s", len(documents), content_root)
    return documents


def extract_all(documents: Iterable[Document], workers: int = 1) -> List[Post]:
    """
    Run the metadata extractor over every document.

    Documents are independent, so with workers > 1 they are extracted on a
    thread pool. Results keep document order; the first failing document
    in that order raises.
    """
    documents = list(documents)
    if workers <= 1 or len(documents) <= 1:
        return [extract(d.path, d.metadata) for d in documents]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda d: extract(d.path, d.metadata), documents))
