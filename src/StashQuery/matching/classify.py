"""Default type classifier for saved items.

Assigns the type tag that `type:` filters are resolved against. Callers with
their own categorization can pass any ``record -> str`` callable instead.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

from StashQuery.core.models import record_field

_RE_IMAGE_EXT = re.compile(r"\.(?:jpg|jpeg|png|gif|webp|svg)(?:\?|$)", re.IGNORECASE)

_HOST_TYPES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("youtube.com", "youtu.be"), "youtube"),
    (("twitter.com", "x.com"), "tweet"),
    (("reddit.com", "redd.it"), "reddit"),
    (("wikipedia.org",), "wikipedia"),
)


def classify_record(record: Any) -> str:
    """Return the type tag of a record.

    One of: note, youtube, tweet, reddit, wikipedia, image, article.
    """
    url = record_field(record, "url").strip()
    explicit = record_field(record, "type").lower()
    category = record_field(record, "category").lower()

    if explicit == "note" or category == "note" or url.lower().startswith("note://"):
        return "note"
    if not url and (record_field(record, "notes") or record_field(record, "title")):
        return "note"

    host = _hostname(url)
    for domains, tag in _HOST_TYPES:
        if any(_on_domain(host, domain) for domain in domains):
            return tag

    if explicit == "image" or category == "image" or _RE_IMAGE_EXT.search(url):
        return "image"
    return "article"


def _hostname(url: str) -> str:
    if not url:
        return ""
    if "://" not in url:
        url = f"//{url}"
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


def _on_domain(host: str, domain: str) -> bool:
    return host == domain or host.endswith(f".{domain}")
