"""Renders Cosense pages as MDX documents for the AI Search index.

A document is a front matter block followed by a blank line and the page
body::

    ---
    title: "Some \\"quoted\\" title"
    link: "https://scrapbox.io/project/Some%20%22quoted%22%20title"
    created: "2024-01-01T00:00:00.000Z"
    updated: "2024-01-02T00:00:00.000Z"
    views: 42
    ---

    line 1
    line 2
"""

import re
from datetime import datetime, timezone

from cosense_rag.cosense.client import encode_uri_component
from cosense_rag.cosense.schemas import PageDetail, PageSummary
from cosense_rag.export.schemas import ExportedDocument

EXPORT_PREFIX = "mdx"
EXPORT_EXTENSION = ".mdx"

_UNSAFE_KEY_CHARS = re.compile(r'[\\/?%*:|"<>\s]')


def sanitize_title(title: str) -> str:
    return _UNSAFE_KEY_CHARS.sub("_", title)


def escape_title(title: str) -> str:
    return title.replace('"', '\\"').replace("/", "%2F")


def document_key(title: str) -> str:
    return f"{EXPORT_PREFIX}/{sanitize_title(title)}{EXPORT_EXTENSION}"


def title_from_filename(filename: str) -> str:
    """Inverse of document_key as far as the sanitized title goes."""
    name = filename.split("/")[-1]
    return name.removesuffix(EXPORT_EXTENSION)


def page_url(base_url: str, project: str, title: str) -> str:
    return f"{base_url.rstrip('/')}/{project}/{encode_uri_component(title)}"


def to_iso8601(seconds: int | float) -> str:
    # Same shape as JavaScript's Date.toISOString()
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_document(
    summary: PageSummary,
    detail: PageDetail,
    *,
    project: str,
    base_url: str,
) -> ExportedDocument:
    front_matter = "\n".join(
        [
            "---",
            f'title: "{escape_title(summary.title)}"',
            f'link: "{page_url(base_url, project, summary.title)}"',
            f'created: "{to_iso8601(summary.created)}"',
            f'updated: "{to_iso8601(summary.updated)}"',
            f"views: {summary.views}",
            "---",
        ]
    )

    return ExportedDocument(
        key=document_key(summary.title),
        content=f"{front_matter}\n\n{detail.body}",
    )
