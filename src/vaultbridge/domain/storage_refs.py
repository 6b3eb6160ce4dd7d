"""Reference extraction from store (storage HTML) content.

Pure functions; every call builds fresh matchers via ``finditer``.

Document-kind syntax::

    @UUID[JournalEntry.abc.JournalEntryPage.def]{Quest Log}
    @UUID[Actor.abc123]            label looked up, or the identifier itself

Asset-kind syntax::

    <img src="worlds/demo/assets/map.png" alt="Map">
    <a href="worlds/demo/assets/handout.pdf">Handout</a>
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from vaultbridge.domain.references import Reference, ReferenceKind
from vaultbridge.domain.syntax import DEFAULT_DOCUMENT_TYPE, is_document_identifier

logger = logging.getLogger(__name__)

# Groups: 1 identifier, 2 label (may be empty or absent).
_UUID_PATTERN = re.compile(r"@UUID\[([^\]]+)\](?:\{([^}]*)\})?")

_IMG_TAG_PATTERN = re.compile(r"<img[^>]*>", re.IGNORECASE)
_IMG_SRC_PATTERN = re.compile(r"""src=["']([^"']+)["']""", re.IGNORECASE)
_IMG_ALT_PATTERN = re.compile(r"""alt=["']([^"']*)["']""", re.IGNORECASE)

# Groups: 1 href, 2 link text.
_ANCHOR_TAG_PATTERN = re.compile(
    r"""<a\s+[^>]*href=["']([^"']+)["'][^>]*>([^<]+)</a>""", re.IGNORECASE
)

_SKIPPED_PREFIXES = ("http://", "https://", "data:")

LabelLookup = Callable[[str], str | None]


def _lookup_label(identifier: str, label_lookup: LabelLookup | None) -> str:
    if label_lookup is None:
        return identifier
    try:
        name = label_lookup(identifier)
    except Exception:
        logger.warning("Label lookup failed for %s", identifier, exc_info=True)
        return identifier
    return name or identifier


def _strip_prefix(path: str, prefix: str) -> str:
    """Vault-relative form of a store data path.

    Returns *path* unchanged when it does not live under *prefix*.
    """
    if not prefix:
        return path
    normalized_path = path.replace("\\", "/")
    normalized_prefix = prefix.replace("\\", "/").rstrip("/")
    if normalized_path.startswith(f"{normalized_prefix}/"):
        return normalized_path[len(normalized_prefix) + 1 :].lstrip("/") or path
    return path


def extract_link_references(
    html_content: str | None,
    *,
    label_lookup: LabelLookup | None = None,
    document_type: str = DEFAULT_DOCUMENT_TYPE,
) -> list[Reference]:
    """Extract ``@UUID[...]`` references, in document order.

    A missing or empty label is filled from *label_lookup* (a store name
    lookup), falling back to the identifier when the lookup is absent,
    fails, or returns nothing.
    """
    if not html_content:
        return []

    links: list[Reference] = []
    for match in _UUID_PATTERN.finditer(html_content):
        identifier = match.group(1).strip()
        if not identifier:
            continue
        label = (match.group(2) or "").strip()
        if not label:
            label = _lookup_label(identifier, label_lookup)

        links.append(
            Reference(
                source_text=match.group(0),
                target_address=identifier,
                label=label,
                kind=ReferenceKind.DOCUMENT,
                attributes={
                    "is_document_reference": is_document_identifier(identifier, document_type)
                },
            )
        )
    return links


def extract_asset_references(
    html_content: str | None,
    *,
    asset_path_prefix: str = "",
) -> list[Reference]:
    """Extract ``<img>`` and ``<a href>`` asset references.

    Deduplicated by data path across both tag kinds: the first tag seen
    for a path wins. Web URLs and inline ``data:`` sources are skipped.
    """
    if not html_content:
        return []

    assets: list[Reference] = []
    seen: set[str] = set()

    for match in _IMG_TAG_PATTERN.finditer(html_content):
        tag = match.group(0)
        src = _IMG_SRC_PATTERN.search(tag)
        if not src:
            continue
        path = src.group(1).strip()
        if not path or path.startswith(_SKIPPED_PREFIXES) or path in seen:
            continue
        seen.add(path)
        alt = _IMG_ALT_PATTERN.search(tag)
        alt_text = alt.group(1).strip() if alt else ""
        assets.append(
            Reference(
                source_text=tag,
                source_address=_strip_prefix(path, asset_path_prefix),
                target_address=path,
                label=alt_text or None,
                kind=ReferenceKind.ASSET,
                is_embedded=True,
            )
        )

    for match in _ANCHOR_TAG_PATTERN.finditer(html_content):
        path = match.group(1).strip()
        if not path or path.startswith(_SKIPPED_PREFIXES) or path in seen:
            continue
        seen.add(path)
        text = match.group(2).strip()
        assets.append(
            Reference(
                source_text=match.group(0),
                source_address=_strip_prefix(path, asset_path_prefix),
                target_address=path,
                label=text or None,
                kind=ReferenceKind.ASSET,
                is_embedded=False,
            )
        )

    return assets


def extract_references(
    html_content: str | None,
    *,
    label_lookup: LabelLookup | None = None,
    document_type: str = DEFAULT_DOCUMENT_TYPE,
    asset_path_prefix: str = "",
) -> tuple[list[Reference], list[Reference]]:
    """Extract ``(links, assets)`` from store content."""
    links = extract_link_references(
        html_content, label_lookup=label_lookup, document_type=document_type
    )
    assets = extract_asset_references(html_content, asset_path_prefix=asset_path_prefix)
    return links, assets
