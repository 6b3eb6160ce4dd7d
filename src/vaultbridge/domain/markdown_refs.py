"""Reference extraction from vault markdown.

Pure functions, no shared state: the compiled patterns are only ever
used through ``finditer``, which builds a fresh matcher per call.

Document-kind syntaxes::

    [[Page]]  [[Page#Heading]]  [[Page|Text]]  ![[Page]]  [[Page.md]]
    [Text](foundry://Actor.abc123)         store entity, already addressed
    [[@UUID[JournalEntry.abc]|Text]]       identifier preserved by export

Asset-kind syntaxes::

    ![alt](path/to/image.png)  [text](path/to/file.pdf)
    ![[image.png]]  ![[image.png|alt]]  [[handout.pdf]]
"""

from __future__ import annotations

import re

from vaultbridge.domain.references import Reference, ReferenceKind
from vaultbridge.domain.syntax import STORE_LINK_SCHEME

# Groups: 1 embed marker, 2 target, 3 heading, 4 display text.
_WIKILINK_PATTERN = re.compile(r"(!?)\[\[([^\]#|]+)(?:#([^\]|]+))?(?:\|([^\]]+))?\]\]")

# Groups: 1 identifier, 2 display text.
_PRESERVED_LINK_PATTERN = re.compile(r"\[\[@UUID\[([^\]]+)\](?:\|([^\]]*))?\]\]")

# Groups: 1 display text, 2 identifier.
_SCHEME_LINK_PATTERN = re.compile(
    r"(?<!!)\[([^\]]+)\]\(" + re.escape(STORE_LINK_SCHEME) + r"://([^)]+)\)"
)

# Groups: 1 alt text, 2 path.
_MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")

# Groups: 1 link text, 2 path. The lookbehind keeps images out.
_MARKDOWN_LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")

# Groups: 1 path, 2 display text. Extension filtering happens in code.
_WIKI_EMBED_PATTERN = re.compile(r"!?\[\[([^\]#|]+)(?:#[^\]|]*)?(?:\|([^\]]*))?\]\]")

# A file extension with at least one letter, so "Chapter 1.5" stays a note.
_FILE_EXTENSION_PATTERN = re.compile(r"\.(?=[A-Za-z0-9]*[A-Za-z])[A-Za-z0-9]{1,8}$")

# Any URL scheme: http:, https:, foundry:, data:, mailto:, ...
_URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# ![alt](path "title")
_TITLED_PATH_PATTERN = re.compile(r'^(\S+)\s+"[^"]*"$')

# Obsidian image size hints: ![[map.png|300]] or ![[map.png|300x200]]
_SIZE_HINT_PATTERN = re.compile(r"^\d+(?:x\d+)?$")

_NOTE_SUFFIX = ".md"
_PRESERVED_LINK_PREFIX = "@UUID["


def _is_note_path(path: str) -> bool:
    return path.split("#", 1)[0].lower().endswith(_NOTE_SUFFIX)


def _has_asset_extension(target: str) -> bool:
    return bool(_FILE_EXTENSION_PATTERN.search(target)) and not _is_note_path(target)


def _is_outside_vault(path: str) -> bool:
    """URLs of any scheme and in-page anchors are not vault assets."""
    return path.startswith("#") or bool(_URL_SCHEME_PATTERN.match(path))


def _clean_path(raw: str) -> str:
    path = raw.strip()
    titled = _TITLED_PATH_PATTERN.match(path)
    if titled:
        path = titled.group(1)
    if path.startswith("<") and path.endswith(">"):
        path = path[1:-1].strip()
    return path


def extract_link_references(markdown_text: str | None) -> list[Reference]:
    """Extract document-kind references from markdown, in document order.

    Never deduplicates: the same link written twice yields two references.
    Wiki-link targets with a non-note file extension are left to
    :func:`extract_asset_references`.
    """
    if not markdown_text:
        return []

    found: list[tuple[int, Reference]] = []

    for match in _WIKILINK_PATTERN.finditer(markdown_text):
        is_embed = match.group(1) == "!"
        target = match.group(2).strip()
        heading = match.group(3).strip() if match.group(3) else None
        display = match.group(4).strip() if match.group(4) else None

        if target.startswith(_PRESERVED_LINK_PREFIX) or _has_asset_extension(target):
            continue
        if target.lower().endswith(_NOTE_SUFFIX):
            target = target[: -len(_NOTE_SUFFIX)]
        if not target:
            continue

        found.append(
            (
                match.start(),
                Reference(
                    source_text=match.group(0),
                    source_address=target,
                    label=display or None,
                    kind=ReferenceKind.DOCUMENT,
                    attributes={"heading": heading, "is_embed": is_embed},
                ),
            )
        )

    for match in _PRESERVED_LINK_PATTERN.finditer(markdown_text):
        identifier = match.group(1).strip()
        if not identifier:
            continue
        display = match.group(2).strip() if match.group(2) else None
        found.append(
            (
                match.start(),
                Reference(
                    source_text=match.group(0),
                    target_address=identifier,
                    label=display or None,
                    kind=ReferenceKind.DOCUMENT,
                    attributes={"is_store_address": True},
                ),
            )
        )

    for match in _SCHEME_LINK_PATTERN.finditer(markdown_text):
        identifier = match.group(2).strip()
        if not identifier:
            continue
        found.append(
            (
                match.start(),
                Reference(
                    source_text=match.group(0),
                    target_address=identifier,
                    label=match.group(1).strip() or None,
                    kind=ReferenceKind.DOCUMENT,
                    attributes={"is_store_address": True},
                ),
            )
        )

    found.sort(key=lambda item: item[0])
    return [ref for _, ref in found]


def extract_asset_references(markdown_text: str | None) -> list[Reference]:
    """Extract asset-kind references from markdown, in document order.

    Identical occurrences collapse to one reference (one placeholder,
    many textual sites). Note targets, URLs of any scheme, and in-page
    anchors are skipped.
    """
    if not markdown_text:
        return []

    found: list[tuple[int, Reference]] = []
    seen: set[str] = set()

    def add(start: int, source: str, path: str, label: str | None, is_image: bool) -> None:
        if not path or source in seen:
            return
        if _is_note_path(path) or _is_outside_vault(path):
            return
        seen.add(source)
        found.append(
            (
                start,
                Reference(
                    source_text=source,
                    source_address=path,
                    label=label or None,
                    kind=ReferenceKind.ASSET,
                    is_embedded=is_image,
                ),
            )
        )

    for match in _MARKDOWN_IMAGE_PATTERN.finditer(markdown_text):
        path = _clean_path(match.group(2))
        add(match.start(), match.group(0), path, match.group(1).strip(), True)

    for match in _MARKDOWN_LINK_PATTERN.finditer(markdown_text):
        path = _clean_path(match.group(2))
        add(match.start(), match.group(0), path, match.group(1).strip(), False)

    for match in _WIKI_EMBED_PATTERN.finditer(markdown_text):
        target = match.group(1).strip()
        if target.startswith(_PRESERVED_LINK_PREFIX) or not _has_asset_extension(target):
            continue
        label = (match.group(2) or "").strip()
        if _SIZE_HINT_PATTERN.match(label):
            label = ""
        add(match.start(), match.group(0), target, label, match.group(0).startswith("!"))

    found.sort(key=lambda item: item[0])
    return [ref for _, ref in found]


def extract_references(markdown_text: str | None) -> tuple[list[Reference], list[Reference]]:
    """Extract ``(links, assets)`` from vault markdown."""
    return extract_link_references(markdown_text), extract_asset_references(markdown_text)
