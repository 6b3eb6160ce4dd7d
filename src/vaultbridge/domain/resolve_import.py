"""Import-direction resolution: vault names -> store identifiers.

Runs after every document of the batch has been created in the store
(``stable_id`` set) and assets have been uploaded. Expands each
``{{LINK:n}}`` / ``{{ASSET:n}}`` token in place.

Name ambiguity follows the vault's own link resolution, most specific
tier first::

    source: Campaign/NPCs/Villain.md   link: [[Waterdeep]]
    1. same folder      Campaign/NPCs/Waterdeep.md
    2. nearest ancestor Campaign/Waterdeep.md, then Waterdeep.md
    3. anywhere         Other/Places/Waterdeep.md

Within a tier the shortest path wins; on equal length, batch order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from vaultbridge.domain.documents import AssetFile, VaultDocument
from vaultbridge.domain.indices import build_name_index
from vaultbridge.domain.paths import folder_of, normalize_asset_path, parent_folders
from vaultbridge.domain.references import Reference
from vaultbridge.domain.report import ResolutionReport
from vaultbridge.domain.syntax import (
    format_store_anchor,
    format_store_image,
    format_store_link,
)

logger = logging.getLogger(__name__)


def select_best_match(
    candidates: Sequence[VaultDocument],
    source_path: str,
) -> VaultDocument | None:
    """Pick the link target for a note at *source_path*.

    Returns ``None`` when there are no candidates.
    """
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]

    source_folder = folder_of(source_path)
    for folder in [source_folder, *parent_folders(source_folder)]:
        tier = [c for c in candidates if c.folder == folder]
        if tier:
            return min(tier, key=lambda c: len(c.file_path))

    return min(candidates, key=lambda c: len(c.file_path))


def find_best_asset(address: str, assets: Sequence[AssetFile]) -> AssetFile | None:
    """Match an asset address against uploaded files.

    Exact path equality wins; otherwise the shortest path ending in
    ``/address``. The suffix must start at a folder boundary, which is
    stricter than a plain ``endswith``: ``dragon.png`` does not match
    ``vault/mydragon.png``. Returns ``None`` when nothing matches.
    """
    wanted = normalize_asset_path(address)
    if not wanted:
        return None

    for asset in assets:
        if asset.relative_path == wanted:
            return asset

    suffix = f"/{wanted}"
    matches = [a for a in assets if a.relative_path.endswith(suffix)]
    if not matches:
        return None
    return min(matches, key=lambda a: len(a.relative_path))


def _resolve_links(
    document: VaultDocument,
    name_index: dict[str, list[VaultDocument]],
    report: ResolutionReport,
) -> str:
    content = document.content
    for link in document.links:
        if not link.placeholder:
            continue

        if link.attributes.get("is_store_address") and link.target_address:
            replacement = format_store_link(link.target_address, link.display_text())
            content = content.replace(link.placeholder, replacement)
            report.add_resolved()
            continue

        candidates = name_index.get(link.source_address.lower(), [])
        target = select_best_match(candidates, document.file_path)

        if target is None or not target.stable_id:
            _revert(link, document, report, "link")
            content = content.replace(link.placeholder, link.source_text)
            continue

        link.target_address = target.stable_id
        replacement = format_store_link(target.stable_id, link.display_text(link.source_address))
        content = content.replace(link.placeholder, replacement)
        report.add_resolved()
    return content


def _resolve_assets(
    document: VaultDocument,
    content: str,
    uploaded: Sequence[AssetFile],
    report: ResolutionReport,
) -> str:
    for asset in document.assets:
        if not asset.placeholder:
            continue

        match = find_best_asset(asset.source_address, uploaded)
        if match is None or match.data_path is None:
            _revert(asset, document, report, "asset")
            content = content.replace(asset.placeholder, asset.source_text)
            continue

        asset.target_address = match.data_path
        if asset.is_embedded:
            replacement = format_store_image(match.data_path, asset.label or "")
        else:
            text = asset.display_text(asset.source_address)
            replacement = format_store_anchor(match.data_path, text)
        content = content.replace(asset.placeholder, replacement)
        report.add_resolved()
    return content


def _revert(ref: Reference, document: VaultDocument, report: ResolutionReport, what: str) -> None:
    logger.warning("Unresolved %s %r in %s", what, ref.source_address, document.file_path)
    report.add_unresolved(f"Unresolved {what}: {ref.source_address} (in {document.file_path})")


def resolve_for_import(
    documents: Sequence[VaultDocument] | None,
    assets: Sequence[AssetFile] | None = None,
) -> ResolutionReport:
    """Expand every placeholder of every document into store syntax.

    Resolved links become ``@UUID[id]{label}``; resolved assets become
    ``<img>`` or ``<a>`` tags on the uploaded data path. Anything that
    cannot be resolved is put back exactly as it was written.
    """
    documents = list(documents or [])
    report = ResolutionReport(documents=documents)
    if not documents:
        return report

    name_index = build_name_index(documents)
    uploaded = [a for a in assets or [] if a.data_path]

    for document in documents:
        content = _resolve_links(document, name_index, report)
        document.content = _resolve_assets(document, content, uploaded, report)

    logger.debug(
        "Import resolution: %d resolved, %d unresolved", report.resolved, report.unresolved
    )
    return report
