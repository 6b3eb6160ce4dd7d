"""Export-direction resolution: store identifiers -> vault names.

Every source identity is known up front, so the identity index can be
built right after extraction. A link is never dropped on this path:
when its target is not part of the export, the identifier is kept in
``[[@UUID[id]|label]]`` form so a later import can still restore it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from vaultbridge.domain.documents import VaultDocument
from vaultbridge.domain.indices import build_identity_index
from vaultbridge.domain.paths import base_name
from vaultbridge.domain.report import ResolutionReport
from vaultbridge.domain.syntax import (
    format_markdown_image,
    format_markdown_link,
    format_preserved_link,
    format_scheme_link,
    format_wikilink,
)

logger = logging.getLogger(__name__)


def vault_address(target: VaultDocument, source: VaultDocument) -> str:
    """Vault link address of *target* as written from *source*.

    The bare name inside the same folder, the full path (without the note
    extension) anywhere else.
    """
    if target.folder == source.folder:
        return base_name(target.bare_path)
    return target.bare_path


def _resolve_links(
    document: VaultDocument,
    identity_index: dict[str, VaultDocument],
    report: ResolutionReport,
) -> str:
    content = document.content
    for link in document.links:
        if not link.placeholder:
            continue

        identifier = link.target_address
        if not identifier:
            logger.warning(
                "Link without store identifier in %s: %s", document.file_path, link.source_text
            )
            report.add_unresolved(
                f"Link missing store identifier: {link.source_text} (in {document.file_path})"
            )
            content = content.replace(link.placeholder, link.source_text)
            continue

        label = link.display_text(identifier)

        if not link.attributes.get("is_document_reference"):
            content = content.replace(link.placeholder, format_scheme_link(identifier, label))
            report.add_resolved()
            continue

        target = identity_index.get(identifier)
        if target is None:
            logger.warning("Unresolved document reference %s in %s", identifier, document.file_path)
            report.add_unresolved(
                f"Unresolved document reference: {identifier} (in {document.file_path})"
            )
            content = content.replace(link.placeholder, format_preserved_link(identifier, label))
            continue

        address = vault_address(target, document)
        link.source_address = address
        label_text = None if link.label == identifier else link.label
        content = content.replace(link.placeholder, format_wikilink(address, label_text))
        report.add_resolved()
    return content


def _resolve_assets(document: VaultDocument, content: str, report: ResolutionReport) -> str:
    for asset in document.assets:
        if not asset.placeholder:
            continue

        path = asset.target_address
        if not path:
            logger.warning(
                "Asset without data path in %s: %s", document.file_path, asset.source_text
            )
            report.add_unresolved(
                f"Asset missing data path: {asset.source_text} (in {document.file_path})"
            )
            content = content.replace(asset.placeholder, asset.source_text)
            continue

        if asset.is_embedded:
            replacement = format_markdown_image(path, asset.label or "")
        else:
            replacement = format_markdown_link(path, asset.display_text(path))
        content = content.replace(asset.placeholder, replacement)
        report.add_resolved()
    return content


def resolve_for_export(documents: Sequence[VaultDocument] | None) -> ResolutionReport:
    """Expand every placeholder of every document into vault syntax.

    Document links to pages in the export become wiki-links; links to
    other store entities become ``[label](foundry://id)``; assets become
    markdown images or links on their data path.
    """
    documents = list(documents or [])
    report = ResolutionReport(documents=documents)
    if not documents:
        return report

    identity_index = build_identity_index(documents)

    for document in documents:
        content = _resolve_links(document, identity_index, report)
        document.content = _resolve_assets(document, content, report)

    logger.debug(
        "Export resolution: %d resolved, %d unresolved", report.resolved, report.unresolved
    )
    return report
