"""BridgeService — batch entry points for both conversion directions.

An import runs ``prepare_import`` on the raw vault markdown, hands the
placeholder-protected content to the converter and the store client,
then calls ``resolve_import`` once every document has a stable
identifier. An export runs ``prepare_export`` on store content,
converts, and calls ``resolve_export``. Sequencing, conversion, and
rollback belong to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from vaultbridge.config.logging import batch_context
from vaultbridge.domain import markdown_refs, storage_refs
from vaultbridge.domain.assets import AssetExists
from vaultbridge.domain.assets import identify_assets as build_asset_manifest
from vaultbridge.domain.documents import AssetFile, VaultDocument, generate_name_fragments
from vaultbridge.domain.placeholders import substitute_placeholders
from vaultbridge.domain.references import Reference
from vaultbridge.domain.resolve_export import resolve_for_export
from vaultbridge.domain.resolve_import import resolve_for_import
from vaultbridge.services.base import BaseService
from vaultbridge.services.result import ServiceResult

logger = logging.getLogger(__name__)

Extractor = Callable[[str], tuple[list[Reference], list[Reference]]]


class BridgeService(BaseService):
    """Extraction, placeholder substitution, and resolution for a batch."""

    # --- inspection ---

    def extract_references(
        self,
        content: str,
        *,
        storage: bool = False,
        source: str = "",
    ) -> ServiceResult:
        """List the references of one document without modifying it."""
        if storage:
            links, assets = storage_refs.extract_references(
                content,
                document_type=self._settings.store.document_type,
                asset_path_prefix=self._settings.assets.path_prefix,
            )
        else:
            links, assets = markdown_refs.extract_references(content)
        return ServiceResult(
            ok=True,
            op="extract_references",
            data={
                "file": source,
                "links": [ref.model_dump(mode="json") for ref in links],
                "assets": [ref.model_dump(mode="json") for ref in assets],
            },
        )

    def name_fragments(self, path: str) -> ServiceResult:
        """Lookup keys a note at *path* is indexed under."""
        fragments = generate_name_fragments(path, self._settings.vault.note_extension)
        if not fragments:
            return ServiceResult.failure("name_fragments", "INVALID_PATH", f"Empty path: {path!r}")
        return ServiceResult(
            ok=True, op="name_fragments", data={"path": path, "fragments": fragments}
        )

    # --- preparation ---

    def prepare_import(self, documents: Sequence[VaultDocument]) -> ServiceResult:
        """Extract vault references and protect them behind placeholders."""
        return self._prepare("prepare_import", documents, markdown_refs.extract_references)

    def prepare_export(
        self,
        documents: Sequence[VaultDocument],
        *,
        label_lookup: storage_refs.LabelLookup | None = None,
    ) -> ServiceResult:
        """Extract store references and protect them behind placeholders.

        *label_lookup* supplies display names for ``@UUID[...]`` links
        written without a label.
        """
        cfg = self._settings

        def extract(content: str) -> tuple[list[Reference], list[Reference]]:
            return storage_refs.extract_references(
                content,
                label_lookup=label_lookup,
                document_type=cfg.store.document_type,
                asset_path_prefix=cfg.assets.path_prefix,
            )

        return self._prepare("prepare_export", documents, extract)

    def _prepare(
        self,
        op: str,
        documents: Sequence[VaultDocument],
        extract: Extractor,
    ) -> ServiceResult:
        prepared = [d.file_path for d in documents if _has_placeholders(d)]
        if prepared:
            return ServiceResult.failure(
                op,
                "ALREADY_PREPARED",
                f"{len(prepared)} document(s) already carry placeholders",
                paths=prepared,
            )

        link_count = 0
        asset_count = 0
        with batch_context(op, len(documents)):
            for document in documents:
                links, assets = extract(document.content)
                result = substitute_placeholders(document.content, links, assets)
                document.content = result.content
                document.links = result.links
                document.assets = result.assets
                link_count += len(result.links)
                asset_count += len(result.assets)
                logger.debug(
                    "Prepared %s: %d links, %d assets",
                    document.file_path,
                    len(result.links),
                    len(result.assets),
                )

        return ServiceResult(
            ok=True,
            op=op,
            data={"documents": len(documents), "links": link_count, "assets": asset_count},
        )

    # --- resolution ---

    def resolve_import(
        self,
        documents: Sequence[VaultDocument],
        assets: Sequence[AssetFile] | None = None,
    ) -> ServiceResult:
        """Rewrite placeholders to store syntax; unresolved ones revert."""
        op = "resolve_import"
        warnings: list[str] = []
        if documents and all(not d.stable_id for d in documents):
            warnings.append(
                "No document in the batch has a stable identifier; "
                "every link will fall back to its original text"
            )

        with batch_context(op, len(documents)):
            report = resolve_for_import(documents, assets)

        return ServiceResult(
            ok=True,
            op=op,
            data=report.to_dict(),
            warnings=[*warnings, *report.warnings],
        )

    def resolve_export(self, documents: Sequence[VaultDocument]) -> ServiceResult:
        """Rewrite placeholders to vault syntax, preserving unknown identifiers."""
        op = "resolve_export"
        with batch_context(op, len(documents)):
            report = resolve_for_export(documents)
        return ServiceResult(ok=True, op=op, data=report.to_dict(), warnings=report.warnings)

    def identify_assets(
        self,
        documents: Sequence[VaultDocument],
        exists: AssetExists | None = None,
    ) -> ServiceResult:
        """List the store files an export must copy into the vault."""
        manifest = build_asset_manifest(documents, exists)
        return ServiceResult(
            ok=True,
            op="identify_assets",
            data={
                "count": len(manifest),
                "assets": [
                    {"path": a.relative_path, "data_path": a.data_path} for a in manifest
                ],
            },
        )


def _has_placeholders(document: VaultDocument) -> bool:
    return any(ref.placeholder for ref in [*document.links, *document.assets])
