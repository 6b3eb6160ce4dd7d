"""Lookup indices built once per batch, read-only during resolution.

Only documents that already exist in the store (``stable_id`` set) are
indexed. A document created after the indices are built is invisible to
resolution; its inbound references degrade through the unresolved path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from vaultbridge.domain.documents import VaultDocument

logger = logging.getLogger(__name__)


def build_name_index(documents: Iterable[VaultDocument] | None) -> dict[str, list[VaultDocument]]:
    """Map each lower-cased name fragment to the documents carrying it.

    Candidates keep batch order, which is the final tie-breaker.
    """
    index: dict[str, list[VaultDocument]] = {}
    for document in documents or []:
        if not document.stable_id:
            logger.debug("Not indexing %s: no stable identifier yet", document.file_path)
            continue
        for fragment in document.name_fragments:
            candidates = index.setdefault(fragment.lower(), [])
            if not any(candidate is document for candidate in candidates):
                candidates.append(document)
    return index


def build_identity_index(documents: Iterable[VaultDocument] | None) -> dict[str, VaultDocument]:
    """Map each stable identifier to its document (first one wins)."""
    index: dict[str, VaultDocument] = {}
    for document in documents or []:
        if not document.stable_id:
            logger.debug("Not indexing %s: no stable identifier", document.file_path)
            continue
        index.setdefault(document.stable_id, document)
    return index
