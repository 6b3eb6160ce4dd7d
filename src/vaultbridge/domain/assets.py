"""Export asset identification — which store files an export must copy.

Collects the unique data paths referenced by the batch's asset
references. The first reference seen for a data path decides the vault
path the file is written to.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from vaultbridge.domain.documents import AssetFile, VaultDocument

logger = logging.getLogger(__name__)

AssetExists = Callable[[str], bool]


def collect_asset_paths(documents: Sequence[VaultDocument] | None) -> dict[str, str]:
    """Map each referenced data path to its vault-relative path."""
    paths: dict[str, str] = {}
    for document in documents or []:
        for asset in document.assets:
            if not asset.target_address or asset.target_address in paths:
                continue
            paths[asset.target_address] = asset.source_address or asset.target_address
    return paths


def identify_assets(
    documents: Sequence[VaultDocument] | None,
    exists: AssetExists | None = None,
) -> list[AssetFile]:
    """Build the export asset manifest.

    When *exists* is given, data paths it rejects are left out and logged;
    a failing check counts as missing.
    """
    manifest: list[AssetFile] = []
    for data_path, vault_path in collect_asset_paths(documents).items():
        if exists is not None:
            try:
                present = exists(data_path)
            except Exception:
                logger.debug("Existence check failed for %s", data_path, exc_info=True)
                present = False
            if not present:
                logger.warning("Asset not found in store data: %s", data_path)
                continue
        manifest.append(AssetFile(relative_path=vault_path, data_path=data_path))
    return manifest
