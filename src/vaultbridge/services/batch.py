"""BatchService — offline driver over batch files.

Lets a batch exported from the store client (or snapshotted from a vault
directory) be run through preparation and resolution without a live
store: identifiers and data paths come from the batch file itself.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from vaultbridge.domain.assets import identify_assets
from vaultbridge.infrastructure.batch import load_vault, read_batch, write_batch
from vaultbridge.services.base import BaseService
from vaultbridge.services.bridge import BridgeService
from vaultbridge.services.result import ServiceResult

logger = logging.getLogger(__name__)

DIRECTIONS = ("import", "export")


def default_output_path(batch_path: Path, direction: str) -> Path:
    """``notes.json`` -> ``notes.import.json`` beside the input."""
    return batch_path.with_name(f"{batch_path.stem}.{direction}{batch_path.suffix or '.json'}")


class BatchService(BaseService):
    """Snapshot vaults into batch files and resolve batch files."""

    def snapshot(self, vault_dir: Path, output: Path) -> ServiceResult:
        """Write every note under *vault_dir* into a batch file."""
        op = "snapshot"
        if not vault_dir.is_dir():
            return ServiceResult.failure(op, "NOT_FOUND", f"Vault directory not found: {vault_dir}")

        vault_cfg = self._settings.vault
        try:
            documents = load_vault(
                vault_dir,
                extension=vault_cfg.note_extension,
                skip_dirs=set(vault_cfg.skip_dirs),
            )
        except (OSError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(
                op, "UNREADABLE_NOTE", f"Cannot read notes under {vault_dir}", reason=str(exc)
            )
        write_batch(output, documents)
        logger.debug("Snapshot of %s: %d notes", vault_dir, len(documents))
        return ServiceResult(
            ok=True, op=op, data={"documents": len(documents), "output": str(output)}
        )

    def resolve(
        self,
        batch_path: Path,
        direction: str,
        output: Path | None = None,
    ) -> ServiceResult:
        """Prepare and resolve a batch file in one direction.

        The content converter is not part of this run: the resolved batch
        keeps the source markup with the references already rewritten.
        """
        op = f"resolve_{direction}"
        if direction not in DIRECTIONS:
            return ServiceResult.failure(
                "resolve", "INVALID_DIRECTION", f"Unknown direction: {direction!r}"
            )

        try:
            batch = read_batch(batch_path)
        except FileNotFoundError:
            return ServiceResult.failure(op, "NOT_FOUND", f"Batch file not found: {batch_path}")
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            return ServiceResult.failure(
                op, "INVALID_BATCH", f"Cannot read batch file {batch_path}", reason=str(exc)
            )

        documents = batch.to_documents(self._settings.vault.note_extension)
        assets = batch.to_assets()
        bridge = BridgeService(self._settings)

        if direction == "import":
            prepared = bridge.prepare_import(documents)
        else:
            prepared = bridge.prepare_export(documents)
        if not prepared.ok:
            return prepared

        if direction == "import":
            resolved = bridge.resolve_import(documents, assets)
        else:
            resolved = bridge.resolve_export(documents)
            assets = identify_assets(documents)

        target = output or default_output_path(batch_path, direction)
        write_batch(target, documents, assets)
        return ServiceResult(
            ok=True,
            op=op,
            data={**prepared.data, **resolved.data, "output": str(target)},
            warnings=resolved.warnings,
        )
