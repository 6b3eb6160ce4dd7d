"""Batch files and vault discovery for the offline driver.

A batch file is a JSON snapshot of the documents of one conversion run::

    {
      "documents": [{"path": "Campaign/NPCs/Villain.md", "content": "...", "id": null}],
      "assets": [{"path": "Campaign/assets/map.png", "data_path": "worlds/demo/map.png"}]
    }

``id`` is the store identifier once the document exists in the store.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from vaultbridge.domain.documents import AssetFile, VaultDocument
from vaultbridge.domain.paths import DEFAULT_NOTE_EXTENSION

# Directories to skip when discovering notes.
DEFAULT_SKIP_DIRS = frozenset({".obsidian", ".git", ".trash"})


class BatchDocument(BaseModel):
    """One document entry of a batch file."""

    path: str = Field(min_length=1)
    content: str = ""
    id: str | None = None


class BatchAsset(BaseModel):
    """One asset manifest entry of a batch file."""

    path: str = Field(min_length=1)
    data_path: str | None = None


class BatchFile(BaseModel):
    """Top-level batch file schema."""

    documents: list[BatchDocument] = Field(default_factory=list)
    assets: list[BatchAsset] = Field(default_factory=list)

    def to_documents(self, extension: str = DEFAULT_NOTE_EXTENSION) -> list[VaultDocument]:
        return [
            VaultDocument(file_path=d.path, content=d.content, stable_id=d.id, extension=extension)
            for d in self.documents
        ]

    def to_assets(self) -> list[AssetFile]:
        return [AssetFile(relative_path=a.path, data_path=a.data_path) for a in self.assets]


def read_batch(path: Path) -> BatchFile:
    """Parse a batch file.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If the JSON does not match the schema.
    """
    return BatchFile.model_validate_json(path.read_text(encoding="utf-8"))


def write_batch(
    path: Path,
    documents: list[VaultDocument],
    assets: list[AssetFile] | None = None,
) -> None:
    """Write documents (and optionally assets) back out as a batch file.

    Creates parent directories if they don't exist.
    """
    batch = BatchFile(
        documents=[
            BatchDocument(path=d.file_path, content=d.content, id=d.stable_id) for d in documents
        ],
        assets=[BatchAsset(path=a.relative_path, data_path=a.data_path) for a in assets or []],
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(batch.model_dump_json(indent=2) + "\n", encoding="utf-8")


def find_markdown_files(
    vault_root: Path,
    *,
    extension: str = DEFAULT_NOTE_EXTENSION,
    skip_dirs: frozenset[str] | set[str] = DEFAULT_SKIP_DIRS,
) -> list[Path]:
    """Discover all notes under *vault_root*, sorted by relative path.

    Skips hidden tool directories such as ``.obsidian/`` and ``.git/``.
    """
    results: list[Path] = []
    for path in vault_root.rglob(f"*{extension}"):
        if not path.is_file():
            continue
        relative = path.relative_to(vault_root)
        if any(part in skip_dirs for part in relative.parts):
            continue
        results.append(path)
    return sorted(results, key=lambda p: p.relative_to(vault_root).as_posix())


def load_vault(
    vault_root: Path,
    *,
    extension: str = DEFAULT_NOTE_EXTENSION,
    skip_dirs: frozenset[str] | set[str] = DEFAULT_SKIP_DIRS,
) -> list[VaultDocument]:
    """Read every note of a vault directory into unprepared documents.

    Raises:
        OSError: If a note cannot be read.
        UnicodeDecodeError: If a note is not valid UTF-8.
    """
    return [
        VaultDocument(
            file_path=path.relative_to(vault_root).as_posix(),
            content=path.read_text(encoding="utf-8"),
            extension=extension,
        )
        for path in find_markdown_files(vault_root, extension=extension, skip_dirs=skip_dirs)
    ]
