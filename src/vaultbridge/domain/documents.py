"""Documents and assets taking part in one conversion batch.

``VaultDocument`` is the unit that extraction, substitution, and
resolution operate on. Its ``stable_id`` is ``None`` until the store
collaborator has created it; that transition is the only precondition
the resolvers depend on. ``AssetFile`` is one entry of the asset
manifest produced by the upload (import) or identification (export) step.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vaultbridge.domain.paths import (
    DEFAULT_NOTE_EXTENSION,
    folder_of,
    normalize_path,
    strip_extension,
)
from vaultbridge.domain.references import Reference


def generate_name_fragments(path: str, extension: str = DEFAULT_NOTE_EXTENSION) -> list[str]:
    """Every suffix of *path* with *extension* stripped, bare name first.

    Examples:
        >>> generate_name_fragments("A/B/C.md")
        ['C', 'B/C', 'A/B/C']

    Returns an empty list for an empty path.
    """
    normalized = strip_extension(normalize_path(path), extension)
    if not normalized:
        return []
    parts = normalized.split("/")
    return ["/".join(parts[i:]) for i in range(len(parts) - 1, -1, -1)]


@dataclass
class VaultDocument:
    """A note in the batch, carrying its content through the pipeline.

    ``content`` is rewritten twice: once by placeholder substitution and
    once by resolution. ``links`` and ``assets`` hold the document-kind
    and asset-kind references in extraction order.
    """

    file_path: str
    content: str = ""
    links: list[Reference] = field(default_factory=list)
    assets: list[Reference] = field(default_factory=list)
    stable_id: str | None = None
    name_fragments: list[str] = field(default_factory=list)
    extension: str = DEFAULT_NOTE_EXTENSION

    def __post_init__(self) -> None:
        if not self.file_path:
            msg = "VaultDocument requires a file path"
            raise ValueError(msg)
        self.file_path = normalize_path(self.file_path)
        if self.content is None:
            self.content = ""
        if not self.stable_id:
            self.stable_id = None
        if not self.name_fragments:
            self.name_fragments = generate_name_fragments(self.file_path, self.extension)

    @property
    def folder(self) -> str:
        """Folder containing this document (``""`` at the vault root)."""
        return folder_of(self.file_path)

    @property
    def bare_path(self) -> str:
        """Vault path without the note extension."""
        return strip_extension(self.file_path, self.extension)

    def assign_stable_id(self, stable_id: str) -> None:
        """Record the store identifier once the document has been created.

        Raises:
            ValueError: If a different identifier was already assigned.
        """
        if not stable_id:
            msg = f"Empty stable identifier for {self.file_path}"
            raise ValueError(msg)
        if self.stable_id is not None and self.stable_id != stable_id:
            msg = (
                f"{self.file_path} already has stable identifier "
                f"{self.stable_id!r}; cannot reassign to {stable_id!r}"
            )
            raise ValueError(msg)
        self.stable_id = stable_id


@dataclass
class AssetFile:
    """A non-note file of the vault and where the store keeps it."""

    relative_path: str
    data_path: str | None = None

    def __post_init__(self) -> None:
        if not self.relative_path:
            msg = "AssetFile requires a relative path"
            raise ValueError(msg)
        self.relative_path = normalize_path(self.relative_path)
