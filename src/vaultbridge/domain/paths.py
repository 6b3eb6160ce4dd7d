"""Vault path helpers shared by the name index and both resolvers.

All paths are vault-relative and ``/``-separated. Folder comparison is
exact string comparison on the part before the last ``/``.
"""

from __future__ import annotations

from urllib.parse import unquote

DEFAULT_NOTE_EXTENSION = ".md"


def normalize_path(path: str) -> str:
    """Convert backslashes to ``/`` and drop empty segments."""
    parts = [part for part in path.replace("\\", "/").split("/") if part]
    return "/".join(parts)


def folder_of(path: str) -> str:
    """Folder part of *path* (``""`` for files at the vault root).

    Examples:
        >>> folder_of("Campaign/NPCs/Villain.md")
        'Campaign/NPCs'
        >>> folder_of("Villain.md")
        ''
    """
    head, sep, _tail = path.rpartition("/")
    return head if sep else ""


def base_name(path: str) -> str:
    """Last segment of *path*."""
    return path.rpartition("/")[2]


def strip_extension(path: str, extension: str = DEFAULT_NOTE_EXTENSION) -> str:
    """Remove *extension* from the end of *path* if present."""
    if extension and path.endswith(extension):
        return path[: -len(extension)]
    return path


def parent_folders(folder: str) -> list[str]:
    """Ancestor folders of *folder*, nearest first, vault root (``""``) last.

    A folder at the vault root has no ancestors.

    Examples:
        >>> parent_folders("Campaign/NPCs/Allies")
        ['Campaign/NPCs', 'Campaign', '']
    """
    if not folder:
        return []
    parts = folder.split("/")
    parents = ["/".join(parts[:i]) for i in range(len(parts) - 1, 0, -1)]
    parents.append("")
    return parents


def normalize_asset_path(path: str) -> str:
    """Normalize an asset address written in a note for suffix matching.

    Percent-escapes are decoded (``my%20map.png``), backslashes become
    ``/``, ``.`` segments and leading ``..`` segments are dropped.
    """
    parts = [p for p in unquote(path).replace("\\", "/").split("/") if p and p != "."]
    while parts and parts[0] == "..":
        parts.pop(0)
    return "/".join(parts)
