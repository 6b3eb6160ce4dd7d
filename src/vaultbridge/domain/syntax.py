"""Reference syntax of both formats and the placeholder tokens.

Formatting lives here so that extractors and resolvers agree on a single
rendering of each form::

    vault:  [[Name]]  [[Name|Label]]  [Label](foundry://Actor.x)  [[@UUID[id]|Label]]
    store:  @UUID[id]{Label}  <img src="…" alt="…" />  <a href="…">…</a>
"""

from __future__ import annotations

from html import escape

STORE_LINK_SCHEME = "foundry"
DEFAULT_DOCUMENT_TYPE = "JournalEntry"

LINK_PLACEHOLDER = "{{{{LINK:{index}}}}}"
ASSET_PLACEHOLDER = "{{{{ASSET:{index}}}}}"


def link_placeholder(index: int) -> str:
    """Token for the document-kind reference at *index*: ``{{LINK:0}}``."""
    return LINK_PLACEHOLDER.format(index=index)


def asset_placeholder(index: int) -> str:
    """Token for the asset-kind reference at *index*: ``{{ASSET:0}}``."""
    return ASSET_PLACEHOLDER.format(index=index)


def is_document_identifier(identifier: str, document_type: str = DEFAULT_DOCUMENT_TYPE) -> bool:
    """True when *identifier* addresses a store document (or one of its pages)."""
    return identifier.startswith(f"{document_type}.") or f".{document_type}." in identifier


# --- store syntax ---


def format_store_link(identifier: str, label: str) -> str:
    return f"@UUID[{identifier}]{{{label}}}"


def format_store_image(data_path: str, alt: str) -> str:
    return f'<img src="{escape(data_path)}" alt="{escape(alt)}" />'


def format_store_anchor(data_path: str, text: str) -> str:
    return f'<a href="{escape(data_path)}">{escape(text, quote=False)}</a>'


# --- vault syntax ---

# Square brackets would end the vault link early; the label keeps round ones.
_LABEL_BRACKETS = str.maketrans("[]", "()")


def vault_label(label: str) -> str:
    """*label* with square brackets swapped for round ones: ``a]b`` -> ``a)b``."""
    return label.translate(_LABEL_BRACKETS)


def format_wikilink(address: str, label: str | None = None) -> str:
    """``[[address]]``, or ``[[address|label]]`` when *label* adds something."""
    if not label or label == address or label == address.rpartition("/")[2]:
        return f"[[{address}]]"
    return f"[[{address}|{vault_label(label)}]]"


def format_preserved_link(identifier: str, label: str) -> str:
    """Vault form of a store link whose target is not part of the batch."""
    return f"[[@UUID[{identifier}]|{vault_label(label)}]]"


def format_scheme_link(identifier: str, label: str) -> str:
    """Vault form of a link to a store entity that is not a document."""
    return f"[{vault_label(label)}]({STORE_LINK_SCHEME}://{identifier})"


def format_markdown_image(path: str, alt: str) -> str:
    return f"![{vault_label(alt)}]({path})"


def format_markdown_link(path: str, text: str) -> str:
    return f"[{vault_label(text)}]({path})"
