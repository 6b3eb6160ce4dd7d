"""Reference — one cross-reference or asset mention inside a document.

A single tagged model covers both kinds (``document`` and ``asset``) and
both directions. Extractors create references; the placeholder step
assigns ``placeholder``; the resolvers fill ``target_address``.

INVARIANT: A reference is addressable in at least one format, so
``source_address`` and ``target_address`` are never both empty.
INVARIANT: ``source_text`` never changes after construction. It is both
the substitution key and the fallback when resolution fails.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, Field, field_validator, model_validator


class ReferenceKind(StrEnum):
    """What a reference points at."""

    DOCUMENT = "document"
    ASSET = "asset"


class Reference(BaseModel):
    """A parsed reference with both addressing forms and resolution state.

    Attributes:
        source_text: Exact matched substring in the document content.
        source_address: Vault-relative name or path (empty when the
            reference was written in store syntax).
        target_address: Store identifier or data path; ``None`` until
            resolved unless the source syntax already carries it.
        label: Display text; resolvers fall back to an address when unset.
        placeholder: Token assigned by the placeholder step.
        kind: Document cross-reference or asset embed/link.
        is_embedded: For assets, inline image rather than clickable link.
        attributes: Format-specific extras (``heading``, ``is_embed``,
            ``is_store_address``, ``is_document_reference``).
    """

    model_config = {"validate_assignment": True}

    source_text: str = Field(min_length=1, frozen=True)
    source_address: str = ""
    target_address: str | None = None
    label: str | None = None
    placeholder: str | None = None
    kind: ReferenceKind = ReferenceKind.DOCUMENT
    is_embedded: bool = False
    attributes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> Any:
        return {} if value is None else value

    @model_validator(mode="after")
    def _check_addressable(self) -> Self:
        if not self.source_address and not self.target_address:
            msg = f"Reference {self.source_text!r} has neither a source nor a target address"
            raise ValueError(msg)
        return self

    @property
    def is_document(self) -> bool:
        return self.kind == ReferenceKind.DOCUMENT

    @property
    def is_asset(self) -> bool:
        return self.kind == ReferenceKind.ASSET

    def display_text(self, fallback: str | None = None) -> str:
        """Label if set, else *fallback*, else whichever address is known."""
        if self.label:
            return self.label
        if fallback:
            return fallback
        return self.source_address or self.target_address or ""
