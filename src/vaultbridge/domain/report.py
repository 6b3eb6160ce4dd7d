"""ResolutionReport — outcome of one resolution pass over a batch."""

from __future__ import annotations

from dataclasses import dataclass, field

from vaultbridge.domain.documents import VaultDocument


@dataclass
class ResolutionReport:
    """Documents after resolution plus counts and non-fatal diagnostics.

    Unresolved references are never errors: the affected document stays
    valid and only loses that one live link.
    """

    documents: list[VaultDocument] = field(default_factory=list)
    resolved: int = 0
    unresolved: int = 0
    warnings: list[str] = field(default_factory=list)

    def add_resolved(self) -> None:
        self.resolved += 1

    def add_unresolved(self, message: str) -> None:
        self.unresolved += 1
        self.warnings.append(message)

    def to_dict(self) -> dict[str, int]:
        return {
            "documents": len(self.documents),
            "resolved": self.resolved,
            "unresolved": self.unresolved,
        }
