"""Placeholder substitution — shield references from content conversion.

Each reference's ``source_text`` is swapped for a positional token
(``{{LINK:n}}`` / ``{{ASSET:n}}``) so the rich-text converter can neither
mangle it nor match inside it. The resolvers later expand the tokens.

INVARIANT: Substitution runs longest source text first. A shorter
reference can be a literal substring of a longer one (``[[Water]]``
inside ``![[Water]]``); replacing it first would corrupt the longer one
before it is matched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vaultbridge.domain.references import Reference
from vaultbridge.domain.syntax import asset_placeholder, link_placeholder


@dataclass
class SubstitutionResult:
    """Rewritten content plus both reference lists with placeholders assigned."""

    content: str
    links: list[Reference] = field(default_factory=list)
    assets: list[Reference] = field(default_factory=list)


def substitute_placeholders(
    content: str | None,
    links: list[Reference] | None,
    assets: list[Reference] | None,
) -> SubstitutionResult:
    """Assign placeholders and replace every occurrence of each source text.

    Tokens are numbered by position in their own list, with independent
    counters for links and assets. Must run exactly once per document and
    direction: a second pass would renumber the references.
    """
    if not content:
        return SubstitutionResult(content="")

    links = list(links or [])
    assets = list(assets or [])

    replacements: list[tuple[str, str]] = []
    for index, link in enumerate(links):
        link.placeholder = link_placeholder(index)
        replacements.append((link.source_text, link.placeholder))
    for index, asset in enumerate(assets):
        asset.placeholder = asset_placeholder(index)
        replacements.append((asset.source_text, asset.placeholder))

    # Stable sort: equal-length texts keep link-before-asset order.
    replacements.sort(key=lambda pair: len(pair[0]), reverse=True)

    text = content
    for original, placeholder in replacements:
        text = text.replace(original, placeholder)

    return SubstitutionResult(content=text, links=links, assets=assets)
