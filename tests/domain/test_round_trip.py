"""End-to-end properties across extraction, substitution, and both resolvers."""

from __future__ import annotations

import re
from collections.abc import Callable

from vaultbridge.domain.documents import AssetFile, VaultDocument
from vaultbridge.domain.resolve_export import resolve_for_export
from vaultbridge.domain.resolve_import import resolve_for_import

MakeDoc = Callable[..., VaultDocument]

_TOKEN = re.compile(r"\{\{(?:LINK|ASSET):\d+\}\}")

NOTE = (
    "# Villain\n"
    "Lives in [[Waterdeep]] and hunts [[Nowhere|someone]].\n"
    "![Lair](lair.png) ![[map.png]] [Bob](foundry://Actor.bob)\n"
)


class TestNoTokenSurvives:
    def test_import(self, vault_doc: MakeDoc) -> None:
        villain = vault_doc("NPCs/Villain.md", NOTE, "JournalEntry.v")
        town = vault_doc("NPCs/Waterdeep.md", "", "JournalEntry.w")
        resolve_for_import([villain, town], [AssetFile("img/lair.png", "worlds/w/lair.png")])
        assert not _TOKEN.search(villain.content)

    def test_export(self, store_doc: MakeDoc) -> None:
        page = store_doc(
            "Hero.md",
            '@UUID[JournalEntry.a] @UUID[Item.x]{Sword} <img src="m.png"> <a href="h.pdf">H</a>',
            "JournalEntry.h",
        )
        resolve_for_export([page])
        assert not _TOKEN.search(page.content)


class TestUnresolvedRoundTrip:
    def test_import_without_anything_resolvable(self, vault_doc: MakeDoc) -> None:
        villain = vault_doc("NPCs/Villain.md", NOTE.replace(" [Bob](foundry://Actor.bob)", ""))
        resolve_for_import([villain])
        assert villain.content == NOTE.replace(" [Bob](foundry://Actor.bob)", "")


class TestVaultStoreVault:
    def test_same_folder_link_survives(self, vault_doc: MakeDoc, store_doc: MakeDoc) -> None:
        villain = vault_doc("NPCs/Villain.md", "Lives in [[Waterdeep]].", "JournalEntry.v")
        town = vault_doc("NPCs/Waterdeep.md", "A city.", "JournalEntry.w")
        resolve_for_import([villain, town])
        assert villain.content == "Lives in @UUID[JournalEntry.w]{Waterdeep}."

        pages = [
            store_doc("NPCs/Villain.md", villain.content, "JournalEntry.v"),
            store_doc("NPCs/Waterdeep.md", town.content, "JournalEntry.w"),
        ]
        resolve_for_export(pages)
        assert pages[0].content == "Lives in [[Waterdeep]]."

    def test_alias_survives(self, vault_doc: MakeDoc, store_doc: MakeDoc) -> None:
        villain = vault_doc("Villain.md", "[[People/Hero|the hero]]", "JournalEntry.v")
        hero = vault_doc("People/Hero.md", "", "JournalEntry.h")
        resolve_for_import([villain, hero])

        pages = [
            store_doc("Villain.md", villain.content, "JournalEntry.v"),
            store_doc("People/Hero.md", "", "JournalEntry.h"),
        ]
        resolve_for_export(pages)
        assert pages[0].content == "[[People/Hero|the hero]]"

    def test_store_entity_survives(self, vault_doc: MakeDoc, store_doc: MakeDoc) -> None:
        note = vault_doc("Note.md", "[Bob](foundry://Actor.bob)", "JournalEntry.n")
        resolve_for_import([note])
        page = store_doc("Note.md", note.content, "JournalEntry.n")
        resolve_for_export([page])
        assert page.content == "[Bob](foundry://Actor.bob)"

    def test_bracketed_store_label_survives(self, vault_doc: MakeDoc, store_doc: MakeDoc) -> None:
        pages = [
            store_doc("People/Hero.md", "@UUID[JournalEntry.v]{Villain [old]}", "JournalEntry.h"),
            store_doc("People/Villain.md", "", "JournalEntry.v"),
        ]
        resolve_for_export(pages)
        assert pages[0].content == "[[Villain|Villain (old)]]"

        hero = vault_doc("People/Hero.md", pages[0].content, "JournalEntry.h")
        villain = vault_doc("People/Villain.md", "", "JournalEntry.v")
        resolve_for_import([hero, villain])
        assert hero.content == "@UUID[JournalEntry.v]{Villain (old)}"
