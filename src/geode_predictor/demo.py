"""In-process game collaborators for offline predictions.

These stand in for a running game: a small item table, the list of geode
kinds, and a calculator that derives treasure deterministically from the
current geode count and the save's unique id, the same inputs the game seeds
its geode roll with.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from geode_predictor.adapters.game import ObjectProvider
from geode_predictor.models import GameObject
from geode_predictor.simulation import SimulationContext

GEODE = 535
FROZEN_GEODE = 536
MAGMA_GEODE = 537
ARTIFACT_TROVE = 275
OMNI_GEODE = 749
GOLDEN_COCONUT = 791
PRISMATIC_SHARD = 74

ITEM_NAMES: dict[int, str] = {
    GEODE: "Geode",
    FROZEN_GEODE: "Frozen Geode",
    MAGMA_GEODE: "Magma Geode",
    ARTIFACT_TROVE: "Artifact Trove",
    OMNI_GEODE: "Omni Geode",
    GOLDEN_COCONUT: "Golden Coconut",
    PRISMATIC_SHARD: "Prismatic Shard",
    # resources
    330: "Clay",
    378: "Copper Ore",
    380: "Iron Ore",
    382: "Coal",
    384: "Gold Ore",
    386: "Iridium Ore",
    390: "Stone",
    # minerals
    538: "Alamite",
    541: "Aerinite",
    542: "Calcite",
    544: "Esperite",
    545: "Fluorapatite",
    546: "Geminite",
    548: "Jamborite",
    549: "Jagoite",
    552: "Malachite",
    553: "Marble",
    554: "Mudstone",
    555: "Nekoite",
    556: "Orpiment",
    557: "Petrified Slime",
    559: "Pyrite",
    561: "Sandstone",
    562: "Slate",
    563: "Soapstone",
    565: "Thunder Egg",
    566: "Tigerseye",
    567: "Baryte",
    568: "Basalt",
    569: "Bixite",
    570: "Celestine",
    571: "Dolomite",
    572: "Fairy Stone",
    573: "Fire Opal",
    574: "Granite",
    575: "Helvite",
    576: "Hematite",
    577: "Jasper",
    578: "Kyanite",
    579: "Lemon Stone",
    # artifacts
    100: "Chipped Amphora",
    101: "Arrowhead",
    103: "Ancient Doll",
    104: "Elvish Jewelry",
    105: "Chewing Stick",
    106: "Ornamental Fan",
    108: "Rare Disc",
    109: "Ancient Sword",
    110: "Rusty Spoon",
    111: "Rusty Spur",
    112: "Rusty Cog",
    113: "Chicken Statue",
    114: "Ancient Seed",
    115: "Prehistoric Tool",
    116: "Dried Starfish",
    117: "Anchor",
    118: "Glass Shards",
    119: "Bone Flute",
    120: "Prehistoric Handaxe",
    121: "Dwarvish Helm",
    122: "Dwarf Gadget",
    123: "Ancient Drum",
    124: "Golden Mask",
    125: "Golden Relic",
    166: "Treasure Chest",
    # island
    69: "Banana Sapling",
    292: "Mahogany Seed",
    820: "Fossilized Skull",
    831: "Taro Tuber",
    833: "Pineapple Seeds",
    835: "Mango Sapling",
}

GEODE_KINDS: tuple[int, ...] = (GEODE, FROZEN_GEODE, MAGMA_GEODE, OMNI_GEODE, ARTIFACT_TROVE, GOLDEN_COCONUT)

MINERAL_TABLES: dict[int, tuple[int, ...]] = {
    GEODE: (538, 542, 548, 549, 552, 555, 556, 557, 566, 568, 569, 571, 574, 576, 121),
    FROZEN_GEODE: (541, 544, 545, 546, 552, 559, 561, 567, 572, 573, 577, 123),
    MAGMA_GEODE: (553, 554, 562, 563, 565, 570, 575, 578, 122),
    OMNI_GEODE: (
        538, 541, 542, 544, 545, 546, 548, 549, 552, 553, 554, 555, 556, 557,
        559, 561, 562, 563, 565, 566, 567, 568, 569, 570, 571, 572, 573, 574,
        575, 576, 577, 578, 579, 121, 122, 123,
    ),
}

RESOURCE_TABLES: dict[int, tuple[int, ...]] = {
    GEODE: (390, 330, 378, 382),
    FROZEN_GEODE: (390, 380, 382, 384),
    MAGMA_GEODE: (390, 382, 384, 386),
    OMNI_GEODE: (390, 378, 380, 384, 386),
}

ARTIFACT_TABLE: tuple[int, ...] = (
    100, 101, 103, 104, 105, 106, 108, 109, 110, 111, 112, 113, 114, 115,
    116, 117, 118, 119, 120, 121, 122, 123, 124, 125, 166,
)

GOLDEN_COCONUT_TABLE: tuple[tuple[int, int], ...] = (
    (69, 1),
    (835, 1),
    (833, 1),
    (831, 5),
    (820, 1),
    (292, 1),
    (386, 5),
)


class DemoObjectProvider:
    """Resolves item ids from the built-in item table."""

    def __init__(self, names: dict[int, str] | None = None) -> None:
        self._names = dict(ITEM_NAMES if names is None else names)

    def get_object(self, item_id: int, stack: int = 1) -> GameObject:
        if item_id not in self._names:
            raise KeyError(f"Unknown item id: {item_id}")
        return GameObject(item_id=item_id, name=self._names[item_id], stack=stack)


@dataclass(slots=True)
class DemoGeodeService:
    """Lists the openable geode kinds in shop order."""

    kinds: Sequence[int] = field(default=GEODE_KINDS)

    def retrieve_geodes(self, provider: ObjectProvider) -> list[GameObject]:
        return [provider.get_object(item_id) for item_id in self.kinds]


class SeededTreasureCalculator:
    """Deterministic treasure roll driven by ``game.geode_count`` and ``game.unique_id``."""

    def __init__(self, game: SimulationContext, provider: ObjectProvider) -> None:
        self.game = game
        self.provider = provider

    def get_treasure_from_geode(self, geode: GameObject) -> GameObject:
        rng = random.Random(self.game.geode_count + self.game.unique_id // 2)
        for _ in range(rng.randint(1, 10)):
            rng.random()

        if geode.item_id == GOLDEN_COCONUT:
            item_id, stack = rng.choice(GOLDEN_COCONUT_TABLE)
            return self.provider.get_object(item_id, stack)
        if geode.item_id == ARTIFACT_TROVE:
            return self.provider.get_object(rng.choice(ARTIFACT_TABLE))
        if geode.item_id not in MINERAL_TABLES:
            raise ValueError(f"{geode.name} ({geode.item_id}) cannot be cracked open")

        if rng.random() < 0.5:
            amount = rng.randrange(3) * 2 + 1
            if rng.random() < 0.1:
                amount = 10
            if rng.random() < 0.01:
                amount = 20
            return self.provider.get_object(rng.choice(RESOURCE_TABLES[geode.item_id]), amount)

        if geode.item_id == OMNI_GEODE and self.game.geode_count > 15 and rng.random() < 0.008:
            return self.provider.get_object(PRISMATIC_SHARD)
        return self.provider.get_object(rng.choice(MINERAL_TABLES[geode.item_id]))
