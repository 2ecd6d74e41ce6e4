"""Keyword rule tables for listing tag scoring.

Every phrase entry is ``(phrase, base_score)`` with base scores on the
1-10 scale. Phrases are lowercase; ``TagScorer`` matches them token-wise
against the lowercased listing text.
"""

from __future__ import annotations

import dataclasses

PhraseTable = tuple[tuple[str, int], ...]

# Keyed by lowercased category name.
CATEGORY_PHRASES: dict[str, PhraseTable] = {
    "jewelry": (
        ("handmade jewelry", 8),
        ("sterling silver", 7),
        ("gold necklace", 7),
        ("boho jewelry", 6),
        ("necklace", 6),
        ("bracelet", 6),
        ("earrings", 6),
        ("jewelry gift", 7),
        ("gift for her", 7),
    ),
    "art": (
        ("wall art", 8),
        ("art print", 7),
        ("original art", 7),
        ("painting", 6),
        ("digital art", 7),
        ("custom art", 7),
        ("artwork", 5),
    ),
    "clothing": (
        ("handmade clothing", 7),
        ("vintage clothing", 7),
        ("custom clothing", 7),
        ("t-shirt", 6),
        ("dress", 5),
        ("graphic tee", 6),
        ("boutique", 4),
    ),
    "home decor": (
        ("home decor", 8),
        ("wall decor", 7),
        ("rustic decor", 6),
        ("farmhouse decor", 7),
        ("modern decor", 6),
        ("handmade decor", 6),
        ("custom sign", 7),
    ),
    "toys": (
        ("handmade toys", 7),
        ("wooden toys", 8),
        ("educational toys", 7),
        ("baby toys", 7),
        ("plush toy", 6),
        ("montessori", 7),
    ),
    "craft supplies": (
        ("craft supplies", 8),
        ("diy kit", 7),
        ("beads", 5),
        ("yarn", 5),
        ("fabric", 5),
        ("sewing pattern", 7),
        ("svg file", 7),
    ),
    "vintage": (
        ("vintage", 6),
        ("antique", 7),
        ("retro", 5),
        ("collectible", 6),
        ("mid century", 7),
    ),
    "books": (
        ("story book", 7),
        ("personalized book", 7),
        ("childrens book", 7),
        ("kids book", 6),
        ("picture book", 6),
        ("journal", 5),
        ("notebook", 5),
    ),
    "wedding": (
        ("wedding gift", 8),
        ("bridesmaid gift", 8),
        ("wedding decor", 7),
        ("bridal shower", 7),
        ("save the date", 7),
    ),
    "pet supplies": (
        ("pet portrait", 8),
        ("dog collar", 7),
        ("cat toy", 6),
        ("pet memorial", 7),
        ("dog lover gift", 7),
    ),
}

GENERAL_PHRASES: PhraseTable = (
    ("handmade", 6),
    ("custom", 6),
    ("personalized", 7),
    ("unique gift", 6),
    ("gift", 5),
    ("homemade", 5),
    ("one of a kind", 6),
    ("made to order", 5),
)

AUDIENCE_PHRASES: PhraseTable = (
    ("gift for kids", 7),
    ("gift for her", 6),
    ("gift for him", 6),
    ("gift for mom", 7),
    ("gift for dad", 7),
    ("birthday gift", 7),
    ("christmas gift", 7),
    ("baby shower", 6),
    ("anniversary gift", 7),
    ("teacher gift", 6),
)

FEATURE_PHRASES: PhraseTable = (
    ("eco friendly", 6),
    ("organic", 5),
    ("hand painted", 6),
    ("hand stitched", 6),
    ("waterproof", 5),
    ("digital download", 7),
    ("printable", 6),
    ("sterling silver", 6),
    ("solid wood", 6),
)

NICHE_PHRASES: PhraseTable = (
    ("boho", 5),
    ("cottagecore", 6),
    ("minimalist", 5),
    ("farmhouse", 5),
    ("kawaii", 6),
    ("gothic", 5),
    ("mid century modern", 6),
    ("scandinavian", 5),
)

# A concept is present when any of its synonyms occurs in the listing text.
CONCEPTS: dict[str, tuple[str, ...]] = {
    "story": ("story", "stories", "tale", "fairytale"),
    "book": ("book",),
    "child": ("kid", "child", "baby", "toddler", "boy", "girl"),
    "gift": ("gift", "present"),
    "personal": ("personalized", "personalised", "custom", "monogram", "name"),
    "birthday": ("birthday",),
    "wedding": ("wedding", "bride", "bridal"),
    "jewelry": ("jewelry", "necklace", "bracelet", "earring", "ring"),
    "handmade": ("handmade", "hand made", "handcrafted"),
    "wall": ("wall",),
    "art": ("art", "print", "painting"),
    "pet": ("pet", "dog", "cat", "puppy", "kitten"),
}

# (required concepts, synthesized phrases); every concept must be present.
COMPOUND_RULES: tuple[tuple[tuple[str, ...], PhraseTable], ...] = (
    (("story", "book"), (("story book", 9), ("custom story book", 9))),
    (("personal", "story", "book"), (("personalized story book", 10),)),
    (("child", "book"), (("kids book", 8), ("childrens book", 8))),
    (("child", "gift"), (("gift for kids", 8), ("kids gift", 8))),
    (("personal", "gift"), (("personalized gift", 9),)),
    (("birthday", "gift"), (("birthday gift", 9),)),
    (("wedding", "gift"), (("wedding gift", 9),)),
    (("handmade", "jewelry"), (("handmade jewelry", 9),)),
    (("wall", "art"), (("wall art", 9),)),
    (("pet", "personal"), (("custom pet portrait", 8),)),
)

# First match wins: any keyword appearing in the tag text selects the decoration.
DECORATIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("story", "book", "journal", "notebook"), "📚"),
    (("kid", "child", "baby", "toy", "montessori"), "🧸"),
    (("birthday",), "🎂"),
    (("wedding", "bride", "bridal", "anniversary"), "💍"),
    (("christmas",), "🎄"),
    (("gift", "present"), "🎁"),
    (("personalized", "custom", "monogram"), "✨"),
    (("jewelry", "necklace", "bracelet", "earring", "silver", "gold"), "💎"),
    (("art", "print", "painting", "portrait"), "🎨"),
    (("decor", "sign", "farmhouse", "rustic"), "🏡"),
    (("vintage", "antique", "retro", "collectible"), "🕰️"),
    (("dog", "cat", "pet"), "🐾"),
    (("eco", "organic"), "🌿"),
    (("handmade", "homemade", "hand painted", "hand stitched"), "🤲"),
    (("digital", "printable", "svg", "download"), "💾"),
)

CATEGORY_DECORATIONS: dict[str, str] = {
    "jewelry": "💎",
    "art": "🎨",
    "clothing": "👕",
    "home decor": "🏡",
    "toys": "🧸",
    "craft supplies": "🧶",
    "vintage": "🕰️",
    "books": "📚",
    "wedding": "💍",
    "pet supplies": "🐾",
}

DEFAULT_DECORATION = "🏷️"


@dataclasses.dataclass(frozen=True)
class RuleSet:
    """All tables the scorer consults, swappable as one unit."""

    category_phrases: dict[str, PhraseTable] = dataclasses.field(default_factory=lambda: CATEGORY_PHRASES)
    general_phrases: PhraseTable = GENERAL_PHRASES
    audience_phrases: PhraseTable = AUDIENCE_PHRASES
    feature_phrases: PhraseTable = FEATURE_PHRASES
    niche_phrases: PhraseTable = NICHE_PHRASES
    concepts: dict[str, tuple[str, ...]] = dataclasses.field(default_factory=lambda: CONCEPTS)
    compound_rules: tuple[tuple[tuple[str, ...], PhraseTable], ...] = COMPOUND_RULES
    decorations: tuple[tuple[tuple[str, ...], str], ...] = DECORATIONS
    category_decorations: dict[str, str] = dataclasses.field(default_factory=lambda: CATEGORY_DECORATIONS)
    default_decoration: str = DEFAULT_DECORATION


DEFAULT_RULES = RuleSet()
