"""Identifier normalization for route params and relationship names.

Route segments are written however the URL reads best (``post_comments``,
``post-comments``, ``comments``) while relationships are declared as
Python identifiers. Both sides are normalized to camelCase and compared
in singular and plural form.

The inflection rules are small: regular English plurals, a handful of
common irregulars, and both readings for endings English spelling leaves
ambiguous (``caches``, ``matches``). Relationship names that fall outside
them can always be matched by spelling the route param the same way as
the relationship.
"""

import re

_SPLIT = re.compile(r"[_\-\s]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

_IRREGULAR_PLURALS: dict[str, str] = {
    "child": "children",
    "person": "people",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
}
_IRREGULAR_SINGULARS: dict[str, str] = {v: k for k, v in _IRREGULAR_PLURALS.items()}
_UNCOUNTABLE = frozenset({"series", "species", "news", "data", "media", "info", "metadata"})

# Singulars ending in "e" whose plurals look like "-ies", "-ches", "-uses"...
_E_SINGULARS = frozenset(
    """
    movie cookie pie tie lie zombie rookie selfie hoodie calorie smoothie genie
    prairie brownie cache niche headache avalanche moustache cause house
    warehouse use pause clause excuse abuse blouse shoe toe canoe oboe hoe foe
    """.split()
)
_O_ES_SINGULARS = frozenset(
    {"hero", "potato", "tomato", "echo", "veto", "torpedo", "embargo", "domino"}
)


def camelize(name: str) -> str:
    """Normalize *name* to lower camelCase.

    ::

        camelize("post")           -> "post"
        camelize("post_comments")  -> "postComments"
        camelize("post-comments")  -> "postComments"
        camelize("PostComments")   -> "postComments"
    """
    words: list[str] = []
    for chunk in _SPLIT.split(name.strip()):
        if chunk:
            words.extend(_CAMEL_BOUNDARY.split(chunk))
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


def _split_last_word(name: str) -> tuple[str, str]:
    """Split a camelCase name into (prefix, lowercased last word)."""
    parts = _CAMEL_BOUNDARY.split(name)
    last = parts[-1]
    return name[: len(name) - len(last)], last


def _rejoin(prefix: str, word: str) -> str:
    if not prefix:
        return word
    return prefix + word[:1].upper() + word[1:]


def _ordered(preferred: str, other: str) -> tuple[str, str]:
    """Put whichever form is a known singular first."""
    if other in _E_SINGULARS and preferred not in _E_SINGULARS:
        return other, preferred
    return preferred, other


def _plural_words(lower: str) -> tuple[str, ...]:
    if lower in _UNCOUNTABLE or lower in _IRREGULAR_SINGULARS:
        return (lower,)
    if lower in _IRREGULAR_PLURALS:
        return (_IRREGULAR_PLURALS[lower],)
    if re.search(r"[^aeiou]y$", lower):
        return (lower[:-1] + "ies",)
    if re.search(r"(ss|us|x|z|ch|sh)$", lower):
        return (lower + "es",)
    if re.search(r"[^aeiou]o$", lower):
        if lower in _O_ES_SINGULARS:
            return (lower + "es", lower + "s")
        return (lower + "s", lower + "es")
    if lower.endswith("s"):
        # Already plural
        return (lower,)
    return (lower + "s",)


def _singular_words(lower: str) -> tuple[str, ...]:
    if lower in _UNCOUNTABLE or lower in _IRREGULAR_PLURALS:
        return (lower,)
    if lower in _IRREGULAR_SINGULARS:
        return (_IRREGULAR_SINGULARS[lower],)
    if lower.endswith("ies") and len(lower) > 3:
        return _ordered(lower[:-3] + "y", lower[:-1])
    if re.search(r"(ss|x|zz|ch|sh|us|o)es$", lower):
        return _ordered(lower[:-2], lower[:-1])
    if re.search(r"[sz]es$", lower):
        return _ordered(lower[:-1], lower[:-2])
    if lower.endswith("s") and not lower.endswith(("ss", "us", "is")):
        return (lower[:-1],)
    return (lower,)


def plural_forms(name: str) -> tuple[str, ...]:
    """Candidate plural forms of a camelCase name, best guess first."""
    prefix, word = _split_last_word(name)
    return tuple(_rejoin(prefix, w) for w in _plural_words(word.lower()))


def singular_forms(name: str) -> tuple[str, ...]:
    """Candidate singular forms of a camelCase name, best guess first.

    English spelling alone can't tell ``caches`` (cache) from ``matches``
    (match), so ambiguous endings yield both readings.
    """
    prefix, word = _split_last_word(name)
    return tuple(_rejoin(prefix, w) for w in _singular_words(word.lower()))


def pluralize(name: str) -> str:
    """Plural form of a camelCase name; only the last word is inflected."""
    return plural_forms(name)[0]


def singularize(name: str) -> str:
    """Singular form of a camelCase name; only the last word is inflected."""
    return singular_forms(name)[0]


def name_variants(name: str) -> tuple[str, ...]:
    """Return ``name`` plus its singular and plural forms, without duplicates.

    The original spelling always comes first so an exact match wins.
    """
    camel = camelize(name)
    seen: list[str] = []
    for candidate in (camel, *singular_forms(camel), *plural_forms(camel)):
        if candidate and candidate not in seen:
            seen.append(candidate)
    return tuple(seen)
