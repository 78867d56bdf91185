"""Building blocks for the regular expressions that make up the name grammar.

Patterns are compiled with the third-party regex module, which supports Unicode
property classes, variable-width look-behinds and per-call timeouts.

"""

from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial

import regex

from .ranks import (
    INFRASUBSPECIFIC_MICROBIAL_RANKS,
    NOTHO,
    RANK_MARKER_MAP,
    RANK_MARKER_MAP_INFRAGENERIC,
    RANK_MARKER_MAP_INFRASPECIFIC,
)


class Element:
    def to_regex(self) -> str:
        raise NotImplementedError

    def compile(self, flags: int = 0) -> regex.Pattern:
        return regex.compile(f"^{self.to_regex()}$", flags)

    def __or__(self, other: "Element") -> "OneOf":
        return OneOf([self, other])

    def __add__(self, other: "Element") -> "And":
        return And([self, other])


@dataclass
class Char(Element):
    alternatives: list[str]

    def to_regex(self) -> str:
        return f"[{''.join(self.alternatives)}]"


@dataclass
class Literal(Element):
    text: str

    def to_regex(self) -> str:
        return regex.escape(self.text)


@dataclass
class Raw(Element):
    """A hand-written regex fragment."""

    pattern: str

    def to_regex(self) -> str:
        return f"(?:{self.pattern})"


@dataclass
class OneOf(Element):
    alternatives: list[Element]

    @classmethod
    def from_strs(cls, strs: Iterable[str]) -> "OneOf":
        return cls([Literal(s) for s in strs])

    @classmethod
    def from_regexes(cls, patterns: Iterable[str]) -> "OneOf":
        return cls([Raw(p) for p in patterns])

    def to_regex(self) -> str:
        return "(?:" + "|".join(e.to_regex() for e in self.alternatives) + ")"


@dataclass
class And(Element):
    pieces: list[Element]

    def __add__(self, other: Element) -> "And":
        return And([*self.pieces, other])

    def to_regex(self) -> str:
        return "".join(e.to_regex() for e in self.pieces)


@dataclass
class Repetition(Element):
    elt: Element
    min: int | None = None
    max: int | None = None
    lazy: bool = False

    def to_regex(self) -> str:
        match (self.min or 0, self.max):
            case (0, 1):
                quantifier = "?"
            case (0, None):
                quantifier = "*"
            case (1, None):
                quantifier = "+"
            case (low, high):
                quantifier = f"{{{low},{high if high is not None else ''}}}"
        if self.lazy:
            quantifier += "?"
        return f"(?:{self.elt.to_regex()}){quantifier}"


@dataclass
class Group(Element):
    """A named capture group."""

    name: str
    elt: Element

    def to_regex(self) -> str:
        return f"(?P<{self.name}>{self.elt.to_regex()})"


Optional = partial(Repetition, min=0, max=1)
ZeroOrMore = partial(Repetition, min=0, max=None)
OneOrMore = partial(Repetition, min=1, max=None)


C = Char
L = Literal
R = Raw


def alternation(keys: Iterable[str]) -> str:
    return "|".join(regex.escape(key) for key in keys)


# character ranges used inside classes
NAME_LETTERS = "A-ZÏËÖÜÄÉÈČÁÀÆŒ"
name_letters = "a-zïëöüäåéèčáàæœ"
AUTHOR_LETTERS = NAME_LETTERS + r"\p{Lu}"
author_letters = name_letters + r"\p{Ll}?\-"

upper = C([NAME_LETTERS])
lower = C([name_letters])

YEAR = R(r"[12][0-9][0-9][0-9?]")
YEAR_LOOSE = YEAR + Optional(C(["abcdh?"])) + Optional(C(["/,-"]) + R("[0-9]{1,4}"))

# abbreviations and name particles that may appear as an author token
_AUTHOR_PARTICLES = [
    "al",
    "f",
    "fil",
    "filius",
    "hort",
    "j",
    "jr",
    "jun",
    "junior",
    "sr",
    "sen",
    "senior",
    "ms",
    "v",
    "v[ao]n",
    "d[aeiou]?",
    "de[nrmls]?",
    "degli",
    "e",
    "l[ae]s?",
    "s",
    "'?t",
    "y",
]
author_token = (
    OneOf.from_regexes([r"\p{Lu}[\p{Lu}\p{Ll}'-]*", *_AUTHOR_PARTICLES])
    + Optional(L("."))
)
author = author_token + ZeroOrMore(Optional(C([" '-"])) + author_token)
author_team = author + ZeroOrMore(OneOrMore(C(["&,;"])) + author)


def authorship(prefix: str) -> Element:
    """Ex authors, main authors and a sanctioning author, as named groups."""
    return (
        Optional(Group(f"{prefix}ex", author_team) + R(r" ?\bex[. ]"))
        + Group(f"{prefix}authors", author_team)
        + Optional(R(" *: *") + Group(f"{prefix}sanctioning", R(r"Pers\.?|Fr\.?")))
    )


_EPITHET_PREFIXES = ["van", "novae"]
_UNALLOWED_EPITHET_ENDINGS = [
    r"\bex",
    r"\bl[ae]",
    r"\bv[ao]n",
    "bacilliform",
    "coliform",
    "coryneform",
    "cytoform",
    "chemoform",
    "biovar",
    "serovar",
    "genomovar",
    "agamovar",
    "cultivar",
    "genotype",
    "serotype",
    "subtype",
    "ribotype",
    "isolate",
]
epithet = (
    Optional(R(r"[0-9]+-?|[doml]'"))
    + Optional(OneOf.from_strs(_EPITHET_PREFIXES) + R(" [a-z]"))
    + OneOrMore(C([name_letters, "+-"]))
    + R(r"(?<! d)")
    + lower
    + R(r"(?<!(?:" + "|".join(_UNALLOWED_EPITHET_ENDINGS) + r"))(?=\b)")
)
monomial = (
    upper
    + (L(".") | OneOrMore(lower))
    + Optional(L("-") + Optional(upper) + OneOrMore(lower))
)
infrageneric_name = upper + OneOrMore(C([name_letters, "-"]))

rank_marker_species = Optional(L(NOTHO)) + OneOf.from_regexes(
    [r"(?<!f[ .])sp", alternation(RANK_MARKER_MAP_INFRASPECIFIC)]
)
rank_marker_microbial = OneOf.from_regexes(
    [
        r"bv\.",
        r"ct\.",
        r"f\.sp\.",
        *(regex.escape(rank.marker or "") for rank in INFRASUBSPECIFIC_MICROBIAL_RANKS),
    ]
)
rank_marker_all = (
    Optional(Group("notho", L(NOTHO)))
    + R(" *")
    + Group("marker", R(alternation(RANK_MARKER_MAP)))
    + Optional(L("."))
)

infrageneric = (
    L("(") + Group("infrageneric_bracket", infrageneric_name) + L(")")
) | (
    L(" ")
    + Group("infrageneric_marker", R(alternation(RANK_MARKER_MAP_INFRAGENERIC)))
    + C([". "])
    + Group("infrageneric", infrageneric_name)
)

# The complete name: genus or uninomial, infrageneric part, species,
# infraspecies with an optional dropped intermediate epithet and rank marker,
# a microbial rank with its epithet, and finally the authorship block with
# basionym authorship in brackets and an optional trailing year.
name = (
    Group("monomial", Optional(L("×")) + (L("?") | monomial))
    + Optional(R("(?<!ceae)") + infrageneric)
    + Optional(R(r"\b| ") + Group("specific", Optional(L("×")) + epithet))
    + Optional(
        Optional(Group("intermediate", L(" ") + epithet), lazy=True)
        + Optional(
            Optional(R(" .+?"), lazy=True)
            + R(" ?")
            + Group("infraspecific_marker", rank_marker_species)
        )
        + C([". "])
        + Group(
            "infraspecific",
            Optional(L("×")) + Optional(L('"')) + epithet + Optional(L('"')),
        )
    )
    + Optional(
        L(" ")
        + Group("microbial_marker", rank_marker_microbial)
        + C([" ."])
        + Group("microbial", R(r"\S+"))
    )
    + Group(
        "authorship",
        Optional(C([", "]))
        + Optional(
            L("(")
            + Optional(authorship("bas_"))
            + Optional(C([", "]))
            + Optional(Group("bas_year", YEAR_LOOSE))
            + L(")")
        )
        + Optional(authorship(""))
        + Optional(
            R(r" ?\(?,?") + Group("year", YEAR_LOOSE) + R(r"\)?")
        ),
    )
)

NAME_PATTERN = name.compile()
# a monomial at the start, used to tell failed scientific names from junk
POTENTIAL_NAME_PATTERN = regex.compile(rf"^×?{monomial.to_regex()}\b")
AUTHOR_TEAM_PATTERN = author_team.compile()
RANK_MARKER_ONLY = rank_marker_all.compile()
