"""String cleaning applied to a name before and during parsing.

There are three levels: pre_clean() removes markup and enclosing quotes,
normalize() carefully fixes punctuation and spacing while keeping everything
that might be part of the name, and normalize_strong() additionally strips
quotes, rank prefixes and bracket styles right before the grammar is applied.

"""

import html
import logging

import regex

from .constants import HYBRID_MARKER, Warnings
from .grammar import (
    NAME_LETTERS,
    YEAR,
    YEAR_LOOSE,
    alternation,
    author_letters,
    epithet,
    monomial,
    name_letters,
)
from .model import ParsedName
from .ranks import RANK_MARKER_MAP_SUPRAGENERIC, infer_rank_from_marker

logger = logging.getLogger(__name__)

_MONOMIAL = monomial.to_regex()
_EPITHET = epithet.to_regex()
_YEAR = YEAR.to_regex()
_YEAR_LOOSE = YEAR_LOOSE.to_regex()

# markup
XML_ENTITY_STRIP = regex.compile(r"&\s*([a-z]+)\s*;")
AMPERSAND_ENTITY = regex.compile(r"& *amp +")
XML_TAGS = regex.compile(r"< */? *[a-zA-Z] *>")

# pairs of opening and closing quotes stripped from both ends
QUOTES = [('"', '"'), ("'", "'"), ("“", "”"), ("‘", "’")]

NORM_WHITESPACE = regex.compile(r"(?:\\[nr]|\s)+")
NORM_APOSTROPHES = regex.compile("[`´‘’]+")
NORM_QUOTES = regex.compile("[\"'`´]+")
REPL_GENUS_QUOTE = regex.compile(rf"^' *({_MONOMIAL}) *'")
REPL_ENCLOSING_QUOTE = regex.compile(r"^[',\s]+|[',\s]+$")
NORM_UPPERCASE_WORDS = regex.compile(r"\b(\p{Lu})(\p{Lu}{2,})\b")
REPL_UNDERSCORE = regex.compile(r"_+")
NORM_BRACKETS_OPEN = regex.compile(r"\s*([{(\[])\s*,?\s*")
NORM_BRACKETS_CLOSE = regex.compile(r"\s*,?\s*([})\]])\s*")
NORM_BRACKETS_OPEN_STRONG = regex.compile(r"(?: ?[{\[] ?)+")
NORM_BRACKETS_CLOSE_STRONG = regex.compile(r"(?: ?[}\]] ?)+")
NORM_AND = regex.compile(r"\b *(?:and|et|und|\+|,&) *\b")
NORM_PUNCTUATIONS = regex.compile(r"\s*([.,;:&(){}\[\]-])\s*\1*\s*")
NORM_IMPRINT_YEAR = regex.compile(
    rf"({_YEAR_LOOSE})\s*([(\[,]? *(?:not|imprint)? *\"?{_YEAR_LOOSE}\"?[)\]]?)"
)
COMMA_AFTER_BASYEAR = regex.compile(rf"({_YEAR})\s*\)\s*,")
# √ó is a garbled encoding of the hybrid cross seen in some sources
NORM_HYBRIDS_GENUS = regex.compile(rf"^\s*(?:[+×xX]|√ó)\s*([{NAME_LETTERS}])")
NORM_HYBRIDS_EPITH = regex.compile(
    rf"^\s*(×?{_MONOMIAL})\s+(?:×|√ó|[xX]\s)\s*({_EPITHET})"
)
NORM_HYBRIDS_FORM = regex.compile(r"\b(?:[×xX]|√ó) ")
NORM_TF_GENUS = regex.compile(rf"^([{NAME_LETTERS}])\(([{name_letters}-]+)\)\.? ")
NORM_SUBGENUS = regex.compile(rf"({_MONOMIAL}) ({_MONOMIAL}) ({_EPITHET})")
NORM_EX_HORT = regex.compile(r"\b(?:hort|cv)[. ]ex ", regex.IGNORECASE)
NO_Q_MARKS = regex.compile(rf"([{author_letters}])\?+")
FORM_SPECIALIS = regex.compile(r"\bf\. *sp(?:ec)?\b")
SENSU_LATU = regex.compile(r"\bs\.l\.\b")
STARTING_EPITHET = regex.compile(rf"^\s*({_EPITHET})\b")
REPL_RANK_PREFIXES = regex.compile(
    rf"^(?:sub)?(?:fossil|{alternation(RANK_MARKER_MAP_SUPRAGENERIC)})\.?\s+",
    regex.IGNORECASE,
)


def _collapse(name: str) -> str:
    return NORM_WHITESPACE.sub(" ", name).strip()


def pre_clean(name: str, pn: ParsedName) -> str:
    """Removes markup, entities and enclosing quotes. Warnings are added to pn."""
    name = XML_ENTITY_STRIP.sub(r"&\1;", name)
    length = len(name)
    name = html.unescape(name)
    if len(name) < length:
        pn.add_warning(Warnings.HTML_ENTITIES)
    if AMPERSAND_ENTITY.search(name):
        name = AMPERSAND_ENTITY.sub("&", name)
        pn.add_warning(Warnings.HTML_ENTITIES)
    if XML_TAGS.search(name):
        name = XML_TAGS.sub("", name)
        pn.add_warning(Warnings.XML_ENTITIES)

    name = name.strip()
    for opening, closing in QUOTES:
        start = 0
        while start < len(name) and (name[start] == opening or name[start].isspace()):
            start += 1
        if start > 0:
            end = len(name)
            while end > start and name[end - 1] == closing:
                end -= 1
            name = name[start:end]

    name = NORM_WHITESPACE.sub(" ", name)
    name = NORM_APOSTROPHES.sub("'", name)
    return name.strip()


def normalize(name: str) -> str:
    """Carefully normalizes punctuation, spacing and hybrid markers.

    Spaces around punctuation are removed, "and", "et" and similar become "&",
    hybrid crosses are attached to the name part they belong to, and words
    written entirely in capitals are title-cased.

    """
    # some rewrites expose new matches for others, so repeat until stable
    while (normalized := _normalize_once(name)) != name:
        name = normalized
    return name


def _normalize_once(name: str) -> str:
    name = name.replace("¡", "i")
    # rank markers and abbreviations containing two dots
    name = FORM_SPECIALIS.sub("fsp", name)
    name = SENSU_LATU.sub("sl", name)

    # imprint years, e.g. "1887 (imprint 1886)"
    if (m := NORM_IMPRINT_YEAR.search(name)) is not None:
        logger.debug("Imprint year %s removed", m.group(2))
        name = NORM_IMPRINT_YEAR.sub(r"\1", name)

    name = REPL_UNDERSCORE.sub(" ", name)
    name = NORM_PUNCTUATIONS.sub(r"\1", name)
    name = NORM_AND.sub("&", name)
    name = COMMA_AFTER_BASYEAR.sub(r"\1)", name)

    name = NORM_BRACKETS_OPEN.sub(r"\1", name)
    name = NORM_BRACKETS_CLOSE.sub(r"\1", name)

    name = NORM_HYBRIDS_GENUS.sub(HYBRID_MARKER + r"\1", name, count=1)
    name = NORM_HYBRIDS_EPITH.sub(r"\1 " + HYBRID_MARKER + r"\2", name, count=1)
    name = NORM_HYBRIDS_FORM.sub(f" {HYBRID_MARKER} ", name)

    name = NORM_UPPERCASE_WORDS.sub(lambda m: m.group(1) + m.group(2).lower(), name)
    return _collapse(name)


def normalize_strong(name: str, pn: ParsedName) -> str:
    """Normalizes the name for the grammar, dropping quotes and unusual brackets."""
    name = NORM_EX_HORT.sub("hort.ex ", name)
    name = NORM_QUOTES.sub("'", name)
    name = REPL_GENUS_QUOTE.sub(r"\1 ", name, count=1)

    if REPL_ENCLOSING_QUOTE.search(name):
        name = REPL_ENCLOSING_QUOTE.sub("", name)
        pn.add_warning(Warnings.REPL_ENCLOSING_QUOTE)

    # question marks after letters; after years they remain
    if NO_Q_MARKS.search(name):
        name = NO_Q_MARKS.sub(r"\1", name)
        pn.doubtful = True
        pn.add_warning(Warnings.QUESTION_MARKS_REMOVED)

    name = REPL_RANK_PREFIXES.sub("", name)
    name = NORM_TF_GENUS.sub(r"\1\2 ", name)

    name = NORM_BRACKETS_OPEN_STRONG.sub("(", name)
    name = NORM_BRACKETS_CLOSE_STRONG.sub(")", name)

    if STARTING_EPITHET.search(name):
        name = STARTING_EPITHET.sub(r"? \1", name, count=1)
        pn.add_warning(Warnings.MISSING_GENUS)

    name = NORM_SUBGENUS.sub(_bracket_subgenus, name)

    name = NORM_PUNCTUATIONS.sub(r"\1", name)
    return _collapse(name)


def _bracket_subgenus(m: regex.Match) -> str:
    # "Abies Sub alba" gets brackets, unless the third word is really a rank marker
    if infer_rank_from_marker(m.group(3)) is not None:
        return m.group(0)
    return f"{m.group(1)}({m.group(2)}){m.group(3)}"


_NOTE_PUNCTUATION = regex.compile(r"([,;])(?! )")
_NOTE_DOTS = regex.compile(rf"(?:\.(?={_YEAR})|(?<=\b[a-z]{{2,}})\.(?! ))")


def norm_note(note: str) -> str | None:
    """Spaces out punctuation in a free-text note such as a sensu reference."""
    note = _NOTE_PUNCTUATION.sub(r"\1 ", note)
    note = _NOTE_DOTS.sub(". ", note)
    note = note.replace("&", " & ").strip()
    return note or None
