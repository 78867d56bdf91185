"""Splitting matched author strings into Authorship objects."""

import regex

from .model import Authorship
from .normalizer import NORM_PUNCTUATIONS

AUTHOR_TEAM_DELIMITER = regex.compile(r"[,&]")
# "Smith, J." in a semicolon separated team
AUTHOR_INITIAL_SWAP = regex.compile(r"^([^,]+) *, *([^,]+)$")
# "Balsamo M Fregni E Tongiorgi MA": initials follow each surname
AUTHOR_TEAM_SPACED = regex.compile(
    r"^(\p{Lu}\p{Ll}+ \p{Lu}+)(?: (\p{Lu}\p{Ll}+ \p{Lu}+))*$"
)
AUTHOR_SPACED = regex.compile(r"(\p{Lu}\p{Ll}+) (\p{Lu}+)")


def parse_authorship(
    ex: str | None, authors: str | None, year: str | None
) -> Authorship:
    authorship = Authorship()
    if authors is not None:
        authorship.authors = split_team(authors)
    if ex is not None:
        authorship.ex_authors = split_team(ex)
    authorship.year = clean_year(year)
    return authorship


def split_team(team: str) -> list[str]:
    """Splits an author team into individual authors.

    Semicolons take precedence over commas, because with semicolons a single
    author may itself contain a comma ("Smith, J.").

    """
    if ";" in team:
        authors = []
        for author in _split(team, ";"):
            m = AUTHOR_INITIAL_SWAP.search(author)
            if m:
                swapped = f"{m.group(2)} {m.group(1)}"
                normed = norm_author(swapped, norm_punctuation=True)
            else:
                normed = norm_author(author)
            if normed is not None:
                authors.append(normed)
        return authors
    elif AUTHOR_TEAM_DELIMITER.search(team):
        return _split(norm_author(team) or "", AUTHOR_TEAM_DELIMITER)
    elif AUTHOR_TEAM_SPACED.search(team):
        return [
            "".join(f"{initial}." for initial in m.group(2)) + m.group(1)
            for m in AUTHOR_SPACED.finditer(team)
        ]
    else:
        author = norm_author(team)
        return [] if author is None else [author]


def _split(text: str, delimiter: str | regex.Pattern) -> list[str]:
    if isinstance(delimiter, str):
        pieces = text.split(delimiter)
    else:
        pieces = delimiter.split(text)
    return [piece.strip() for piece in pieces if piece.strip()]


def norm_author(author: str, *, norm_punctuation: bool = False) -> str | None:
    if norm_punctuation:
        author = NORM_PUNCTUATIONS.sub(r"\1", author)
    return author.strip() or None


def clean_year(year: str | None) -> str | None:
    # one or two characters are leftovers of a broken match, not a year
    if year is not None and len(year) > 2:
        return year.strip()
    return None
