"""Rendering parsed names back into strings.

build_name() exposes every switch; the canonical_* functions are the fixed
combinations used throughout the library.

"""

from typing import TYPE_CHECKING

import regex
from unidecode import unidecode

from .constants import HYBRID_MARKER, NamePart, NomCode, Rank

if TYPE_CHECKING:
    from .model import Authorship, ParsedName

_EPITHET_SEPARATORS = regex.compile(r"[ _-]")
_LIGATURES = {"æ": "ae", "œ": "oe", "Æ": "Ae", "Œ": "Oe"}


def canonical(pn: "ParsedName") -> str | None:
    """The full scientific name with authorship.

    Autonyms are rendered without authorship and subspecies use the subsp.
    marker unless the name falls under the zoological code.

    """
    return build_name(
        pn,
        hybrid_marker=True,
        rank_marker=True,
        authorship=True,
        genus_for_infrageneric=True,
        infrageneric=False,
        decomposition=True,
        ascii_only=False,
        show_indet=True,
        nom_note=False,
        remarks=False,
        show_sensu=False,
        show_cultivar=True,
        show_strain=True,
    )


def canonical_without_authorship(pn: "ParsedName") -> str | None:
    return build_name(
        pn,
        hybrid_marker=True,
        rank_marker=True,
        authorship=False,
        genus_for_infrageneric=True,
        infrageneric=False,
        decomposition=True,
        ascii_only=False,
        show_indet=True,
        nom_note=False,
        remarks=False,
        show_sensu=False,
        show_cultivar=True,
        show_strain=True,
    )


def canonical_minimal(pn: "ParsedName") -> str | None:
    """Only the main name parts in ASCII, e.g. "Abies alba alpina"."""
    return build_name(
        pn,
        hybrid_marker=False,
        rank_marker=False,
        authorship=False,
        genus_for_infrageneric=False,
        infrageneric=False,
        decomposition=True,
        ascii_only=True,
        show_indet=False,
        nom_note=False,
        remarks=False,
        show_sensu=False,
        show_cultivar=False,
        show_strain=False,
    )


def canonical_complete(pn: "ParsedName") -> str | None:
    """Everything, including notes and informal remarks."""
    return build_name(
        pn,
        hybrid_marker=True,
        rank_marker=True,
        authorship=True,
        genus_for_infrageneric=True,
        infrageneric=True,
        decomposition=True,
        ascii_only=False,
        show_indet=True,
        nom_note=True,
        remarks=True,
        show_sensu=True,
        show_cultivar=True,
        show_strain=True,
    )


def authorship_complete(pn: "ParsedName") -> str | None:
    """Basionym and combination authorship including the sanctioning author."""
    return _name_authorship(pn) or None


def author_string(authorship: "Authorship", include_year: bool) -> str | None:
    return _authorship(authorship, include_year) or None


def build_name(
    pn: "ParsedName",
    *,
    hybrid_marker: bool,
    rank_marker: bool,
    authorship: bool,
    genus_for_infrageneric: bool,
    infrageneric: bool,
    decomposition: bool,
    ascii_only: bool,
    show_indet: bool,
    nom_note: bool,
    remarks: bool,
    show_sensu: bool,
    show_cultivar: bool,
    show_strain: bool,
) -> str | None:
    parts: list[str] = []
    if pn.candidatus:
        parts.append('"Candidatus ')

    if pn.uninomial is not None:
        if hybrid_marker and pn.notho is NamePart.generic:
            parts.append(f"{HYBRID_MARKER} ")
        parts.append(pn.uninomial)
    else:
        if pn.infrageneric_epithet is not None:
            if pn.specific_epithet is None:
                # terminal infrageneric name
                if pn.genus is not None and genus_for_infrageneric:
                    parts.append(_genus(pn, hybrid_marker))
                    parts.append(" ")
                    if pn.code is NomCode.zoological:
                        parts.append(f"({pn.infrageneric_epithet})")
                    else:
                        if rank_marker:
                            parts.append(_rank_marker(pn.rank))
                        parts.append(pn.infrageneric_epithet)
                else:
                    parts.append(pn.infrageneric_epithet)
            else:
                if pn.genus is not None:
                    parts.append(_genus(pn, hybrid_marker))
                if infrageneric:
                    parts.append(f" ({pn.infrageneric_epithet})")
        elif pn.genus is not None:
            parts.append(_genus(pn, hybrid_marker))

        if pn.specific_epithet is None:
            if show_indet and not _has_cultivar(pn):
                if pn.rank is Rank.species:
                    parts.append(" spec.")
                    authorship = False
                elif pn.rank.is_infraspecific() and pn.rank.marker is not None:
                    parts.append(f" {pn.rank.marker}")
                    authorship = False
        else:
            parts.append(" ")
            if hybrid_marker and pn.notho is NamePart.specific:
                parts.append(f"{HYBRID_MARKER} ")
            parts.append(_EPITHET_SEPARATORS.sub("-", pn.specific_epithet))

            if pn.infraspecific_epithet is None:
                if (
                    show_indet
                    and pn.rank.is_infraspecific()
                    and pn.rank.marker is not None
                    and not _has_cultivar(pn)
                ):
                    parts.append(f" {pn.rank.marker}")
                    authorship = False
            else:
                parts.append(" ")
                if hybrid_marker and pn.notho is NamePart.infraspecific:
                    if rank_marker and _is_infraspecific_marker(pn.rank):
                        parts.append("notho")
                    else:
                        parts.append(f"{HYBRID_MARKER} ")
                # zoological names do not show subsp.
                if rank_marker and (
                    pn.code is not NomCode.zoological or pn.rank is not Rank.subspecies
                ):
                    if _is_infraspecific_marker(pn.rank):
                        parts.append(_rank_marker(pn.rank))
                parts.append(_EPITHET_SEPARATORS.sub("-", pn.infraspecific_epithet))
                if pn.is_autonym():
                    authorship = False

    if pn.candidatus:
        parts.append('"')

    if authorship and pn.has_authorship():
        parts.append(" ")
        parts.append(_name_authorship(pn))

    if show_strain and pn.strain is not None:
        parts.append(f" {pn.strain}")

    if show_cultivar and pn.cultivar_epithet is not None:
        if pn.rank is Rank.cultivar_group:
            parts.append(f" {pn.cultivar_epithet} Group")
        elif pn.rank is Rank.grex:
            parts.append(f" {pn.cultivar_epithet} gx")
        else:
            parts.append(f" '{pn.cultivar_epithet}'")

    if show_sensu and pn.taxonomic_note is not None:
        parts.append(f" {pn.taxonomic_note}")

    if nom_note and pn.nomenclatural_notes is not None:
        parts.append(f", {pn.nomenclatural_notes}")

    if remarks and pn.remarks is not None:
        parts.append(f" [{pn.remarks}]")

    name = "".join(parts).strip()
    if decomposition:
        name = decompose(name)
    if ascii_only:
        name = unidecode(name)
    return name or None


def decompose(text: str) -> str:
    """Splits ligatures into their letters, e.g. "Æ" becomes "Ae"."""
    for ligature, letters in _LIGATURES.items():
        text = text.replace(ligature, letters)
    return text


def _has_cultivar(pn: "ParsedName") -> bool:
    return pn.rank.is_cultivar_rank() and pn.cultivar_epithet is not None


def _is_infraspecific_marker(rank: Rank) -> bool:
    return rank.is_infraspecific() and not rank.is_uncomparable()


def _rank_marker(rank: Rank) -> str:
    if rank.marker is None:
        return ""
    return f"{rank.marker} "


def _genus(pn: "ParsedName", hybrid_marker: bool) -> str:
    if hybrid_marker and pn.notho is NamePart.generic:
        return f"{HYBRID_MARKER} {pn.genus}"
    return pn.genus or ""


def join_authors(authors: list[str]) -> str:
    if len(authors) > 1:
        return ", ".join(authors[:-1]) + " & " + authors[-1]
    return ", ".join(authors)


def _authorship(authorship: "Authorship", include_year: bool) -> str:
    if not authorship.exists():
        return ""
    text = ""
    if authorship.ex_authors:
        text += join_authors(authorship.ex_authors) + " ex "
    if authorship.authors:
        text += join_authors(authorship.authors)
    if authorship.year is not None and include_year:
        if text:
            text += ", "
        text += authorship.year
    return text


def _name_authorship(pn: "ParsedName") -> str:
    text = ""
    if pn.basionym_authorship.exists():
        text += f"({_authorship(pn.basionym_authorship, True)}) "
    if pn.combination_authorship.exists():
        text += _authorship(pn.combination_authorship, True)
        if pn.sanctioning_author is not None:
            text += f" : {pn.sanctioning_author}"
    return text.strip()
