"""Lookup tables between textual rank markers and ranks.

All keys are lowercase markers with their dots removed, e.g. "subsp" or "fsp".

"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from .constants import Rank

if TYPE_CHECKING:
    from .model import ParsedName

NOTHO = "notho"

INFRASUBSPECIFIC_MICROBIAL_RANKS = [
    Rank.pathovar,
    Rank.biovar,
    Rank.chemovar,
    Rank.morphovar,
    Rank.phagovar,
    Rank.serovar,
    Rank.chemoform,
    Rank.forma_specialis,
]


def _marker_key(marker: str) -> str:
    return marker.replace(".", "").lower()


def _build_marker_map(
    ranks: Iterable[Rank], extra: Mapping[str, Rank] | None = None
) -> dict[str, Rank]:
    markers = {}
    for rank in ranks:
        if rank.marker is not None:
            markers[_marker_key(rank.marker)] = rank
    if extra is not None:
        markers.update(extra)
    # longest first, so regex alternations built from the keys prefer full words
    return dict(sorted(markers.items(), key=lambda item: (-len(item[0]), item[0])))


RANK_MARKER_MAP_SUPRAGENERIC = _build_marker_map(
    (r for r in Rank if r.is_suprageneric() and r is not Rank.suprageneric_name),
    {
        "class": Rank.class_,
        "order": Rank.order,
        "family": Rank.family,
        "tribe": Rank.tribe,
        "subtribe": Rank.subtribe,
        "subfamily": Rank.subfamily,
        "superfamily": Rank.superfamily,
    },
)

RANK_MARKER_MAP_INFRAGENERIC = _build_marker_map(
    (r for r in Rank if r.is_infrageneric_strictly()),
    {
        "suprasect": Rank.supersection,
        "supsect": Rank.supersection,
        "subgenus": Rank.subgenus,
        "subg": Rank.subgenus,
        "section": Rank.section,
        "subsection": Rank.subsection,
        "series": Rank.series,
        "subseries": Rank.subseries,
    },
)

RANK_MARKER_MAP_INFRASPECIFIC = _build_marker_map(
    (r for r in Rank if r.is_infraspecific()),
    {
        "aberration": Rank.aberration,
        "bv": Rank.biovar,
        "conv": Rank.convariety,
        "ct": Rank.chemoform,
        "fo": Rank.form,
        "form": Rank.form,
        "forma": Rank.form,
        "fsp": Rank.forma_specialis,
        "fspec": Rank.forma_specialis,
        "grex": Rank.grex,
        "nat": Rank.natio,
        "prole": Rank.proles,
        "proles": Rank.proles,
        "race": Rank.proles,
        "ssp": Rank.subspecies,
        "subspec": Rank.subspecies,
        "subfo": Rank.subform,
        "subform": Rank.subform,
        "v": Rank.variety,
    },
)

RANK_MARKER_MAP = _build_marker_map(
    (),
    {
        **RANK_MARKER_MAP_SUPRAGENERIC,
        **RANK_MARKER_MAP_INFRAGENERIC,
        **RANK_MARKER_MAP_INFRASPECIFIC,
        "gen": Rank.genus,
        "genus": Rank.genus,
        "agg": Rank.species_aggregate,
        "aggr": Rank.species_aggregate,
        "sp": Rank.species,
        "spec": Rank.species,
        "species": Rank.species,
        "spp": Rank.species,
    },
)

# checked in order, so longer suffixes come before their tails
_SUFFIX_RANKS = [
    ("mycetidae", Rank.subclass),
    ("phycidae", Rank.subclass),
    ("mycotina", Rank.subphylum),
    ("phytina", Rank.subphylum),
    ("phyceae", Rank.class_),
    ("mycetes", Rank.class_),
    ("mycota", Rank.phylum),
    ("opsida", Rank.class_),
    ("oideae", Rank.subfamily),
    ("aceae", Rank.family),
    ("phyta", Rank.phylum),
    ("oidea", Rank.superfamily),
    ("ineae", Rank.suborder),
    ("anae", Rank.superorder),
    ("ales", Rank.order),
    ("acea", Rank.superfamily),
    ("idae", Rank.family),
    ("inae", Rank.subfamily),
    ("eae", Rank.tribe),
    ("ini", Rank.tribe),
]


def infer_rank_from_marker(marker: str | None) -> Rank | None:
    """Returns the rank for a marker like "subsp.", "var" or "nothovar.", if known."""
    if marker is None:
        return None
    key = _marker_key(marker).strip()
    if key.startswith(NOTHO):
        key = key[len(NOTHO) :].strip()
    if not key:
        return None
    return RANK_MARKER_MAP.get(key)


def infer_rank(pn: "ParsedName") -> Rank:
    """Guesses the rank from the name parts that are populated."""
    if pn.infraspecific_epithet is not None:
        return Rank.infraspecific_name
    elif pn.specific_epithet is not None:
        return Rank.species
    elif pn.infrageneric_epithet is not None:
        return Rank.infrageneric_name
    elif pn.uninomial is not None:
        for suffix, rank in _SUFFIX_RANKS:
            if pn.uninomial.endswith(suffix):
                return rank
    if pn.cultivar_epithet is not None:
        return Rank.cultivar
    if pn.strain is not None:
        return Rank.strain
    return Rank.unranked
