"""Adapter producing the flat name records of the older GBIF v1 API."""

import enum
import logging
from dataclasses import dataclass
from typing import Any

from .constants import HYBRID_MARKER, NamePart, NameType, Rank, State
from .exceptions import NameParserError, UnparsableNameError
from .formatter import author_string
from .model import ParsedName
from .parser import NameParser

logger = logging.getLogger(__name__)


class LegacyNameType(enum.IntEnum):
    scientific = 1
    virus = 2
    hybrid = 3
    informal = 4
    cultivar = 5
    candidatus = 6
    otu = 7
    doubtful = 8
    placeholder = 9
    no_name = 10
    blacklisted = 11


_NAME_TYPE_MAP = {
    NameType.scientific: LegacyNameType.scientific,
    NameType.virus: LegacyNameType.virus,
    NameType.hybrid_formula: LegacyNameType.hybrid,
    NameType.informal: LegacyNameType.informal,
    NameType.otu: LegacyNameType.otu,
    NameType.placeholder: LegacyNameType.placeholder,
    NameType.no_name: LegacyNameType.no_name,
}

# ranks that the legacy vocabulary does not have
_RANK_MAP = {
    Rank.supersection: Rank.infrageneric_name,
    Rank.superseries: Rank.infrageneric_name,
}


class LegacyUnparsableError(NameParserError):
    def __init__(self, name_type: LegacyNameType, name: str) -> None:
        super().__init__(f"Unparsable {name_type.name} name: {name}")
        self.name_type = name_type
        self.name = name


@dataclass
class LegacyParsedName:
    scientific_name: str | None = None
    type: LegacyNameType | None = None
    genus_or_above: str | None = None
    infra_generic: str | None = None
    specific_epithet: str | None = None
    infra_specific_epithet: str | None = None
    cultivar_epithet: str | None = None
    notho: NamePart | None = None
    rank: Rank | None = None
    strain: str | None = None
    sensu: str | None = None
    authorship: str | None = None
    year: str | None = None
    bracket_authorship: str | None = None
    bracket_year: str | None = None
    nom_status: str | None = None
    remarks: str | None = None
    parsed: bool = False
    authors_parsed: bool = False

    def canonical_name(self) -> str | None:
        """Genus, epithets and infraspecific rank marker, without authorship."""
        parts = []
        if self.genus_or_above is not None:
            if self.notho is NamePart.generic:
                parts.append(HYBRID_MARKER)
            parts.append(self.genus_or_above)
        if self.specific_epithet is not None:
            if self.notho is NamePart.specific:
                parts.append(HYBRID_MARKER)
            parts.append(self.specific_epithet)
        elif self.infra_generic is not None:
            parts.append(self.infra_generic)
        if self.infra_specific_epithet is not None:
            notho = self.notho is NamePart.infraspecific
            if (
                self.rank is not None
                and self.rank.is_infraspecific()
                and not self.rank.is_uncomparable()
                and self.rank.marker is not None
            ):
                parts.append(f"notho{self.rank.marker}" if notho else self.rank.marker)
            elif notho:
                parts.append(HYBRID_MARKER)
            parts.append(self.infra_specific_epithet)
        if self.cultivar_epithet is not None:
            parts.append(f"'{self.cultivar_epithet}'")
        return " ".join(parts) or None

    def to_json(self) -> dict[str, Any]:
        return {
            key: value.name if isinstance(value, enum.Enum) else value
            for key, value in self.__dict__.items()
        }


def convert_name_type(name_type: NameType | None) -> LegacyNameType:
    if name_type is None:
        return LegacyNameType.doubtful
    return _NAME_TYPE_MAP.get(name_type, LegacyNameType.doubtful)


def convert_rank(rank: Rank | None) -> Rank | None:
    if rank is None:
        return None
    return _RANK_MAP.get(rank, rank)


def convert(
    scientific_name: str, rank: Rank | None, pn: ParsedName
) -> LegacyParsedName:
    legacy = LegacyParsedName(
        scientific_name=scientific_name,
        type=convert_name_type(pn.type),
        genus_or_above=pn.genus if pn.genus is not None else pn.uninomial,
        infra_generic=pn.infrageneric_epithet,
        specific_epithet=pn.specific_epithet,
        infra_specific_epithet=pn.infraspecific_epithet,
        cultivar_epithet=pn.cultivar_epithet,
        notho=pn.notho,
        rank=convert_rank(pn.rank),
        strain=pn.strain,
        sensu=pn.taxonomic_note,
        authorship=author_string(pn.combination_authorship, include_year=False),
        year=pn.combination_authorship.year,
        bracket_authorship=author_string(pn.basionym_authorship, include_year=False),
        bracket_year=pn.basionym_authorship.year,
        nom_status=pn.nomenclatural_notes,
        remarks=pn.remarks,
        parsed=pn.state.is_parsed(),
        authors_parsed=pn.state is State.complete,
    )
    # the legacy API used None instead of unranked
    if legacy.rank is Rank.unranked and rank is not Rank.unranked:
        legacy.rank = None
    return legacy


class LegacyNameParser:
    def __init__(self, parser: NameParser | None = None) -> None:
        self.parser = NameParser() if parser is None else parser

    def parse(self, name: str, rank: Rank | None = None) -> LegacyParsedName:
        try:
            return convert(name, rank, self.parser.parse(name, rank))
        except UnparsableNameError as e:
            raise LegacyUnparsableError(convert_name_type(e.name_type), e.name) from e

    def parse_quietly(self, name: str, rank: Rank | None = None) -> LegacyParsedName:
        try:
            return self.parse(name, rank)
        except LegacyUnparsableError as e:
            return LegacyParsedName(
                scientific_name=name,
                rank=rank,
                type=e.name_type,
                parsed=False,
                authors_parsed=False,
            )

    def parse_to_canonical(
        self, name: str | None, rank: Rank | None = None
    ) -> str | None:
        if not name:
            return None
        try:
            return self.parse(name, rank).canonical_name()
        except LegacyUnparsableError as e:
            logger.warning("Unparsable name %s >>> %s", name, e)
        return None

    def parse_to_canonical_or_scientific_name(
        self, name: str | None, rank: Rank | None = None
    ) -> str | None:
        if not name:
            return None
        canonical = self.parse_to_canonical(name, rank)
        if canonical is None:
            return " ".join(name.split())
        return canonical
