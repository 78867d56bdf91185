"""The structured result of parsing a single name."""

from dataclasses import dataclass, field
from typing import Any

from . import formatter
from .constants import HYBRID_MARKER, NameType, NamePart, NomCode, Rank, State

# name parts whose leading hybrid marker is moved into the notho field
_NOTHO_PARTS = {
    "uninomial": NamePart.generic,
    "genus": NamePart.generic,
    "infrageneric_epithet": NamePart.infrageneric,
    "specific_epithet": NamePart.specific,
    "infraspecific_epithet": NamePart.infraspecific,
}


@dataclass
class Authorship:
    authors: list[str] = field(default_factory=list)
    ex_authors: list[str] = field(default_factory=list)
    year: str | None = None

    def exists(self) -> bool:
        return bool(self.authors or self.ex_authors or self.year)

    def is_empty(self) -> bool:
        return not self.exists()

    def __str__(self) -> str:
        return formatter.author_string(self, include_year=True) or ""


@dataclass
class ParsedName:
    """Mutable accumulator filled in by a single parsing job.

    Assigning a value that starts with "×" to any of the name parts strips the
    marker and records the part in notho instead. Assigning None to rank stores
    Rank.unranked.

    """

    combination_authorship: Authorship = field(default_factory=Authorship)
    basionym_authorship: Authorship = field(default_factory=Authorship)
    # for sanctioned fungal names only: Fr. or Pers.
    sanctioning_author: str | None = None
    rank: Rank = Rank.unranked
    code: NomCode | None = None
    # set before the name parts, which may fill it in from a leading hybrid marker
    notho: NamePart | None = None
    uninomial: str | None = None
    genus: str | None = None
    infrageneric_epithet: str | None = None
    specific_epithet: str | None = None
    infraspecific_epithet: str | None = None
    cultivar_epithet: str | None = None
    strain: str | None = None
    candidatus: bool = False
    taxonomic_note: str | None = None
    nomenclatural_notes: str | None = None
    remarks: str | None = None
    # trailing text that was not understood; only set for partial parses
    unparsed: str | None = None
    type: NameType | None = None
    doubtful: bool = False
    state: State = State.none
    warnings: list[str] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _NOTHO_PARTS and value and value.startswith(HYBRID_MARKER):
            value = value[len(HYBRID_MARKER) :]
            super().__setattr__("notho", _NOTHO_PARTS[name])
        elif name == "rank" and value is None:
            value = Rank.unranked
        super().__setattr__(name, value)

    def add_warning(self, *warnings: str) -> None:
        self.warnings.extend(warnings)

    def add_remark(self, remark: str | None) -> None:
        if remark is None or not remark.strip():
            return
        if self.remarks is None:
            self.remarks = remark.strip()
        else:
            self.remarks = f"{self.remarks}; {remark.strip()}"

    @property
    def terminal_epithet(self) -> str | None:
        if self.infraspecific_epithet is None:
            return self.specific_epithet
        return self.infraspecific_epithet

    def has_name(self) -> bool:
        """Whether any name part is set. Remarks and notes do not count."""
        return any(
            part is not None
            for part in (
                self.uninomial,
                self.genus,
                self.infrageneric_epithet,
                self.specific_epithet,
                self.infraspecific_epithet,
                self.strain,
                self.cultivar_epithet,
            )
        )

    def has_authorship(self) -> bool:
        return self.combination_authorship.exists() or self.basionym_authorship.exists()

    def is_autonym(self) -> bool:
        return (
            self.specific_epithet is not None
            and self.infraspecific_epithet is not None
            and self.specific_epithet == self.infraspecific_epithet
        )

    def is_binomial(self) -> bool:
        return self.genus is not None and self.specific_epithet is not None

    def is_trinomial(self) -> bool:
        return self.is_binomial() and self.infraspecific_epithet is not None

    def is_indetermined(self) -> bool:
        """Whether epithets required by the rank are missing, e.g. "Abies sp."."""
        rank = self.rank
        return (
            (
                rank.is_infrageneric_strictly()
                and self.uninomial is None
                and self.infrageneric_epithet is None
                and self.specific_epithet is None
            )
            or (
                rank.is_species_or_below()
                and not rank.is_cultivar_rank()
                and self.specific_epithet is None
            )
            or (
                rank.is_infraspecific()
                and not rank.is_cultivar_rank()
                and self.infraspecific_epithet is None
            )
            or (rank.is_cultivar_rank() and self.cultivar_epithet is None)
        )

    def is_incomplete(self) -> bool:
        """Whether a higher name part is missing, e.g. the genus of a species."""
        return (
            (self.specific_epithet is not None or self.cultivar_epithet is not None)
            and self.genus is None
        ) or (self.infraspecific_epithet is not None and self.specific_epithet is None)

    def is_abbreviated(self) -> bool:
        return any(
            part is not None and part.endswith(".")
            for part in (self.uninomial, self.genus, self.specific_epithet)
        )

    def canonical_name(self) -> str | None:
        return formatter.canonical(self)

    def canonical_name_without_authorship(self) -> str | None:
        return formatter.canonical_without_authorship(self)

    def canonical_name_minimal(self) -> str | None:
        return formatter.canonical_minimal(self)

    def canonical_name_complete(self) -> str | None:
        return formatter.canonical_complete(self)

    def authorship_complete(self) -> str | None:
        return formatter.authorship_complete(self)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for key, value in self.__dict__.items():
            if isinstance(value, Authorship):
                value = {
                    "authors": value.authors,
                    "ex_authors": value.ex_authors,
                    "year": value.year,
                }
            elif isinstance(value, (Rank, NomCode, NamePart, NameType, State)):
                value = value.name
            data[key] = value
        return data

    def __str__(self) -> str:
        parts = []
        if self.type is not None:
            parts.append(f"[{self.type.name.upper()}] ")
        for label, value in [
            ("U", self.uninomial),
            ("G", self.genus),
            ("IG", self.infrageneric_epithet),
            ("S", self.specific_epithet),
            ("R", self.rank.name.upper()),
            ("IS", self.infraspecific_epithet),
            ("CV", self.cultivar_epithet),
            ("STR", self.strain),
            ("A", str(self.combination_authorship)),
            ("BA", str(self.basionym_authorship)),
        ]:
            if value is not None:
                parts.append(f" {label}:{value}")
        return "".join(parts)
