"""Enums for the fields of a parsed name."""

import enum

HYBRID_MARKER = "×"


class NomCode(enum.IntEnum):
    bacterial = 1
    botanical = 2
    cultivars = 3
    virus = 4
    zoological = 5


class NamePart(enum.IntEnum):
    generic = 1
    infrageneric = 2
    specific = 3
    infraspecific = 4


class NameType(enum.IntEnum):
    scientific = 1
    virus = 2
    hybrid_formula = 3
    informal = 4
    otu = 5
    placeholder = 6
    no_name = 7

    def is_parsable(self) -> bool:
        return self in (NameType.scientific, NameType.informal, NameType.placeholder)


class State(enum.IntEnum):
    # the entire string was parsed to the very end
    complete = 1
    # only a prefix of the string was understood; the rest is in unparsed
    partial = 2
    none = 3

    def is_parsed(self) -> bool:
        return self is not State.none


class Rank(enum.IntEnum):
    """Taxonomic ranks, ordered so that a higher value is a higher rank.

    other and unranked sort above everything else and are excluded from all
    the classification predicates.

    """

    strain = 5
    cultivar = 10
    forma_specialis = 15
    chemoform = 20
    serovar = 25
    phagovar = 30
    morphovar = 35
    chemovar = 40
    biovar = 45
    pathovar = 50
    subform = 55
    form = 60
    subvariety = 65
    variety = 70
    morph = 75
    aberration = 80
    natio = 85
    proles = 90
    infrasubspecific_name = 95
    convariety = 100
    cultivar_group = 105
    subspecies = 110
    grex = 115
    infraspecific_name = 120
    species = 125
    species_aggregate = 130
    infrageneric_name = 135
    subseries = 140
    series = 145
    superseries = 150
    subsection = 155
    section = 160
    supersection = 165
    infragenus = 170
    subgenus = 175
    genus = 180
    suprageneric_name = 185
    infratribe = 190
    subtribe = 195
    tribe = 200
    supertribe = 205
    infrafamily = 210
    subfamily = 215
    family = 220
    superfamily = 225
    parvorder = 230
    infraorder = 235
    suborder = 240
    mirorder = 245
    order = 250
    grandorder = 255
    superorder = 260
    magnorder = 265
    infracohort = 270
    subcohort = 275
    cohort = 280
    supercohort = 285
    infralegion = 290
    sublegion = 295
    legion = 300
    superlegion = 305
    parvclass = 310
    infraclass = 315
    subclass = 320
    class_ = 325
    superclass = 330
    infraphylum = 335
    subphylum = 340
    phylum = 345
    superphylum = 350
    infrakingdom = 355
    subkingdom = 360
    kingdom = 365
    superkingdom = 370
    domain = 375
    other = 400
    unranked = 405

    @property
    def marker(self) -> str | None:
        return _MARKERS.get(self)

    def other_or_unranked(self) -> bool:
        return self in (Rank.other, Rank.unranked)

    def is_suprageneric(self) -> bool:
        return Rank.genus < self < Rank.other

    def is_infrageneric(self) -> bool:
        """Anything below genus, including species and infraspecific ranks."""
        return self < Rank.genus

    def is_infrageneric_strictly(self) -> bool:
        return Rank.species_aggregate < self < Rank.genus

    def is_species_aggregate_or_below(self) -> bool:
        return self <= Rank.species_aggregate

    def is_species_or_below(self) -> bool:
        return self <= Rank.species

    def is_infraspecific(self) -> bool:
        return self < Rank.species

    def is_cultivar_rank(self) -> bool:
        return self in (Rank.cultivar, Rank.cultivar_group, Rank.grex)

    def is_uncomparable(self) -> bool:
        return self in (
            Rank.suprageneric_name,
            Rank.infrageneric_name,
            Rank.infraspecific_name,
            Rank.infrasubspecific_name,
            Rank.other,
            Rank.unranked,
        )

    def restricted_code(self) -> NomCode | None:
        """The only nomenclatural code that uses this rank, if there is one."""
        return _CODE_RESTRICTIONS.get(self)


_MARKERS = {
    Rank.domain: "dom.",
    Rank.superkingdom: "superreg.",
    Rank.kingdom: "reg.",
    Rank.subkingdom: "subreg.",
    Rank.infrakingdom: "infrareg.",
    Rank.superphylum: "superphyl.",
    Rank.phylum: "phyl.",
    Rank.subphylum: "subphyl.",
    Rank.infraphylum: "infraphyl.",
    Rank.superclass: "supercl.",
    Rank.class_: "cl.",
    Rank.subclass: "subcl.",
    Rank.infraclass: "infracl.",
    Rank.parvclass: "parvcl.",
    Rank.superlegion: "superleg.",
    Rank.legion: "leg.",
    Rank.sublegion: "subleg.",
    Rank.infralegion: "infraleg.",
    Rank.supercohort: "supercohort",
    Rank.cohort: "cohort",
    Rank.subcohort: "subcohort",
    Rank.infracohort: "infracohort",
    Rank.magnorder: "magnord.",
    Rank.superorder: "superord.",
    Rank.grandorder: "grandord.",
    Rank.order: "ord.",
    Rank.mirorder: "mirord.",
    Rank.suborder: "subord.",
    Rank.infraorder: "infraord.",
    Rank.parvorder: "parvord.",
    Rank.superfamily: "superfam.",
    Rank.family: "fam.",
    Rank.subfamily: "subfam.",
    Rank.infrafamily: "infrafam.",
    Rank.supertribe: "supertrib.",
    Rank.tribe: "trib.",
    Rank.subtribe: "subtrib.",
    Rank.infratribe: "infratrib.",
    Rank.suprageneric_name: "supragen.",
    Rank.genus: "gen.",
    Rank.subgenus: "subgen.",
    Rank.infragenus: "infrag.",
    Rank.supersection: "supersect.",
    Rank.section: "sect.",
    Rank.subsection: "subsect.",
    Rank.superseries: "superser.",
    Rank.series: "ser.",
    Rank.subseries: "subser.",
    Rank.infrageneric_name: "infragen.",
    Rank.species_aggregate: "agg.",
    Rank.species: "sp.",
    Rank.infraspecific_name: "infrasp.",
    Rank.grex: "gx",
    Rank.subspecies: "subsp.",
    Rank.convariety: "convar.",
    Rank.infrasubspecific_name: "infrasubsp.",
    Rank.proles: "prol.",
    Rank.natio: "natio",
    Rank.aberration: "ab.",
    Rank.morph: "morph",
    Rank.variety: "var.",
    Rank.subvariety: "subvar.",
    Rank.form: "f.",
    Rank.subform: "subf.",
    Rank.pathovar: "pv.",
    Rank.biovar: "biovar",
    Rank.chemovar: "chemovar",
    Rank.morphovar: "morphovar",
    Rank.phagovar: "phagovar",
    Rank.serovar: "serovar",
    Rank.chemoform: "chemoform",
    Rank.forma_specialis: "f.sp.",
    Rank.cultivar: "cv.",
    Rank.strain: "strain",
}

_CODE_RESTRICTIONS = {
    Rank.section: NomCode.botanical,
    Rank.subsection: NomCode.botanical,
    Rank.supersection: NomCode.botanical,
    Rank.series: NomCode.botanical,
    Rank.subseries: NomCode.botanical,
    Rank.superseries: NomCode.botanical,
    Rank.subvariety: NomCode.botanical,
    Rank.subform: NomCode.botanical,
    Rank.proles: NomCode.zoological,
    Rank.natio: NomCode.zoological,
    Rank.aberration: NomCode.zoological,
    Rank.morph: NomCode.zoological,
    Rank.supercohort: NomCode.zoological,
    Rank.cohort: NomCode.zoological,
    Rank.subcohort: NomCode.zoological,
    Rank.infracohort: NomCode.zoological,
    Rank.superlegion: NomCode.zoological,
    Rank.legion: NomCode.zoological,
    Rank.sublegion: NomCode.zoological,
    Rank.infralegion: NomCode.zoological,
    Rank.pathovar: NomCode.bacterial,
    Rank.biovar: NomCode.bacterial,
    Rank.chemovar: NomCode.bacterial,
    Rank.morphovar: NomCode.bacterial,
    Rank.phagovar: NomCode.bacterial,
    Rank.serovar: NomCode.bacterial,
    Rank.chemoform: NomCode.bacterial,
    Rank.forma_specialis: NomCode.bacterial,
    Rank.strain: NomCode.bacterial,
    Rank.cultivar: NomCode.cultivars,
    Rank.cultivar_group: NomCode.cultivars,
    Rank.convariety: NomCode.cultivars,
    Rank.grex: NomCode.cultivars,
}


class Warnings:
    NULL_EPITHET = "null epithet"
    UNUSUAL_CHARACTERS = "unusual characters"
    SUBSPECIES_ASSIGNED = "subspecies assigned"
    LC_MONOMIAL = "lowercase monomial"
    INDET_CULTIVAR = "indetermined cultivar"
    INDET_SPECIES = "indetermined species"
    INDET_INFRASPECIES = "indetermined infraspecies"
    HIGHER_RANK_BINOMIAL = "binomial with higher rank"
    HTML_ENTITIES = "html entities"
    XML_ENTITIES = "xml entities"
    REPL_ENCLOSING_QUOTE = "enclosing quotes removed"
    QUESTION_MARKS_REMOVED = "question marks removed"
    MISSING_GENUS = "missing genus"
    PARTIAL = "partially parsed"
    TIMEOUT = "timeout"
