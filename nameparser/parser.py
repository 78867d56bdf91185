"""Parsing of scientific names into ParsedName objects.

A ParsingJob runs the full pipeline for a single string: cleaning, extraction
of side information (cultivars, notes, strains, sensu references, ...),
normalisation, matching against the name grammar and post-processing of the
result. NameParser is the reusable entry point that creates one job per name.

"""

import functools
import logging
import time
from collections.abc import Iterable
from pathlib import Path
from typing import ClassVar

import regex

from . import grammar
from .authorship import parse_authorship
from .config import get_options
from .constants import NameType, NamePart, NomCode, Rank, State, Warnings
from .exceptions import ParsingTimeoutError, UnparsableNameError
from .grammar import (
    AUTHOR_LETTERS,
    NAME_PATTERN,
    POTENTIAL_NAME_PATTERN,
    RANK_MARKER_ONLY,
    author_letters,
    author_team,
    name_letters,
)
from .model import ParsedName
from .normalizer import norm_note, normalize, normalize_strong, pre_clean
from .ranks import (
    INFRASUBSPECIFIC_MICROBIAL_RANKS,
    NOTHO,
    RANK_MARKER_MAP,
    RANK_MARKER_MAP_INFRAGENERIC,
    RANK_MARKER_MAP_SUPRAGENERIC,
    infer_rank,
    infer_rank_from_marker,
)

logger = logging.getLogger(__name__)

_YEAR_LOOSE = grammar.YEAR_LOOSE.to_regex()

EXTINCT_PATTERN = regex.compile(r"†\s*")
HYBRID_FORMULA_PATTERN = regex.compile(r"[. ]× ")
CULTIVAR = regex.compile(
    r"(?:([. ])cv[. ])?[\"'] ?"
    rf"((?:[{grammar.NAME_LETTERS}]?[{name_letters}]+[- ]?){{1,3}}) ?[\"']"
)
CULTIVAR_GROUP = regex.compile(
    r"(?<!^)\b[\"']?"
    rf"((?:[{grammar.NAME_LETTERS}][{name_letters}]{{2,}}[- ]?){{1,3}})[\"']?"
    r" (Group|Hybrids|Sort|[Gg]rex|gx)\b"
)
# a single capital letter used as infraspecific epithet, e.g. "form A" or "alba f. A";
# "f." after a capitalised author is filius
INFRASPEC_UPPER = regex.compile(r"(?<=forma? |\b[a-z]+ f\. )([A-Z])\b")
STRAIN = regex.compile(r"([a-z]\.?) +([A-Z]+[ -]?(?![12][0-9]{3}\b)[0-9]+T?)$")
IS_VIRUS_PATTERN = regex.compile(
    r"virus(es)?\b|\b(viroid|(bacterio|viro)?phage(in|s)?|(alpha|beta) ?satellites?"
    r"|particles?|ictv$)\b",
    regex.IGNORECASE,
)
# NPV: nuclear polyhedrosis virus, GV: granulovirus
IS_VIRUS_PATTERN_CASE_SENSITIVE = regex.compile(r"\b(?:[MS]?NP|G)V\b")
IS_VIRUS_PATTERN_POSTFAIL = regex.compile(r"\bvector\b", regex.IGNORECASE)
IS_GENE = regex.compile(r"(?:RNA|DNA)[0-9]*(?:\b|_)")
# BOLD BINs like BOLD:AAA0003 and UNITE species hypotheses like SH000003.07FU
OTU_PATTERN = regex.compile(
    r"(BOLD:[0-9A-Z]{7}$|SH[0-9]{6}\.[0-9]{2}FU)", regex.IGNORECASE
)
CANDIDATUS = r"(Candidatus\s|Ca\.)"
IS_CANDIDATUS_PATTERN = regex.compile(CANDIDATUS)
IS_CANDIDATUS_QUOTE_PATTERN = regex.compile(
    rf"\"{CANDIDATUS}(.+)\"", regex.IGNORECASE
)
SUPRA_RANK_PREFIX = regex.compile(
    "^("
    + grammar.alternation(
        {**RANK_MARKER_MAP_SUPRAGENERIC, **RANK_MARKER_MAP_INFRAGENERIC}
    )
    + r")[\. ] *"
)
TYPE_TO_VAR = regex.compile(
    r"\b("
    + "|".join(
        rank.name[: -len("var")]
        for rank in INFRASUBSPECIFIC_MICROBIAL_RANKS
        if rank.name.endswith("var")
    )
    + r")type\b"
)
_MICROBIAL_MARKERS = [
    r"bv\.",
    r"ct\.",
    r"f\.sp\.",
    *(regex.escape(rank.marker or "") for rank in INFRASUBSPECIFIC_MICROBIAL_RANKS),
]
# larva and adult life stage indicators may follow the marker
RANK_MARKER_AT_END = regex.compile(
    rf" (?:{NOTHO})? *(?P<marker>{grammar.alternation(RANK_MARKER_MAP)}"
    rf"|{'|'.join(_MICROBIAL_MARKERS)})\.? ?(?:Ad|Lv)?\.?$"
)
EXTRACT_SENSU = regex.compile(
    r" ?\b("
    r"(?:(?:excl[. ](?:gen|sp|var)|mut.char|p.p)[. ])?"
    r"\(?(?:"
    r"s[. ](?:ampl|l|s|str)[. ]"
    r"|sensu (?:lat|strict|ampl)(?:[uo]|issimo)?"
    r"|(?:auct|emend|fide|non|nec|sec|sensu|according to)[. ][^)]*"
    r")\)?"
    r")"
)
NOV_RANKS = r"((?:[sS]ub)?(?:[fF]am|[gG]en|[sS]s?p(?:ec)?|[vV]ar|[fF](?:orma?)?))"
NOV_RANK_MARKER = regex.compile(rf"\b{NOV_RANKS}[. ]nov\b")
EXTRACT_NOMSTATUS = regex.compile(
    r"[;, ]?\(?\b("
    rf"(?:comb|{NOV_RANKS})[. ]nov\b[. ]?(?:ined[. ])?"
    r"|ined[. ]"
    r"|nom(?:en)?[. ]"
    r"(?:utiq(?:ue)?[. ])?"
    r"(?:ambig|alter|alt|correct|cons|dubium|dub|herb|illeg|invalid|inval|negatum|neg"
    r"|novum|nov|nudum|nud|oblitum|obl|praeoccup|prov|prot|transf|superfl|super|rejic"
    r"|rej)\b[. ]?"
    r"(?:prop[. ]|proposed\b)?"
    r")\)?"
)
EXTRACT_REMARKS = regex.compile(r"\s+(anon\.?)(\s.+)?$")
REPL_IN_REF = regex.compile(rf"[, ]?\b(?:in|IN) ({author_team.to_regex()})")
MANUSCRIPT_NAMES = regex.compile(
    r"\b(indet|spp?)[. ](?:nov\.)?[A-Z0-9][a-zA-Z0-9-]*(?:\(.+?\))?"
)
MANUSCRIPT_SUFFIX = regex.compile(r"\bms\.?$")
REPL_AFF = regex.compile(r"\b(undet|indet|aff|cf)[?.]?\b", regex.IGNORECASE)
NO_LETTERS = regex.compile(r"^[^a-zA-Z]+$")
REMOVE_PLACEHOLDER_AUTHOR = regex.compile(
    rf"\b(?:unknown|unspecified|uncertain|\?)[, ] ?({_YEAR_LOOSE})$", regex.IGNORECASE
)
PLACEHOLDER_GENUS = regex.compile(
    r"^(?:In|Dummy|Missing|Temp|Unknown|Unplaced|Unspecified) (?=[a-z]+)\b"
)
PLACEHOLDER_NAME = (
    r"(?:allocation|awaiting|deleted?|dummy|incertae sedis|mixed|not assigned"
    r"|not stated|place ?holder|temp|tobedeleted|unaccepted|unallocated|unassigned"
    r"|uncertain|unclassified|uncultured|undetermined|unknown|unnamed|unplaced"
    r"|unspecified)"
)
REMOVE_PLACEHOLDER_INFRAGENERIC = regex.compile(
    rf"\b\( ?{PLACEHOLDER_NAME} ?\) ", regex.IGNORECASE
)
PLACEHOLDER = regex.compile(rf"\b{PLACEHOLDER_NAME}\b", regex.IGNORECASE)
DOUBTFUL = regex.compile(
    rf"^[{AUTHOR_LETTERS}{author_letters}×\":;&*+\s,.()\[\]/'`´0-9\-†]+$"
)
DOUBTFUL_NULL = regex.compile(r"\bnull\b")
# the grammar without the end anchor, for partial matches
NAME_PREFIX_PATTERN = regex.compile("^" + grammar.name.to_regex())


class ParsingJob:
    """Parses a single name. Jobs share no state and are not reusable."""

    def __init__(
        self,
        scientific_name: str,
        rank: Rank | None = None,
        *,
        timeout_ms: int = 1000,
        latin_endings: regex.Pattern | None = None,
    ) -> None:
        self.scientific_name = scientific_name
        self.rank = rank
        self.timeout_ms = timeout_ms
        self.latin_endings = latin_endings
        self.pn = ParsedName()
        self.ignore_authorship = False
        self.deadline = 0.0

    def run(self) -> ParsedName:
        start = time.monotonic()
        self.deadline = start + self.timeout_ms / 1000
        name = pre_clean(self.scientific_name, self.pn)

        # known OTU formats before any further cleaning
        m = OTU_PATTERN.search(name)
        if m:
            self.pn.uninomial = m.group(1)
            self.pn.type = NameType.otu
            if self.rank is None or self.rank.other_or_unranked():
                self.pn.rank = Rank.species
            else:
                self.pn.rank = self.rank
            self.pn.state = State.complete
        else:
            self.parse(name)

        elapsed_ms = (time.monotonic() - start) * 1000
        logger.debug("Parsed %r in %.1fms", self.scientific_name, elapsed_ms)
        return self.pn

    def unparsable(self, name_type: NameType) -> UnparsableNameError:
        return UnparsableNameError(name_type, self.scientific_name)

    def parse(self, name: str) -> None:
        pn = self.pn
        name = EXTINCT_PATTERN.sub("", name, count=1)

        # properly quoted candidate names, checked before the quotes are gone
        m = IS_CANDIDATUS_QUOTE_PATTERN.search(self.scientific_name)
        if m:
            pn.candidatus = True
            name = IS_CANDIDATUS_QUOTE_PATTERN.sub(
                lambda match: match.group(2), self.scientific_name, count=1
            )

        name = TYPE_TO_VAR.sub(r"\1var", name)

        # a capital letter as epithet is parsed through a stand-in and restored later
        infraspecific_letter = None
        m = INFRASPEC_UPPER.search(name)
        if m:
            infraspecific_letter = m.group(1)
            name = INFRASPEC_UPPER.sub("vulgaris", name, count=1)
            pn.type = NameType.informal

        if REMOVE_PLACEHOLDER_AUTHOR.search(name):
            name = REMOVE_PLACEHOLDER_AUTHOR.sub(r" \1", name, count=1)
            pn.type = NameType.placeholder
        if REMOVE_PLACEHOLDER_INFRAGENERIC.search(name):
            name = REMOVE_PLACEHOLDER_INFRAGENERIC.sub("", name, count=1)
            pn.type = NameType.placeholder
        if PLACEHOLDER_GENUS.search(name):
            name = PLACEHOLDER_GENUS.sub("? ", name, count=1)
            pn.type = NameType.placeholder
        if PLACEHOLDER.search(name):
            raise self.unparsable(NameType.placeholder)

        if IS_VIRUS_PATTERN.search(name):
            raise self.unparsable(NameType.virus)
        if IS_VIRUS_PATTERN_CASE_SENSITIVE.search(name):
            raise self.unparsable(NameType.virus)

        if IS_GENE.search(name):
            pn.type = NameType.informal

        name = normalize(name)
        logger.debug("Normalised: %s", name)
        if not name:
            raise self.unparsable(NameType.no_name)

        m = SUPRA_RANK_PREFIX.search(name)
        if m:
            pn.rank = RANK_MARKER_MAP[m.group(1).replace(".", "")]
            name = name[m.end() :]

        # cultivars need the quotes, so they go before the strong normalisation
        m = CULTIVAR_GROUP.search(name)
        if m:
            pn.cultivar_epithet = m.group(1)
            name = (name[: m.start()] + " " + name[m.end() :]).strip()
            if m.group(2).lower() in ("grex", "gx"):
                pn.rank = Rank.grex
            else:
                pn.rank = Rank.cultivar_group
        m = CULTIVAR.search(name)
        if m:
            pn.cultivar_epithet = m.group(2)
            name = (name[: m.start()] + (m.group(1) or "") + name[m.end() :]).strip()
            pn.rank = Rank.cultivar

        if NO_LETTERS.search(name):
            raise self.unparsable(NameType.no_name)

        if HYBRID_FORMULA_PATTERN.search(name):
            raise self.unparsable(NameType.hybrid_formula)

        m = IS_CANDIDATUS_PATTERN.search(name)
        if m:
            pn.candidatus = True
            name = name[: m.start()] + name[m.end() :]

        name = self.extract_nomenclatural_notes(name)

        # manuscript names, i.e. unpublished names
        m = MANUSCRIPT_NAMES.search(name)
        if m:
            pn.type = NameType.informal
            pn.add_remark(m.group(0))
            self.set_rank(m.group(1).replace("indet", "sp"))
            name = name[: m.start()] + name[m.end() :]
        if MANUSCRIPT_SUFFIX.search(name):
            pn.type = NameType.informal
            name = MANUSCRIPT_SUFFIX.sub("", name, count=1)

        # strain designations as found in GenBank, e.g. Advenella kashmirensis W13003
        m = STRAIN.search(name)
        if m:
            name = name[: m.start()] + m.group(1) + name[m.end() :]
            pn.type = NameType.informal
            pn.strain = m.group(2)
            logger.debug("Strain: %s", pn.strain)

        m = EXTRACT_SENSU.search(name)
        if m:
            pn.taxonomic_note = norm_note(regex.sub(r"[)(]", "", m.group(1)))
            name = name[: m.start()] + name[m.end() :]
        m = EXTRACT_REMARKS.search(name)
        if m:
            pn.remarks = m.group(1).strip() or None
            name = name[: m.start()] + name[m.end() :]

        # indetermined names; a trailing "f." is more often filius than forma
        m = RANK_MARKER_AT_END.search(name)
        if m and not (name.endswith(" f.") or name.endswith(" f")):
            self.ignore_authorship = True
            if pn.cultivar_epithet is None:
                pn.type = NameType.informal
                self.set_rank(m.group("marker"))
            name = RANK_MARKER_AT_END.sub("", name)

        m = REPL_AFF.search(name)
        if m:
            pn.type = NameType.informal
            pn.add_remark(m.group(0))
            name = REPL_AFF.sub("", name)

        m = self.search(REPL_IN_REF, name)
        if m:
            pn.add_remark(norm_note(m.group(0)))
            name = name[: m.start()] + name[m.end() :]

        preparsing_rank = pn.rank
        name_strongly = normalize_strong(name, pn)
        logger.debug("Strongly normalised: %s", name_strongly)

        if not name_strongly:
            # only notes or remarks with a known rank are a placeholder
            if preparsing_rank.other_or_unranked():
                raise self.unparsable(NameType.no_name)
            pn.state = State.complete
            pn.type = NameType.placeholder
            return

        if not self.parse_normalised_name(name_strongly):
            if IS_VIRUS_PATTERN_POSTFAIL.search(name_strongly):
                raise self.unparsable(NameType.virus)
            if not self.parse_prefix(name_strongly):
                if POTENTIAL_NAME_PATTERN.search(name):
                    raise self.unparsable(NameType.scientific)
                raise self.unparsable(NameType.no_name)

        if infraspecific_letter is not None:
            pn.infraspecific_epithet = infraspecific_letter
        # a rank established during preparsing wins over the parsed one
        if not preparsing_rank.other_or_unranked():
            pn.rank = preparsing_rank

        self.determine_name_type(name)
        self.apply_doubtful_flag(self.scientific_name)
        if pn.rank.other_or_unranked():
            pn.rank = infer_rank(pn)
        self.determine_code()

    def extract_nomenclatural_notes(self, name: str) -> str:
        notes = []
        for m in EXTRACT_NOMSTATUS.finditer(name):
            note = m.group(1).strip()
            if note:
                notes.append(note)
                rank_match = NOV_RANK_MARKER.search(note)
                if rank_match:
                    self.set_rank(rank_match.group(1))
        if notes:
            self.pn.nomenclatural_notes = " ".join(notes)
            name = EXTRACT_NOMSTATUS.sub("", name)
        return name

    def remaining_seconds(self) -> float:
        remaining = self.deadline - time.monotonic()
        if remaining <= 0:
            raise ParsingTimeoutError(self.scientific_name, self.timeout_ms)
        return remaining

    def match(self, pattern: regex.Pattern, text: str) -> regex.Match | None:
        try:
            return pattern.match(text, timeout=self.remaining_seconds())
        except TimeoutError:
            raise ParsingTimeoutError(self.scientific_name, self.timeout_ms) from None

    def search(self, pattern: regex.Pattern, text: str) -> regex.Match | None:
        try:
            return pattern.search(text, timeout=self.remaining_seconds())
        except TimeoutError:
            raise ParsingTimeoutError(self.scientific_name, self.timeout_ms) from None

    def parse_normalised_name(self, name: str) -> bool:
        logger.debug("Parse normalised name: %s", name)
        m = self.match(NAME_PATTERN, name)
        if m is None:
            return False
        self.pn.state = State.complete
        self.apply_match(m)
        return True

    def parse_prefix(self, name: str) -> bool:
        """Accepts a leading binomial or trinomial, leaving the rest unparsed."""
        m = self.match(NAME_PREFIX_PATTERN, name)
        if (
            m is None
            or m.end() >= len(name)
            or name[m.end()] != " "
            or m.group("specific") is None
        ):
            return False
        logger.info("%s - matched only part of the name: %s", m.group(0), name)
        pn = self.pn
        pn.state = State.partial
        pn.unparsed = name[m.end() :].strip()
        pn.doubtful = True
        pn.add_warning(Warnings.PARTIAL)
        self.apply_match(m)
        return True

    def apply_match(self, m: regex.Match) -> None:
        pn = self.pn
        if logger.isEnabledFor(logging.DEBUG):
            for group, value in m.groupdict().items():
                if value is not None:
                    logger.debug("  %s: >%s<", group, value)

        # the first word is the genus of a bi- or trinomial or a uninomial
        if (
            m.group("infrageneric_bracket") is not None
            or m.group("infrageneric") is not None
            or m.group("specific") is not None
            or m.group("infraspecific") is not None
            or pn.cultivar_epithet is not None
            or (
                pn.rank.is_species_or_below()
                and pn.rank.restricted_code() is not NomCode.cultivars
            )
        ):
            pn.genus = _trim(m.group("monomial"))
        else:
            pn.uninomial = _trim(m.group("monomial"))

        bracket_found = False
        if m.group("infrageneric_bracket") is not None:
            bracket_found = True
            pn.infrageneric_epithet = _trim(m.group("infrageneric_bracket"))
        elif m.group("infrageneric") is not None:
            self.set_rank(m.group("infrageneric_marker"))
            pn.infrageneric_epithet = _trim(m.group("infrageneric"))

        pn.specific_epithet = _trim(m.group("specific"))
        intermediate = m.group("intermediate")
        if (
            intermediate is not None
            and len(intermediate) > 1
            and "null" not in intermediate
        ):
            # quadrinomial, so it is below subspecies
            pn.rank = Rank.infrasubspecific_name
        if m.group("infraspecific_marker"):
            self.set_rank(m.group("infraspecific_marker"))
        pn.infraspecific_epithet = _trim(m.group("infraspecific"))

        if m.group("microbial_marker") is not None:
            self.set_rank(m.group("microbial_marker"))
            pn.infraspecific_epithet = m.group("microbial")

        self.look_for_irregular_rank_marker()

        # use a rank given by the caller if none was parsed
        rank = self.rank
        if (
            rank is not None
            and not rank.other_or_unranked()
            and pn.rank.other_or_unranked()
        ):
            pn.rank = rank
            if pn.genus is None and rank.is_infrageneric():
                pn.genus = pn.uninomial
                pn.uninomial = None
            if pn.is_indetermined():
                self.ignore_authorship = True

        if not self.ignore_authorship and m.group("authorship") is not None:
            if bracket_found and self.infrageneric_is_author():
                # the bracket holds a basionym author, not a subgenus
                pn.basionym_authorship = parse_authorship(
                    None, pn.infrageneric_epithet, None
                )
                pn.infrageneric_epithet = None
                if pn.specific_epithet is None:
                    pn.uninomial = pn.genus
                    pn.genus = None
                logger.debug("Bracket is a basionym author: %s", pn.basionym_authorship)
            else:
                pn.basionym_authorship = parse_authorship(
                    m.group("bas_ex"), m.group("bas_authors"), m.group("bas_year")
                )
            pn.combination_authorship = parse_authorship(
                m.group("ex"), m.group("authors"), m.group("year")
            )
            if m.group("sanctioning") is not None:
                pn.sanctioning_author = m.group("sanctioning")

        self.check_epithet_vs_author_prefix()

    def infrageneric_is_author(self) -> bool:
        pn = self.pn
        if not pn.basionym_authorship.is_empty() or pn.specific_epithet is not None:
            return False
        if self.rank is not None and not self.rank.other_or_unranked():
            return not self.rank.is_infrageneric_strictly()
        if self.latin_endings is None or pn.infrageneric_epithet is None:
            return True
        return not self.latin_endings.search(pn.infrageneric_epithet)

    def check_epithet_vs_author_prefix(self) -> None:
        """Short epithets may really be an author prefix, e.g. "de" or "van"."""
        pn = self.pn
        if pn.infraspecific_epithet is not None:
            field = "infraspecific_epithet"
        elif pn.specific_epithet is not None:
            field = "specific_epithet"
        else:
            return
        extended_author = f"{getattr(pn, field)} {pn.combination_authorship}"
        if self.match(grammar.AUTHOR_TEAM_PATTERN, extended_author):
            logger.debug("Using %s as author prefix", field)
            setattr(pn, field, None)

    def set_rank(self, marker: str | None) -> None:
        """Sets the rank from a marker, also recording notho ranks like "nothovar."."""
        rank = infer_rank_from_marker(marker)
        if rank is None or rank.other_or_unranked():
            return
        pn = self.pn
        pn.rank = rank
        if marker is not None and marker.lower().startswith(NOTHO):
            if rank.is_infraspecific():
                pn.notho = NamePart.infraspecific
            elif rank is Rank.species:
                pn.notho = NamePart.specific
            elif rank.is_infrageneric():
                pn.notho = NamePart.infrageneric
            elif rank is Rank.genus:
                pn.notho = NamePart.generic

    def look_for_irregular_rank_marker(self) -> None:
        """Turns rank markers parsed as epithets into ranks, e.g. "Abies alba ssp"."""
        pn = self.pn
        if pn.rank.other_or_unranked():
            if pn.infraspecific_epithet is not None and RANK_MARKER_ONLY.match(
                pn.infraspecific_epithet
            ):
                self.set_rank(pn.infraspecific_epithet)
                pn.infraspecific_epithet = None
            if pn.specific_epithet is not None and RANK_MARKER_ONLY.match(
                pn.specific_epithet
            ):
                self.set_rank(pn.specific_epithet)
                pn.specific_epithet = None
        elif pn.rank is Rank.species and pn.infraspecific_epithet is not None:
            # sp. wrongly used as a subspecies marker
            pn.rank = Rank.subspecies
            pn.add_warning(Warnings.SUBSPECIES_ASSIGNED)

    def determine_name_type(self, normalised_name: str) -> None:
        pn = self.pn
        if pn.type is not None and not pn.type.is_parsable():
            return
        rank = pn.rank
        if pn.uninomial is not None and normalised_name[:1].islower():
            # a bare monomial in lower case is suspicious
            pn.add_warning(Warnings.LC_MONOMIAL)
            pn.doubtful = True
            if pn.type is None:
                pn.type = NameType.informal
        elif not rank.other_or_unranked():
            if rank is Rank.cultivar and pn.cultivar_epithet is None:
                pn.add_warning(Warnings.INDET_CULTIVAR)
                pn.type = NameType.informal
            elif (
                rank.is_species_or_below()
                and rank.restricted_code() is not NomCode.cultivars
                and not pn.is_binomial()
            ):
                pn.add_warning(Warnings.INDET_SPECIES)
                pn.type = NameType.informal
            elif (
                rank.is_infraspecific()
                and rank.restricted_code() is not NomCode.cultivars
                and pn.infraspecific_epithet is None
            ):
                pn.add_warning(Warnings.INDET_INFRASPECIES)
                pn.type = NameType.informal
            elif not rank.is_species_aggregate_or_below() and pn.is_binomial():
                pn.add_warning(Warnings.HIGHER_RANK_BINOMIAL)
                pn.doubtful = True

        if pn.type is None:
            if pn.genus == "?" or pn.uninomial == "?":
                pn.type = NameType.placeholder
            else:
                pn.type = NameType.scientific

    def apply_doubtful_flag(self, scientific_name: str) -> None:
        pn = self.pn
        if not DOUBTFUL.search(scientific_name):
            pn.doubtful = True
            pn.add_warning(Warnings.UNUSUAL_CHARACTERS)
        elif pn.type is not None and pn.type.is_parsable():
            if DOUBTFUL_NULL.search(scientific_name):
                pn.doubtful = True
                pn.add_warning(Warnings.NULL_EPITHET)

    def determine_code(self) -> None:
        pn = self.pn
        if pn.code is not None:
            return
        if pn.rank.restricted_code() is not None:
            pn.code = pn.rank.restricted_code()
        elif pn.cultivar_epithet is not None:
            pn.code = NomCode.cultivars
        elif pn.sanctioning_author is not None:
            # sanctioning authors only exist for fungi
            pn.code = NomCode.botanical
        elif pn.type is NameType.virus:
            pn.code = NomCode.virus
        elif pn.candidatus or pn.strain is not None:
            pn.code = NomCode.bacterial


def _trim(text: str | None) -> str | None:
    if text is None:
        return None
    return text.strip() or None


def compile_endings(endings: Iterable[str]) -> regex.Pattern:
    endings = sorted(endings)
    if not endings:
        # never matches
        return regex.compile(r"(?!)")
    return regex.compile(
        "(?:" + "|".join(regex.escape(ending) for ending in endings) + ")$"
    )


class NameParser:
    """Parses scientific names. Instances are stateless and safe to share."""

    latin_endings_pattern: ClassVar[regex.Pattern]
    did_build_lists: ClassVar[bool] = False

    def __init__(
        self, timeout_ms: int | None = None, latin_endings: Iterable[str] | None = None
    ) -> None:
        options = get_options()
        self.timeout_ms = options.timeout_ms if timeout_ms is None else timeout_ms
        if latin_endings is None:
            self.build_lists(options.parserdata_path)
            self.latin_endings = self.latin_endings_pattern
        else:
            self.latin_endings = compile_endings(latin_endings)

    @classmethod
    def build_lists(cls, data_path: Path) -> None:
        if cls.did_build_lists:
            return

        def get_data(file_name: str) -> set[str]:
            path = data_path / file_name
            with path.open() as f:
                lines = (regex.sub(r"#.*$", "", line).strip() for line in f.readlines())
                return {line for line in lines if line}

        cls.latin_endings_pattern = compile_endings(get_data("latin-endings.txt"))
        cls.did_build_lists = True

    def parse(self, name: str | None, rank: Rank | None = None) -> ParsedName:
        """Parses a name, raising UnparsableNameError for names that cannot be parsed.

        rank is the rank of the name if it is known from elsewhere. It helps to
        tell infrageneric names from bracketed authors.

        """
        if name is None or not name.strip():
            raise UnparsableNameError(NameType.no_name, name or "")
        job = ParsingJob(
            name, rank, timeout_ms=self.timeout_ms, latin_endings=self.latin_endings
        )
        return job.run()

    def parse_quietly(self, name: str | None, rank: Rank | None = None) -> ParsedName:
        """Like parse(), but returns a ParsedName with state NONE instead of raising."""
        try:
            return self.parse(name, rank)
        except UnparsableNameError as e:
            pn = ParsedName(type=e.name_type, unparsed=e.name, state=State.none)
            pn.rank = rank
            return pn
        except ParsingTimeoutError as e:
            logger.warning("%s", e)
            pn = ParsedName(type=NameType.scientific, unparsed=e.name, state=State.none)
            pn.rank = rank
            pn.add_warning(Warnings.TIMEOUT)
            return pn

    def parse_to_canonical(
        self, name: str | None, rank: Rank | None = None
    ) -> str | None:
        """The canonical name without authorship, or None if parsing fails."""
        if name is None or not name.strip():
            return None
        try:
            return self.parse(name, rank).canonical_name_without_authorship()
        except UnparsableNameError as e:
            logger.warning("Unparsable name %s: %s", e.name_type.name, name)
        except ParsingTimeoutError as e:
            logger.warning("%s", e)
        return None

    def parse_to_canonical_or_scientific_name(
        self, name: str | None, rank: Rank | None = None
    ) -> str | None:
        """The canonical name, or the name itself with whitespace normalised."""
        if name is None:
            return None
        canonical = self.parse_to_canonical(name, rank)
        if canonical is None:
            return " ".join(name.split()) or None
        return canonical


@functools.cache
def get_name_parser() -> NameParser:
    return NameParser()


def parse(name: str, rank: Rank | None = None) -> ParsedName:
    return get_name_parser().parse(name, rank)
