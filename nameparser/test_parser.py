from pathlib import Path

import pytest

from .constants import NamePart, NameType, NomCode, Rank, State, Warnings
from .exceptions import ParsingTimeoutError, UnparsableNameError
from .model import ParsedName
from .parser import INFRASPEC_UPPER, NameParser

TESTDATA = Path(__file__).parent / "testdata"

parser = NameParser(timeout_ms=10_000)


def check(
    name: str,
    canonical: str | None,
    *,
    rank: Rank | None = None,
    without_authorship: bool = False,
) -> ParsedName:
    pn = parser.parse(name, rank)
    if without_authorship:
        assert pn.canonical_name_without_authorship() == canonical
    else:
        assert pn.canonical_name() == canonical
    return pn


def assert_unparsable(name: str, name_type: NameType) -> None:
    with pytest.raises(UnparsableNameError) as excinfo:
        parser.parse(name)
    assert excinfo.value.name_type is name_type
    assert excinfo.value.name == name


def read_names(file_name: str) -> list[str]:
    with (TESTDATA / file_name).open() as f:
        lines = (line.split("#", 1)[0].strip() for line in f)
        return [line for line in lines if line]


def test_binomial() -> None:
    pn = check("Abies alba Mill.", "Abies alba Mill.")
    assert pn.genus == "Abies"
    assert pn.specific_epithet == "alba"
    assert pn.combination_authorship.authors == ["Mill."]
    assert pn.rank is Rank.species
    assert pn.type is NameType.scientific
    assert pn.state is State.complete
    assert not pn.doubtful


def test_hybrid_genus() -> None:
    pn = check("×Pyrocrataegus willei L.L. Daniel", "× Pyrocrataegus willei L.L.Daniel")
    assert pn.genus == "Pyrocrataegus"
    assert pn.notho is NamePart.generic
    assert pn.combination_authorship.authors == ["L.L.Daniel"]


def test_notho_infraspecific() -> None:
    pn = check(
        "Polypodium  x vulgare nothosubsp. mantoniae (Rothm.) Schidlay",
        "Polypodium vulgare nothosubsp. mantoniae",
        without_authorship=True,
    )
    assert pn.notho is NamePart.infraspecific
    assert pn.rank is Rank.subspecies
    assert pn.basionym_authorship.authors == ["Rothm."]
    assert pn.combination_authorship.authors == ["Schidlay"]


def test_autonym() -> None:
    pn = check(
        "Diatrypella favacea var. favacea (Fr.) Ces. & De Not.",
        "Diatrypella favacea var. favacea",
    )
    assert pn.is_autonym()
    assert pn.rank is Rank.variety
    assert pn.basionym_authorship.authors == ["Fr."]
    assert pn.combination_authorship.authors == ["Ces.", "De Not."]


def test_uninomial() -> None:
    pn = check("Hormospora De Not.", "Hormospora De Not.")
    assert pn.uninomial == "Hormospora"
    assert pn.genus is None
    for name in ("Boldea", "Boldenaria"):
        pn = check(name, name)
        assert pn.uninomial == name
        assert pn.type is NameType.scientific


def test_infrageneric() -> None:
    pn = check("Arrhoges (Antarctohoges)", "Arrhoges subgen. Antarctohoges", rank=Rank.subgenus)
    assert pn.genus == "Arrhoges"
    assert pn.infrageneric_epithet == "Antarctohoges"
    assert pn.rank is Rank.subgenus

    pn = check("Abies (Sub) alba", "Abies alba")
    assert pn.infrageneric_epithet == "Sub"
    assert pn.canonical_name_complete() == "Abies (Sub) alba"


def test_bracket_author() -> None:
    pn = check("Woodsiaceae (Hooker) Herter", "Woodsiaceae (Hooker) Herter", rank=Rank.family)
    assert pn.uninomial == "Woodsiaceae"
    assert pn.rank is Rank.family
    assert pn.basionym_authorship.authors == ["Hooker"]
    assert pn.combination_authorship.authors == ["Herter"]


def test_latin_endings() -> None:
    pn = NameParser(latin_endings=[]).parse("Arrhoges (Antarctohoges)")
    assert pn.uninomial == "Arrhoges"
    assert pn.infrageneric_epithet is None
    assert pn.basionym_authorship.authors == ["Antarctohoges"]

    pn = NameParser(latin_endings=["oges"]).parse("Arrhoges (Antarctohoges)")
    assert pn.genus == "Arrhoges"
    assert pn.infrageneric_epithet == "Antarctohoges"
    assert pn.basionym_authorship.is_empty()


def test_external_rank() -> None:
    pn = check("Lepidoptera Hooker", "Lepidoptera spec.", rank=Rank.species)
    assert pn.genus == "Lepidoptera"
    assert pn.uninomial is None
    assert not pn.has_authorship()
    assert pn.type is NameType.informal

    pn = check("Lepidoptera alba DC.", "Lepidoptera alba subsp.", rank=Rank.subspecies)
    assert not pn.has_authorship()

    pn = parser.parse("Abies alba", Rank.genus)
    assert pn.doubtful
    assert Warnings.HIGHER_RANK_BINOMIAL in pn.warnings


def test_indetermined() -> None:
    pn = check("Polygonum spec.", "Polygonum spec.")
    assert pn.type is NameType.informal
    assert pn.rank is Rank.species
    assert Warnings.INDET_SPECIES in pn.warnings

    pn = check("Polygonum vulgaris ssp.", "Polygonum vulgaris subsp.")
    assert pn.type is NameType.informal
    assert pn.rank is Rank.subspecies


def test_subspecies_assigned() -> None:
    pn = check("Abies alba sp. alpina", "Abies alba subsp. alpina")
    assert pn.rank is Rank.subspecies
    assert Warnings.SUBSPECIES_ASSIGNED in pn.warnings


def test_otu() -> None:
    for name in ("BOLD:ACW2100", "Festuca sp. BOLD:ACW2100"):
        pn = parser.parse(name)
        assert pn.uninomial == "BOLD:ACW2100"
        assert pn.type is NameType.otu
        assert pn.rank is Rank.species
        assert pn.state is State.complete


def test_placeholder_genus() -> None:
    pn = check("Missing penchinati Bourguignat, 1870", "? penchinati", without_authorship=True)
    assert pn.genus == "?"
    assert pn.type is NameType.placeholder
    assert pn.combination_authorship.year == "1870"


def test_missing_genus() -> None:
    pn = check(
        "denheyeri Eghbalian, Khanjani and Ueckermann in Eghbalian, Khanjani & Ueckermann, 2017",
        "? denheyeri",
        without_authorship=True,
    )
    assert pn.combination_authorship.authors == ["Eghbalian", "Khanjani", "Ueckermann"]
    assert pn.combination_authorship.year == "2017"
    assert pn.type is NameType.placeholder
    assert Warnings.MISSING_GENUS in pn.warnings
    assert pn.remarks is not None


def test_nomenclatural_notes() -> None:
    pn = parser.parse("Gen.nov.")
    assert pn.type is NameType.placeholder
    assert pn.rank is Rank.genus
    assert pn.state is State.complete
    assert pn.nomenclatural_notes == "Gen.nov."

    pn = parser.parse("Gen.nov. sp.nov.")
    assert pn.rank is Rank.species
    assert pn.nomenclatural_notes == "Gen.nov. sp.nov."

    pn = parser.parse("Abies alba Mill., nom. illeg.")
    assert pn.nomenclatural_notes == "nom.illeg."
    assert pn.combination_authorship.authors == ["Mill."]
    assert pn.canonical_name() == "Abies alba Mill."


def test_cultivars() -> None:
    pn = check("Abutilon 'Kentish Belle'", "Abutilon 'Kentish Belle'")
    assert pn.genus == "Abutilon"
    assert pn.uninomial is None
    assert not pn.is_incomplete()
    assert pn.warnings == []
    assert pn.rank is Rank.cultivar
    assert pn.code is NomCode.cultivars

    pn = check("Acer campestre L. cv. 'nanum'", "Acer campestre 'nanum'", without_authorship=True)
    assert pn.cultivar_epithet == "nanum"
    assert pn.combination_authorship.authors == ["L."]

    pn = check("Primula Border Auricula Group", "Primula Border Auricula Group")
    assert pn.rank is Rank.cultivar_group
    assert pn.cultivar_epithet == "Border Auricula"
    assert pn.genus == "Primula"
    assert pn.warnings == []

    pn = check("Paphiopedilum Sorel grex", "Paphiopedilum Sorel gx")
    assert pn.rank is Rank.grex
    assert pn.genus == "Paphiopedilum"


def test_informal() -> None:
    pn = check(
        "Hexaconthium pachydermum form A Cortese & Bjørklund 1998",
        "Hexaconthium pachydermum f. A",
        without_authorship=True,
    )
    assert pn.infraspecific_epithet == "A"
    assert pn.rank is Rank.form
    assert pn.type is NameType.informal

    pn = parser.parse("Trisulcus aff. nana (Popofsky, 1913), Petrushevskaya, 1971")
    assert pn.type is NameType.informal
    assert pn.specific_epithet == "nana"
    assert pn.basionym_authorship.authors == ["Popofsky"]
    assert pn.basionym_authorship.year == "1913"
    assert pn.combination_authorship.authors == ["Petrushevskaya"]
    assert pn.combination_authorship.year == "1971"
    assert pn.remarks == "aff."


def test_strain() -> None:
    pn = check("Advenella kashmirensis W13003", "Advenella kashmirensis W13003")
    assert pn.strain == "W13003"
    assert pn.type is NameType.informal
    assert pn.code is NomCode.bacterial

    pn = check("Advenella kashmirensis W3003", "Advenella kashmirensis W3003")
    assert pn.strain == "W3003"
    assert pn.type is NameType.informal


def test_candidatus() -> None:
    pn = check(
        '"Candidatus Phytoplasma allocasuarinae"', '"Candidatus Phytoplasma allocasuarinae"'
    )
    assert pn.candidatus
    assert pn.genus == "Phytoplasma"
    assert pn.code is NomCode.bacterial


def test_sensu() -> None:
    pn = check("Abies alba sensu Smith", "Abies alba")
    assert pn.taxonomic_note == "sensu Smith"
    assert pn.canonical_name_complete() == "Abies alba sensu Smith"


def test_extinct() -> None:
    pn = check("†Abies alba", "Abies alba")
    assert pn.genus == "Abies"


def test_doubtful() -> None:
    pn = parser.parse("Abies alba?")
    assert pn.doubtful
    assert Warnings.QUESTION_MARKS_REMOVED in pn.warnings

    pn = parser.parse("Abies null L.")
    assert pn.doubtful
    assert Warnings.NULL_EPITHET in pn.warnings

    pn = parser.parse("Abies alba L. {1753}")
    assert pn.doubtful
    assert pn.specific_epithet == "alba"
    assert Warnings.UNUSUAL_CHARACTERS in pn.warnings


def test_partial() -> None:
    pn = parser.parse("Abies alba 1887 67890")
    assert pn.state is State.partial
    assert pn.unparsed == "67890"
    assert pn.combination_authorship.year == "1887"
    assert pn.doubtful
    assert Warnings.PARTIAL in pn.warnings


def test_unparsable() -> None:
    assert_unparsable("[unassigned] Cladobranchia", NameType.placeholder)
    assert_unparsable("Biota incertae sedis", NameType.placeholder)
    assert_unparsable("Unaccepted", NameType.placeholder)
    assert_unparsable("uncultured Vibrio sp.", NameType.placeholder)
    assert_unparsable("Salix aurita L. × S. caprea L.", NameType.hybrid_formula)
    assert_unparsable("Tobacco mosaic virus", NameType.virus)
    assert_unparsable("1234", NameType.no_name)
    assert_unparsable("", NameType.no_name)


def test_timeout() -> None:
    impatient = NameParser(timeout_ms=0)
    with pytest.raises(ParsingTimeoutError) as excinfo:
        impatient.parse("Abies alba Mill.")
    assert not isinstance(excinfo.value, UnparsableNameError)
    assert excinfo.value.name == "Abies alba Mill."

    pn = impatient.parse_quietly("Abies alba Mill.")
    assert pn.state is State.none
    assert pn.type is NameType.scientific
    assert Warnings.TIMEOUT in pn.warnings


def test_parse_quietly() -> None:
    pn = parser.parse_quietly("Biota incertae sedis", Rank.species)
    assert pn.state is State.none
    assert pn.type is NameType.placeholder
    assert pn.unparsed == "Biota incertae sedis"
    assert pn.rank is Rank.species

    pn = parser.parse_quietly("Abies alba Mill.")
    assert pn.state is State.complete


def test_parse_to_canonical() -> None:
    assert parser.parse_to_canonical("Abies alba Mill.") == "Abies alba"
    assert parser.parse_to_canonical("Tobacco mosaic virus") is None
    assert parser.parse_to_canonical("  ") is None
    assert parser.parse_to_canonical_or_scientific_name("Abies alba Mill.") == "Abies alba"
    assert (
        parser.parse_to_canonical_or_scientific_name("Tobacco  mosaic virus")
        == "Tobacco mosaic virus"
    )


def test_corpus_names() -> None:
    for name in read_names("names.txt"):
        pn = parser.parse(name)
        assert pn.state is State.complete, name
        assert not pn.doubtful, name
        assert pn.canonical_name() is not None, name


def test_corpus_doubtful() -> None:
    for name in read_names("doubtful.txt"):
        assert parser.parse(name).doubtful, name


def test_corpus_unparsable() -> None:
    for name in read_names("unparsable.txt"):
        with pytest.raises(UnparsableNameError):
            parser.parse(name)


def test_infraspecific_without_marker() -> None:
    pn = parser.parse("Agaricus compactus sarcocephalus (Fr.) Fr.")
    assert pn.genus == "Agaricus"
    assert pn.specific_epithet == "compactus"
    assert pn.infraspecific_epithet == "sarcocephalus"
    assert pn.rank is Rank.infraspecific_name
    assert pn.basionym_authorship.authors == ["Fr."]
    assert pn.combination_authorship.authors == ["Fr."]


def test_hybrid_formula() -> None:
    assert_unparsable(
        "Asplenium rhizophyllum DC. x ruta-muraria E.L. Braun 1939",
        NameType.hybrid_formula,
    )


def test_round_trip() -> None:
    extra = [
        "Hexaconthium pachydermum form A Cortese & Bjørklund 1998",
        "Abutilon 'Kentish Belle'",
        "Abies alba Mill. 1887 1888 1889",
    ]
    for name in [*read_names("names.txt"), *extra]:
        pn = parser.parse(name)
        canonical = pn.canonical_name_without_authorship()
        assert canonical is not None, name
        reparsed = parser.parse(canonical)
        for attr in (
            "uninomial",
            "genus",
            "specific_epithet",
            "infraspecific_epithet",
            "rank",
        ):
            assert getattr(reparsed, attr) == getattr(pn, attr), (name, attr)


def test_single_letter_infraspecific() -> None:
    pn = check(
        "Hexaconthium pachydermum form A Cortese & Bjørklund 1998",
        "Hexaconthium pachydermum f. A",
        without_authorship=True,
    )
    assert pn.infraspecific_epithet == "A"
    assert pn.rank is Rank.form
    assert INFRASPEC_UPPER.search("Hexaconthium pachydermum f. A")
    # "f." after an author is filius
    assert not INFRASPEC_UPPER.search("Abies alba Hooker f. B")
