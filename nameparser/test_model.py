from .constants import NamePart, NameType, Rank, State
from .model import Authorship, ParsedName


def test_notho() -> None:
    pn = ParsedName()
    pn.genus = "×Pyrocrataegus"
    assert pn.genus == "Pyrocrataegus"
    assert pn.notho is NamePart.generic

    pn = ParsedName(genus="Polypodium", specific_epithet="×vulgare")
    assert pn.specific_epithet == "vulgare"
    assert pn.notho is NamePart.specific


def test_rank() -> None:
    pn = ParsedName()
    assert pn.rank is Rank.unranked
    pn.rank = Rank.species
    pn.rank = None  # type: ignore[assignment]
    assert pn.rank is Rank.unranked


def test_authorship() -> None:
    authorship = Authorship()
    assert authorship.is_empty()
    authorship.year = "1753"
    assert authorship.exists()
    authorship.authors = ["L.", "Mill."]
    assert str(authorship) == "L. & Mill., 1753"


def test_predicates() -> None:
    pn = ParsedName(genus="Abies", specific_epithet="alba", infraspecific_epithet="alba")
    assert pn.is_binomial()
    assert pn.is_trinomial()
    assert pn.is_autonym()
    assert pn.terminal_epithet == "alba"
    assert pn.has_name()
    assert not pn.has_authorship()

    assert ParsedName(genus="Abies", rank=Rank.species).is_indetermined()
    assert ParsedName(specific_epithet="alba").is_incomplete()
    assert ParsedName(genus="A.", specific_epithet="alba").is_abbreviated()
    assert not ParsedName(remarks="cf.").has_name()


def test_add_remark() -> None:
    pn = ParsedName()
    pn.add_remark(None)
    pn.add_remark("  ")
    assert pn.remarks is None
    pn.add_remark("aff.")
    pn.add_remark(" cf. ")
    assert pn.remarks == "aff.; cf."


def test_to_json() -> None:
    pn = ParsedName(
        genus="Abies",
        specific_epithet="alba",
        rank=Rank.species,
        type=NameType.scientific,
        state=State.complete,
        combination_authorship=Authorship(authors=["Mill."]),
    )
    data = pn.to_json()
    assert data["genus"] == "Abies"
    assert data["rank"] == "species"
    assert data["type"] == "scientific"
    assert data["state"] == "complete"
    assert data["code"] is None
    assert data["combination_authorship"] == {
        "authors": ["Mill."],
        "ex_authors": [],
        "year": None,
    }
    assert str(pn).startswith("[SCIENTIFIC]")
    assert " G:Abies S:alba R:SPECIES A:Mill." in str(pn)
