from .constants import NomCode, Rank
from .model import ParsedName
from .ranks import RANK_MARKER_MAP, infer_rank, infer_rank_from_marker


def test_rank_order() -> None:
    assert Rank.genus > Rank.subgenus > Rank.species > Rank.subspecies > Rank.variety
    assert Rank.kingdom.is_suprageneric()
    assert not Rank.genus.is_suprageneric()
    assert not Rank.unranked.is_suprageneric()
    assert Rank.section.is_infrageneric_strictly()
    assert not Rank.species.is_infrageneric_strictly()
    assert Rank.species.is_infrageneric()
    assert Rank.variety.is_infraspecific()
    assert not Rank.species.is_infraspecific()
    assert Rank.cultivar_group.is_cultivar_rank()
    assert Rank.infraspecific_name.is_uncomparable()
    assert Rank.other.other_or_unranked()


def test_markers() -> None:
    assert Rank.subspecies.marker == "subsp."
    assert Rank.variety.marker == "var."
    assert Rank.grex.marker == "gx"
    assert Rank.unranked.marker is None
    assert Rank.pathovar.restricted_code() is NomCode.bacterial
    assert Rank.natio.restricted_code() is NomCode.zoological
    assert Rank.species.restricted_code() is None


def test_infer_rank_from_marker() -> None:
    assert infer_rank_from_marker("subsp.") is Rank.subspecies
    assert infer_rank_from_marker("ssp") is Rank.subspecies
    assert infer_rank_from_marker("var.") is Rank.variety
    assert infer_rank_from_marker("nothovar.") is Rank.variety
    assert infer_rank_from_marker("f.sp.") is Rank.forma_specialis
    assert infer_rank_from_marker("race") is Rank.proles
    assert infer_rank_from_marker("sect.") is Rank.section
    assert infer_rank_from_marker("Fam.") is Rank.family
    assert infer_rank_from_marker("notho") is None
    assert infer_rank_from_marker("alba") is None
    assert infer_rank_from_marker(None) is None
    assert all(key == key.lower() and "." not in key for key in RANK_MARKER_MAP)


def test_infer_rank() -> None:
    assert infer_rank(ParsedName(uninomial="Asteraceae")) is Rank.family
    assert infer_rank(ParsedName(uninomial="Pinales")) is Rank.order
    assert infer_rank(ParsedName(uninomial="Asteroideae")) is Rank.subfamily
    assert infer_rank(ParsedName(uninomial="Abies")) is Rank.unranked
    assert infer_rank(ParsedName(genus="Abies", specific_epithet="alba")) is Rank.species
    assert (
        infer_rank(
            ParsedName(genus="Abies", specific_epithet="alba", infraspecific_epithet="x")
        )
        is Rank.infraspecific_name
    )
    assert infer_rank(ParsedName(genus="Abies", infrageneric_epithet="Sub")) is (
        Rank.infrageneric_name
    )
    assert infer_rank(ParsedName(uninomial="Abies", cultivar_epithet="Nana")) is (
        Rank.cultivar
    )
