from .authorship import clean_year, norm_author, parse_authorship, split_team


def test_split_team() -> None:
    assert split_team("L.") == ["L."]
    assert split_team("Ces.,De Not.&Fr.") == ["Ces.", "De Not.", "Fr."]
    assert split_team("Balsamo M Fregni E Tongiorgi MA") == [
        "M.Balsamo",
        "E.Fregni",
        "M.A.Tongiorgi",
    ]
    assert split_team("Smith, J.; Jones, A.B.") == ["J.Smith", "A.B.Jones"]
    assert split_team("Smith;Jones") == ["Smith", "Jones"]
    assert split_team(" ") == []


def test_norm_author() -> None:
    assert norm_author(" Mill. ") == "Mill."
    assert norm_author("A. B. Jones", norm_punctuation=True) == "A.B.Jones"
    assert norm_author("") is None


def test_clean_year() -> None:
    assert clean_year("1753") == "1753"
    assert clean_year("189?") == "189?"
    assert clean_year("17") is None
    assert clean_year(None) is None


def test_parse_authorship() -> None:
    authorship = parse_authorship("Hook.", "Sm.&Jones", "1800")
    assert authorship.ex_authors == ["Hook."]
    assert authorship.authors == ["Sm.", "Jones"]
    assert authorship.year == "1800"

    authorship = parse_authorship(None, None, None)
    assert authorship.is_empty()
