import pytest

from numeral_lexicon import (
    REQUIRED_KEYS,
    NumeralLexicon,
    create_numeral_word,
    numeral_key,
    parse_numeral_value,
)
from pali_word import ALL_GENDERS, Gender, LexiconError


@pytest.fixture(scope="module")
def lexicon():
    return NumeralLexicon.load()


def _write_minimal(path, extra=""):
    lines = [f"w{key}|{key}" for key in REQUIRED_KEYS]
    path.write_text("\n".join(lines) + "\n" + extra, encoding="utf-8")


def test_numeral_key_and_value():
    assert numeral_key(5) == "5e0"
    assert numeral_key(1, 3) == "1e3"
    assert parse_numeral_value("1e3") == (1, 3)
    assert parse_numeral_value("42") == (42, 0)


def test_lookup_tabulated_values(lexicon):
    assert lexicon.lookup(5) == ["pañca"]
    assert lexicon.lookup(2) == ["dvi", "dve"]
    assert lexicon.lookup(20) == ["vīsati", "vīsaṃ"]
    assert lexicon.lookup(1, 3) == ["sahassa"]


def test_lookup_untabulated_value_is_empty(lexicon):
    assert lexicon.lookup(21) == []
    assert lexicon.lookup(19) == []


def test_ordinals(lexicon):
    assert lexicon.lookup_ordinal(1) == ["paṭhama"]
    assert lexicon.lookup_ordinal(6) == ["chaṭṭha"]
    assert lexicon.lookup_ordinal(7) == ["sattama"]
    assert lexicon.lookup_ordinal(10) == ["dasama"]
    assert lexicon.lookup_ordinal(11) == []


def test_ordinal_words_have_meanings(lexicon):
    assert lexicon.ordinal_words["paṭhama"].get_meaning() == "1st"
    assert lexicon.ordinal_words["tatiya"].get_meaning() == "3rd"
    assert lexicon.ordinal_words["catuttha"].get_meaning() == "4th"
    assert lexicon.ordinal_words["dasama"].gender == list(ALL_GENDERS)


def test_tables_are_read_only(lexicon):
    with pytest.raises(TypeError):
        lexicon.cardinals["1e0"] = ("x",)
    with pytest.raises(TypeError):
        lexicon.ordinals["1e0"] = ("x",)


def test_numeral_word_paradigms(lexicon):
    words = lexicon.words
    assert words["eka"].paradigm == ["eka"]
    assert words["catu"].paradigm == ["catu"]
    assert words["pañca"].paradigm == ["pañca"]
    assert words["soḷasa"].paradigm == ["pañca"]
    assert words["vīsati"].paradigm == ["generic"]
    assert words["vīsati"].gender == [Gender.FEM]
    assert words["sata"].gender == [Gender.NEUT]
    assert words["koṭi"].gender == [Gender.FEM]
    assert words["sahassa"].get_meaning() == "1e3"
    assert words["pañca"].get_meaning() == "5"


def test_compound_numeral_word_is_neuter():
    word = create_numeral_word("ekuttara", 101, 0, False)
    assert word.paradigm == ["generic"]
    assert word.gender == [Gender.NEUT]
    assert "nt." in word.pos_info


def test_all_words_lists_cardinals_then_ordinals(lexicon):
    words = lexicon.all_words()
    terms = list(words)
    assert terms.index("eka") < terms.index("paṭhama")
    assert "sattama" in words


def test_missing_file_raises(tmp_path):
    with pytest.raises(LexiconError):
        NumeralLexicon.load(str(tmp_path / "numerals.csv"))


def test_missing_required_entries_raise(tmp_path):
    path = tmp_path / "numerals.csv"
    path.write_text("eka|1\n", encoding="utf-8")
    with pytest.raises(LexiconError, match="2e0"):
        NumeralLexicon.load(str(path))


def test_malformed_line_raises(tmp_path):
    path = tmp_path / "numerals.csv"
    _write_minimal(path, "eka\n")
    with pytest.raises(LexiconError, match="expected term"):
        NumeralLexicon.load(str(path))


def test_non_numeric_value_raises(tmp_path):
    path = tmp_path / "numerals.csv"
    _write_minimal(path, "eka|one\n")
    with pytest.raises(LexiconError, match="invalid numeral value"):
        NumeralLexicon.load(str(path))


def test_minimal_table_loads(tmp_path):
    path = tmp_path / "numerals.csv"
    _write_minimal(path)
    lexicon = NumeralLexicon.load(str(path))
    assert lexicon.lookup(1) == ["w1e0"]
    assert lexicon.lookup_ordinal(7) == ["w7e0ma"]
