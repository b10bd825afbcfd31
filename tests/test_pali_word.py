import pytest

from pali_declension import Case, Number
from pali_word import (
    ALL_GENDERS,
    DeclinedWord,
    Gender,
    LexiconError,
    PaliWord,
    ending_class,
    load_pronoun_list,
    sandhi,
)


@pytest.mark.parametrize("first, second, expected", [
    ("eka", "adhika", "ekādhika"),
    ("eka", "uttara", "ekuttara"),
    ("vīsaṃ", "adhika", "vīsamadhika"),
    ("eka", "vīsati", "ekavīsati"),
    ("dvi", "sata", "dvisata"),
    ("dvi", "uttara", "dvuttara"),
    ("", "sata", "sata"),
    ("sata", "", "sata"),
])
def test_sandhi(first, second, expected):
    assert sandhi(first, second) == expected


def test_ending_class():
    assert ending_class("sabba") == "a"
    assert ending_class("vīsaṃ") == "ṃ"
    assert ending_class("") == ""


def test_gender_from_text():
    assert Gender.from_text("m.") is Gender.MASC
    assert Gender.from_text("Feminine") is Gender.FEM
    assert Gender.from_text(" nt. ") is Gender.NEUT
    assert Gender.from_text("adj.") is None


def test_add_paradigm_keeps_order_without_duplicates():
    word = PaliWord("pubba")
    word.add_paradigm("sabba, pubba")
    word.add_paradigm("sabba")
    assert word.paradigm == ["sabba", "pubba"]

    word.set_paradigm("generic")
    assert word.paradigm == ["generic"]


def test_gender_from_pos():
    noun = PaliWord("rāja")
    noun.add_pos_info("m., nt.")
    noun.set_gender_from_pos()
    assert noun.gender == [Gender.MASC, Gender.NEUT]

    adjective = PaliWord("mahanta")
    adjective.add_pos_info("adj.")
    adjective.set_gender_from_pos()
    assert adjective.gender == list(ALL_GENDERS)


def test_feminine_of_a_stem_declines_as_aa_stem():
    word = PaliWord("sabba")
    word.set_all_genders()
    word.set_ending()
    assert word.ending == {Gender.MASC: "a", Gender.FEM: "ā", Gender.NEUT: "a"}


def test_stem_and_suffix():
    word = PaliWord("sabba")
    assert word.stem() == "sabb"
    assert word.with_suffix("o", Gender.MASC) == "sabbo"
    assert word.with_suffix("ā", Gender.FEM) == "sabbā"
    assert PaliWord("vīsaṃ").stem() == "vīsaṃ"


def test_declined_word_deduplicates_analyses():
    declined = DeclinedWord("sabbesaṃ")
    declined.add_analysis("all", Gender.MASC, Number.PLU, Case.GEN)
    declined.add_analysis("all", Gender.MASC, Number.PLU, Case.GEN)
    declined.add_analysis("all", Gender.MASC, Number.PLU, Case.DAT)

    assert len(declined.analyses) == 2
    assert declined.to_dict() == {
        "term": "sabbesaṃ",
        "analyses": [
            {"meaning": "all", "gender": "masc.", "number": "pl.", "case": "Gen."},
            {"meaning": "all", "gender": "masc.", "number": "pl.", "case": "Dat."},
        ],
    }


def test_load_bundled_pronoun_list():
    from pali_declension import DATA_DIR
    import os

    pronouns = load_pronoun_list(os.path.join(DATA_DIR, "pronouns.csv"))
    assert "sabba" in pronouns
    assert pronouns["pubba"].paradigm == ["sabba", "pubba"]
    assert pronouns["ka"].paradigm == ["ka"]
    assert pronouns["sabba"].gender == list(ALL_GENDERS)
    assert pronouns["sabba"].pos_info == ["pron."]


def test_pronoun_list_keeps_colons_in_meaning(tmp_path):
    path = tmp_path / "pronouns.csv"
    path.write_text("# comment\n\nka:ka:who?: what?\n", encoding="utf-8")
    pronouns = load_pronoun_list(str(path))
    assert pronouns["ka"].get_meaning() == "who?: what?"


def test_pronoun_list_errors(tmp_path):
    with pytest.raises(LexiconError):
        load_pronoun_list(str(tmp_path / "missing.csv"))

    path = tmp_path / "pronouns.csv"
    path.write_text("sabba:sabba:all\nbroken line\n", encoding="utf-8")
    with pytest.raises(LexiconError, match=":2:"):
        load_pronoun_list(str(path))
