import sqlite3

import pytest

from dictionary_lookup import CpedDictionary

ROWS = [
    ("rāja", "m.", "rāja", 1, "king", "ruler"),
    ("eka", "num.", "eka", 0, "one", ""),
    ("dasa", "num.", "number_dasa", 0, "ten", ""),
    ("nara", "m.", "", 0, "man", ""),
    ("sabba", "adj.", "sabba", 0, "all", ""),
]


@pytest.fixture
def cped_path(tmp_path):
    path = tmp_path / "cped.db"
    conn = sqlite3.connect(str(path))
    conn.execute(
        "CREATE TABLE cped (term TEXT, pos TEXT, paradigm TEXT, in_compounds INTEGER, "
        "meaning TEXT, submeaning TEXT)"
    )
    conn.executemany("INSERT INTO cped VALUES (?, ?, ?, ?, ?, ?)", ROWS)
    conn.commit()
    conn.close()
    return str(path)


def test_missing_database(tmp_path):
    with pytest.raises(FileNotFoundError):
        CpedDictionary(str(tmp_path / "missing.db"))


def test_load_irregular_nouns_filters_paradigms(cped_path):
    nouns = CpedDictionary(cped_path).load_irregular_nouns()
    assert [n["term"] for n in nouns] == ["rāja"]
    assert nouns[0]["in_compounds"] is True
    assert nouns[0]["submeaning"] == "ruler"


def test_lookup(cped_path):
    cped = CpedDictionary(cped_path)
    assert cped.lookup("nara")[0]["meaning"] == "man"
    assert cped.lookup("missing") == []


def test_stats(cped_path):
    stats = CpedDictionary(cped_path).get_stats()
    assert stats == {"total_entries": 5, "with_paradigm": 4, "paradigms": 4}
