from pali_transliterator import (
    detect_script,
    devanagari_to_roman,
    normalize_digits,
    normalize_term,
    to_script,
    validate_pali_characters,
)


def test_detect_script():
    assert detect_script("धम्म") == "Devanagari"
    assert detect_script("dhamma") == "Roman"


def test_devanagari_to_roman():
    assert devanagari_to_roman("धम्म") == "dhamma"
    assert devanagari_to_roman("संघ") == "saṃgha"
    assert devanagari_to_roman("सब्बेसं") == "sabbesaṃ"
    assert devanagari_to_roman("पञ्च") == "pañca"


def test_normalize_digits():
    assert normalize_digits(" 250 ") == "250"
    assert normalize_digits("२५०") == "250"
    assert normalize_digits("12a") == "12a"


def test_normalize_term():
    assert normalize_term("Saṁgha") == "saṃgha"
    assert normalize_term("saŋgha") == "saṃgha"
    assert normalize_term(" सब्ब ") == "sabba"


def test_validate_pali_characters():
    assert validate_pali_characters("सब्ब") == (True, "")
    is_valid, message = validate_pali_characters("ऋषि")
    assert not is_valid
    assert "vocalic r" in message


def test_to_script_roman_is_identity():
    assert to_script("ekavīsati", "") == "ekavīsati"
    assert to_script("ekavīsati", "Roman") == "ekavīsati"
    assert to_script("ekavīsati", "IASTPali") == "ekavīsati"


def test_to_script_devanagari():
    rendered = to_script("dhamma", "Devanagari")
    assert detect_script(rendered) == "Devanagari"
