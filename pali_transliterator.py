"""
Devanagari to Roman Pāli transliterator
Normalises user input (words and digit strings) to the Roman script used by
the lexicon and paradigm tables; output to other scripts goes through aksharamukha
"""

import unicodedata
from typing import Tuple

from aksharamukha import transliterate as aksh_transliterate

ROMAN_SCHEME = 'IASTPali'

# Devanagari vowels to Roman Pāli
VOWELS = {
    'अ': 'a', 'आ': 'ā', 'इ': 'i', 'ई': 'ī', 'उ': 'u', 'ऊ': 'ū',
    'ए': 'e', 'ओ': 'o'
}

# Devanagari vowel signs (mātrā)
VOWEL_SIGNS = {
    'ा': 'ā', 'ि': 'i', 'ी': 'ī', 'ु': 'u', 'ू': 'ū',
    'े': 'e', 'ो': 'o'
}

CONSONANTS = {
    # Velars
    'क': 'k', 'ख': 'kh', 'ग': 'g', 'घ': 'gh', 'ङ': 'ṅ',
    # Palatals
    'च': 'c', 'छ': 'ch', 'ज': 'j', 'झ': 'jh', 'ञ': 'ñ',
    # Retroflexes
    'ट': 'ṭ', 'ठ': 'ṭh', 'ड': 'ḍ', 'ढ': 'ḍh', 'ण': 'ṇ',
    # Dentals
    'त': 't', 'थ': 'th', 'द': 'd', 'ध': 'dh', 'न': 'n',
    # Labials
    'प': 'p', 'फ': 'ph', 'ब': 'b', 'भ': 'bh', 'म': 'm',
    # Semivowels
    'य': 'y', 'र': 'r', 'ल': 'l', 'ळ': 'ḷ', 'व': 'v',
    # Sibilant and aspirate
    'स': 's', 'ह': 'h'
}

NIGGAHITA_SIGNS = {'ं', 'ँ'}
VIRAMA = '्'

# Letters that exist in Sanskrit Devanagari but not in Pāli
NON_PALI = {
    'ऋ': 'vocalic r', 'ॠ': 'long vocalic r', 'ऌ': 'vocalic l',
    'ऐ': 'ai', 'औ': 'au', 'ृ': 'vocalic r sign', 'ै': 'ai sign', 'ौ': 'au sign',
    'श': 'palatal ś', 'ष': 'retroflex ṣ', 'ः': 'visarga',
}


def detect_script(text: str) -> str:
    """Detect if input is Devanagari or Roman"""
    if any('\u0900' <= c <= '\u097F' for c in text):
        return 'Devanagari'
    return 'Roman'


def devanagari_to_roman(text: str) -> str:
    """
    Convert Devanagari Pāli text to Roman Pāli (ṃ for niggahita)

    Args:
        text: Devanagari text

    Returns:
        Roman transliteration; unknown characters pass through unchanged
    """
    result = []
    i = 0

    while i < len(text):
        char = text[i]

        if char in VOWELS:
            result.append(VOWELS[char])
            i += 1
            continue

        if char in CONSONANTS:
            result.append(CONSONANTS[char])

            if i + 1 < len(text):
                next_char = text[i + 1]

                # Virama - bare consonant
                if next_char == VIRAMA:
                    i += 2
                    continue

                if next_char in VOWEL_SIGNS:
                    result.append(VOWEL_SIGNS[next_char])
                    i += 2
                    continue

            # Inherent a
            result.append('a')
            i += 1
            continue

        if char in NIGGAHITA_SIGNS:
            result.append('ṃ')
            i += 1
            continue

        if char.isdecimal():
            result.append(str(unicodedata.decimal(char)))
            i += 1
            continue

        result.append(char)
        i += 1

    return ''.join(result)


def normalize_digits(text: str) -> str:
    """Turn digits of any script (०१२, ၁၂, ๑๒ ...) into ASCII digits"""
    return ''.join(str(unicodedata.decimal(c)) if c.isdecimal() else c for c in text.strip())


def normalize_term(text: str) -> str:
    """
    Normalise a Pāli word for lookup

    Devanagari is transliterated; the ṁ and ŋ spellings of niggahita used by
    other romanisations become ṃ.
    """
    text = unicodedata.normalize('NFC', text.strip())
    if detect_script(text) == 'Devanagari':
        text = devanagari_to_roman(text)
    return text.replace('ṁ', 'ṃ').replace('ŋ', 'ṃ').lower()


def validate_pali_characters(text: str) -> Tuple[bool, str]:
    """Reject letters that only occur in Sanskrit"""
    for char, desc in NON_PALI.items():
        if char in text:
            return False, f"Invalid character '{char}' ({desc}) - not found in Pāli"
    return True, ""


def to_script(text: str, script: str) -> str:
    """Render Roman Pāli into another script (Devanagari, Sinhala, Burmese, Thai, ...)"""
    if not script or script in ('Roman', ROMAN_SCHEME):
        return text
    return aksh_transliterate.process(ROMAN_SCHEME, script, text)
