"""
Pāli numeral lexicon
Loads the cardinal table (term|value[eExponent]) once and exposes read-only
cardinal and ordinal lookups keyed by "{value}e{exponent}"
"""

import os
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pali_word import ALL_GENDERS, Gender, LexiconError, PaliWord

DATA_DIR = os.getenv('PALI_DATA_DIR', os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data'))
NUMERAL_LIST = 'numerals.csv'

# Irregular ordinals; 7th-10th add -ma to the cardinal, higher ones are computed
IRREGULAR_ORDINALS = {
    1: 'paṭhama',
    2: 'dutiya',
    3: 'tatiya',
    4: 'catuttha',
    5: 'pañcama',
    6: 'chaṭṭha',
}

# Keys the composer cannot work without
REQUIRED_KEYS = (
    [f'{n}e0' for n in range(1, 11)]
    + [f'{n}e0' for n in range(20, 100, 10)]
    + ['100e0']
)


def numeral_key(value: int, exponent: int = 0) -> str:
    return f'{value}e{exponent}'


def parse_numeral_value(text: str) -> Tuple[int, int]:
    """
    Parse '5' or '1e3' into (value, exponent)

    Raises:
        ValueError: if either part is not an integer
    """
    if 'e' in text:
        value, exponent = text.split('e', 1)
        return int(value), int(exponent)
    return int(text), 0


def create_numeral_word(term: str, value: int, exponent: int, is_ordinal: bool) -> PaliWord:
    """Build the PaliWord for a numeral, choosing paradigm and genders by value"""
    word = PaliWord(term, numeric_value=value, exp_value=exponent)
    word.add_pos_info('numerals')

    if term.endswith('uttara') or term.endswith('dhika'):
        word.set_paradigm('generic')
        word.add_pos_info('nt.')
        word.gender = [Gender.NEUT]
    elif is_ordinal:
        word.set_paradigm('generic')
        word.gender = list(ALL_GENDERS)
    elif exponent == 0 and value in (1, 2, 3, 4):
        word.set_paradigm({1: 'eka', 2: 'dvi', 3: 'ti', 4: 'catu'}[value])
        word.gender = list(ALL_GENDERS)
    elif exponent == 0 and 5 <= value < 20:
        # pañca-type: plural only, same forms in every gender
        word.set_paradigm('pañca')
        word.gender = list(ALL_GENDERS)
    elif exponent == 0 and 20 <= value < 100:
        word.set_paradigm('generic')
        word.gender = [Gender.FEM]
    else:
        word.set_paradigm('generic')
        word.gender = [Gender.FEM] if term.endswith('i') else [Gender.NEUT]

    word.set_ending()
    return word


class NumeralLexicon:
    """
    Read-only table of Pāli numeral words

    Build it once with NumeralLexicon.load() and pass it to the composer and
    the declension layer.
    """

    def __init__(self, cardinals: Dict[str, List[str]], words: Dict[str, PaliWord], source: str = ''):
        self.source = source
        self._cardinals = MappingProxyType({k: tuple(v) for k, v in cardinals.items()})
        self._words = MappingProxyType(dict(words))

        missing = [k for k in REQUIRED_KEYS if k not in self._cardinals]
        if missing:
            raise LexiconError(f"Numeral lexicon {source or '<memory>'} is missing entries for: {', '.join(missing)}")

        ordinals = {}
        for value, term in IRREGULAR_ORDINALS.items():
            ordinals[numeral_key(value)] = (term,)
        for value in range(7, 11):
            ordinals[numeral_key(value)] = tuple(t + 'ma' for t in self._cardinals[numeral_key(value)])
        self._ordinals = MappingProxyType(ordinals)

        ordinal_words = {}
        for key, terms in ordinals.items():
            value, _ = parse_numeral_value(key)
            for term in terms:
                word = create_numeral_word(term, value, 0, True)
                word.add_meaning(f'{value}th' if value > 3 else ('1st', '2nd', '3rd')[value - 1])
                ordinal_words[term] = word
        self._ordinal_words = MappingProxyType(ordinal_words)

    @classmethod
    def load(cls, path: Optional[str] = None) -> 'NumeralLexicon':
        """
        Load the numeral table from a pipe-delimited file

        Args:
            path: Path to numerals.csv (defaults to the bundled data file)

        Returns:
            Ready-to-use NumeralLexicon

        Raises:
            LexiconError: if the file is missing or a line is malformed
        """
        path = path or os.path.join(DATA_DIR, NUMERAL_LIST)
        if not os.path.exists(path):
            raise LexiconError(f"Numeral list not found: {path}")

        cardinals: Dict[str, List[str]] = {}
        words: Dict[str, PaliWord] = {}
        with open(path, encoding='utf-8') as f:
            for line_no, raw in enumerate(f, 1):
                line = raw.strip()
                if not line or line.startswith('#'):
                    continue
                items = line.split('|')
                if len(items) < 2 or not items[0].strip():
                    raise LexiconError(f"{path}:{line_no}: expected term|value, got '{line}'")
                term = items[0].strip()
                try:
                    value, exponent = parse_numeral_value(items[1].strip())
                except ValueError:
                    raise LexiconError(f"{path}:{line_no}: invalid numeral value '{items[1]}'") from None

                word = create_numeral_word(term, value, exponent, False)
                word.add_meaning(f'{value}e{exponent}' if exponent > 0 else str(value))
                words[term] = word
                cardinals.setdefault(numeral_key(value, exponent), []).append(term)

        lexicon = cls(cardinals, words, source=path)
        print(f"✓ Loaded {len(words)} numeral terms ({len(cardinals)} values) from {os.path.basename(path)}")
        return lexicon

    def lookup(self, value: int, exponent: int = 0) -> List[str]:
        """All tabulated cardinal forms for value x 10^exponent, empty if none"""
        return list(self._cardinals.get(numeral_key(value, exponent), ()))

    def lookup_ordinal(self, value: int) -> List[str]:
        """Tabulated ordinal forms (1st-10th), empty if none"""
        return list(self._ordinals.get(numeral_key(value), ()))

    @property
    def cardinals(self) -> Mapping[str, Tuple[str, ...]]:
        return self._cardinals

    @property
    def ordinals(self) -> Mapping[str, Tuple[str, ...]]:
        return self._ordinals

    @property
    def words(self) -> Mapping[str, PaliWord]:
        """Cardinal numeral words by term"""
        return self._words

    @property
    def ordinal_words(self) -> Mapping[str, PaliWord]:
        return self._ordinal_words

    def all_words(self) -> Dict[str, PaliWord]:
        """Cardinals followed by ordinals, as used for the numeral declension index"""
        merged = dict(self._words)
        merged.update(self._ordinal_words)
        return merged
