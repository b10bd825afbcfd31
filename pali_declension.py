"""
Pāli declension tables
Loads noun/pronoun/numeral paradigms and computes case x number tables for
PaliWords, plus the reverse index (surface form -> analyses) for a word class
"""

import json
import os
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pali_word import DeclinedWord, Gender, LexiconError, PaliWord

DATA_DIR = os.getenv('PALI_DATA_DIR', os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data'))
PARADIGM_TABLE = 'paradigms.json'
GENERIC = 'generic'

GENDER_KEYS = {
    'masc': Gender.MASC,
    'fem': Gender.FEM,
    'neut': Gender.NEUT,
}


class Case(Enum):
    """
    Grammatical cases in traditional order

    The seven oblique and direct cases are numbered 1-7; the vocative is an
    eighth row (numbered 0), so declension tables have eight rows.
    """
    NOM = ('Nominative', 'Nom.', '1')
    ACC = ('Accusative', 'Acc.', '2')
    INS = ('Instrumental', 'Ins.', '3')
    DAT = ('Dative', 'Dat.', '4')
    ABL = ('Ablative', 'Abl.', '5')
    GEN = ('Genitive', 'Gen.', '6')
    LOC = ('Locative', 'Loc.', '7')
    VOC = ('Vocative', 'Voc.', '0')

    def __init__(self, label, abbr, num_abbr):
        self.label = label
        self.abbr = abbr
        self.num_abbr = num_abbr


class Number(Enum):
    SING = ('Singular', 'sg.')
    PLU = ('Plural', 'pl.')

    def __init__(self, label, abbr):
        self.label = label
        self.abbr = abbr


NUMBER_KEYS = {
    'sing': Number.SING,
    'plu': Number.PLU,
}

DeclensionTable = Dict[Case, Dict[Number, List[str]]]


@dataclass(frozen=True)
class NounParadigm:
    """Suffix sets for one (paradigm name, ending class, gender)"""
    name: str
    ending: str
    gender: Gender
    endings: Mapping[Tuple[Case, Number], Tuple[str, ...]]
    example: str = ''

    def get_endings(self, case: Case, number: Number) -> List[str]:
        return list(self.endings.get((case, number), ()))


class PaliDeclension:
    """Paradigm table keyed by (name, ending class, gender)"""

    def __init__(self, paradigms: Iterable[NounParadigm]):
        table = {}
        for paradigm in paradigms:
            table[(paradigm.name, paradigm.ending, paradigm.gender)] = paradigm
        self._paradigms = MappingProxyType(table)

    @classmethod
    def load(cls, path: Optional[str] = None) -> 'PaliDeclension':
        """
        Load paradigms from the JSON table

        Args:
            path: Path to paradigms.json (defaults to the bundled data file)

        Raises:
            LexiconError: if the file is missing, not JSON, or an entry is malformed
        """
        path = path or os.path.join(DATA_DIR, PARADIGM_TABLE)
        if not os.path.exists(path):
            raise LexiconError(f"Paradigm table not found: {path}")

        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise LexiconError(f"{path}: invalid JSON: {e}") from e

        paradigms = []
        for index, entry in enumerate(data.get('paradigms', [])):
            paradigms.extend(parse_paradigm_entry(entry, f"{path}#{index}"))

        declension = cls(paradigms)
        print(f"✓ Loaded {len(declension)} paradigms from {os.path.basename(path)}")
        return declension

    def __len__(self):
        return len(self._paradigms)

    def get_noun_paradigm(self, name: str, ending: str, gender: Gender) -> Optional[NounParadigm]:
        return self._paradigms.get((name, ending, gender))

    def keys(self) -> List[Tuple[str, str, Gender]]:
        return list(self._paradigms.keys())


def parse_paradigm_entry(entry: Dict, where: str) -> List[NounParadigm]:
    """Expand one JSON entry into a NounParadigm per listed gender"""
    name = entry.get('name')
    ending = entry.get('ending')
    if not name or not ending:
        raise LexiconError(f"{where}: paradigm needs 'name' and 'ending'")

    genders = []
    for key in entry.get('genders', []):
        if key not in GENDER_KEYS:
            raise LexiconError(f"{where}: unknown gender '{key}'")
        genders.append(GENDER_KEYS[key])
    if not genders:
        raise LexiconError(f"{where}: paradigm '{name}' lists no genders")

    endings = {}
    for number_key, number in NUMBER_KEYS.items():
        cells = entry.get(number_key, {})
        for case_key, suffixes in cells.items():
            try:
                case = Case[case_key.upper()]
            except KeyError:
                raise LexiconError(f"{where}: unknown case '{case_key}'") from None
            if not isinstance(suffixes, list):
                raise LexiconError(f"{where}: {number_key}.{case_key} must be a list")
            endings[(case, number)] = tuple(suffixes)

    frozen = MappingProxyType(endings)
    return [NounParadigm(name, ending, gender, frozen, entry.get('example', '')) for gender in genders]


def resolve_paradigms(word: PaliWord, gender: Gender, declension: PaliDeclension) -> List[Optional[NounParadigm]]:
    """One paradigm per paradigm name of the word, falling back to 'generic'"""
    ending = word.ending.get(gender, '')
    paradigms = []
    for name in word.paradigm:
        paradigm = declension.get_noun_paradigm(name, ending, gender)
        if paradigm is None:
            paradigm = declension.get_noun_paradigm(GENERIC, ending, gender)
        paradigms.append(paradigm)
    return paradigms


def compute_declension(word: PaliWord, gender_index: int, declension: PaliDeclension) -> DeclensionTable:
    """
    Compute the case x number table of a word under one of its genders

    Suffix sets are unioned across all of the word's paradigms (first seen
    first) and attached to the stem. A word whose paradigm cannot be resolved
    gets empty lists in every cell.

    Args:
        word: The word to decline (not modified)
        gender_index: Index into word.gender
        declension: Paradigm table

    Returns:
        Dict of Case -> Number -> list of surface forms
    """
    gender = word.gender[gender_index]
    paradigms = [p for p in resolve_paradigms(word, gender, declension) if p is not None]

    result = {}
    for case in Case:
        term_map = {}
        for number in Number:
            endings = []
            for paradigm in paradigms:
                for suffix in paradigm.get_endings(case, number):
                    if suffix not in endings:
                        endings.append(suffix)
            term_map[number] = [word.with_suffix(suffix, gender) for suffix in endings]
        result[case] = term_map
    return result


def compute_declension_map(words: Iterable[PaliWord], declension: PaliDeclension) -> Dict[str, DeclinedWord]:
    """
    Reverse index of a word class: surface form -> DeclinedWord

    Every form collects each (meaning, gender, number, case) it realises
    across all words and genders of the class.
    """
    output = {}
    for word in words:
        for index, gender in enumerate(word.gender):
            table = compute_declension(word, index, declension)
            for case, number_map in table.items():
                for number, terms in number_map.items():
                    for term in terms:
                        declined = output.get(term)
                        if declined is None:
                            declined = DeclinedWord(term)
                            output[term] = declined
                        declined.add_analysis(word.get_meaning(), gender, number, case)
    return output


def table_to_dict(table: DeclensionTable) -> List[Dict]:
    """JSON-friendly rows, one per case in traditional order"""
    rows = []
    for case, number_map in table.items():
        rows.append({
            'case': case.abbr,
            'case_number': case.num_abbr,
            'singular': number_map.get(Number.SING, []),
            'plural': number_map.get(Number.PLU, []),
        })
    return rows
