"""
Pāli lexical entries and word-formation helpers
Provides PaliWord (term + paradigms + genders), DeclinedWord (reverse index entry),
sandhi joining and stem + suffix combination
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

VOWELS = ('a', 'ā', 'i', 'ī', 'u', 'ū', 'e', 'o')

# Short/long pairs used by vowel sandhi
SHORT_VOWEL = {'a': 'a', 'ā': 'a', 'i': 'i', 'ī': 'i', 'u': 'u', 'ū': 'u'}
LONG_VOWEL = {'a': 'ā', 'i': 'ī', 'u': 'ū'}

NIGGAHITA = 'ṃ'


class LexiconError(ValueError):
    """Raised when a lexicon, pronoun list or paradigm table cannot be parsed"""


class Gender(Enum):
    MASC = ('masc.', 'masculine')
    FEM = ('fem.', 'feminine')
    NEUT = ('nt.', 'neuter')

    def __init__(self, abbr, label):
        self.abbr = abbr
        self.label = label

    @classmethod
    def from_text(cls, text: str) -> Optional['Gender']:
        """Map 'm.', 'masc', 'feminine', 'nt.' and the like to a Gender"""
        key = text.strip().lower().rstrip('.')
        if key in ('m', 'masc', 'masculine'):
            return cls.MASC
        if key in ('f', 'fem', 'feminine'):
            return cls.FEM
        if key in ('n', 'nt', 'neut', 'neuter'):
            return cls.NEUT
        return None


ALL_GENDERS = (Gender.MASC, Gender.FEM, Gender.NEUT)


def sandhi(first: str, second: str) -> str:
    """
    Join two Pāli words at a compound boundary

    Rules:
    - like vowels merge into the long vowel (eka + adhika → ekādhika)
    - unlike vowels: the first is elided (eka + uttara → ekuttara)
    - final niggahita becomes m before a vowel (vīsaṃ + adhika → vīsamadhika)
    - anything else is plain concatenation (eka + vīsati → ekavīsati)
    """
    if not first:
        return second
    if not second:
        return first

    last = first[-1]
    head = second[0]

    if head not in VOWELS:
        return first + second

    if last == NIGGAHITA:
        return first[:-1] + 'm' + second

    if last not in VOWELS:
        return first + second

    if last in SHORT_VOWEL and head in SHORT_VOWEL and SHORT_VOWEL[last] == SHORT_VOWEL[head]:
        return first[:-1] + LONG_VOWEL[SHORT_VOWEL[head]] + second[1:]

    return first[:-1] + second


def ending_class(term: str) -> str:
    """Final vowel (or niggahita) of a term, '' for consonant-final terms"""
    if not term:
        return ''
    last = term[-1]
    if last in VOWELS or last == NIGGAHITA:
        return last
    return ''


@dataclass
class PaliWord:
    """A lexical entry: term, paradigm names, genders and meanings"""
    term: str
    paradigm: List[str] = field(default_factory=list)
    gender: List[Gender] = field(default_factory=list)
    ending: Dict[Gender, str] = field(default_factory=dict)
    meaning: List[str] = field(default_factory=list)
    submeaning: List[str] = field(default_factory=list)
    pos_info: List[str] = field(default_factory=list)
    for_compounds: bool = False
    numeric_value: int = 0
    exp_value: int = 0

    def add_paradigm(self, names: str):
        """Add one or more comma-separated paradigm names, keeping order"""
        for name in names.split(','):
            name = name.strip()
            if name and name not in self.paradigm:
                self.paradigm.append(name)

    def set_paradigm(self, names: str):
        self.paradigm = []
        self.add_paradigm(names)

    def add_meaning(self, meaning: str):
        if meaning:
            self.meaning.append(meaning)

    def add_pos_info(self, pos: str):
        if pos and pos not in self.pos_info:
            self.pos_info.append(pos)

    def set_all_genders(self):
        self.gender = list(ALL_GENDERS)

    def set_gender_from_pos(self):
        """
        Derive genders from part-of-speech labels such as 'm.', 'f.', 'nt.' or 'adj.'
        Adjectives and unlabeled words take all three genders
        """
        genders = []
        for pos in self.pos_info:
            for token in pos.replace(',', ' ').split():
                gender = Gender.from_text(token)
                if gender and gender not in genders:
                    genders.append(gender)
        self.gender = genders if genders else list(ALL_GENDERS)

    def set_ending(self):
        """Compute the ending class used for paradigm lookup under each gender"""
        base = ending_class(self.term)
        self.ending = {}
        for gender in self.gender:
            # a-final adjectives, pronouns and ordinals decline as ā-stems in the feminine
            if gender is Gender.FEM and base == 'a':
                self.ending[gender] = 'ā'
            else:
                self.ending[gender] = base

    def get_meaning(self) -> str:
        return self.meaning[0] if self.meaning else ''

    def stem(self) -> str:
        """Term without its final vowel; suffixes carry the stem vowel themselves"""
        if self.term and self.term[-1] in VOWELS:
            return self.term[:-1]
        return self.term

    def with_suffix(self, suffix: str, gender: Gender) -> str:
        """
        Attach a paradigm suffix to the stem of this word

        The stem is shared by all genders (sabba → sabb-o, sabb-ā, sabb-aṃ);
        the gender only selects which paradigm supplied the suffix.
        """
        return self.stem() + suffix


@dataclass
class DeclinedWord:
    """A surface form with every (meaning, gender, number, case) it realises"""
    term: str
    analyses: List[Dict] = field(default_factory=list)

    def add_analysis(self, meaning: str, gender: Gender, number, case):
        analysis = {
            'meaning': meaning,
            'gender': gender,
            'number': number,
            'case': case,
        }
        if analysis not in self.analyses:
            self.analyses.append(analysis)

    def to_dict(self) -> Dict:
        return {
            'term': self.term,
            'analyses': [
                {
                    'meaning': a['meaning'],
                    'gender': a['gender'].abbr,
                    'number': a['number'].abbr,
                    'case': a['case'].abbr,
                }
                for a in self.analyses
            ]
        }


def load_pronoun_list(path: str) -> Dict[str, PaliWord]:
    """
    Load pronouns from a colon-delimited list: term:paradigm[,paradigm]:meaning

    Args:
        path: Path to pronouns.csv

    Returns:
        Dict of term -> PaliWord, in file order
    """
    if not os.path.exists(path):
        raise LexiconError(f"Pronoun list not found: {path}")

    pronouns = {}
    with open(path, encoding='utf-8') as f:
        for line_no, raw in enumerate(f, 1):
            line = raw.strip()
            if not line or line.startswith('#'):
                continue
            items = line.split(':')
            if len(items) < 3 or not items[0] or not items[1]:
                raise LexiconError(f"{path}:{line_no}: expected term:paradigm:meaning, got '{line}'")
            word = PaliWord(items[0])
            word.add_paradigm(items[1])
            word.add_meaning(':'.join(items[2:]).strip())
            word.add_pos_info('pron.')
            word.set_all_genders()
            word.set_ending()
            pronouns[word.term] = word
    return pronouns
