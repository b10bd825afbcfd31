"""
Pāli numeral composer
Synthesises the Pāli word(s) for an arbitrary non-negative integer given as a
digit string, working ones → tens → hundreds → thousands
"""

from typing import Callable, Iterable, List

from numeral_lexicon import NumeralLexicon
from pali_word import sandhi

HUNDRED = 'sata'
THOUSAND = 'sahassa'
INCREASED_BY = 'uttara'
ADDITIONAL = 'adhika'
ONE_LESS = ('ekūna', 'ūna')

# Half-unit words for 150, 250, 350; higher ones are aḍḍha + ordinal
ADDHA_HUNDREDS = ('diyaḍḍha', 'aḍḍhateyya', 'aḍḍhuḍḍha')
ADDHA_PREFIX = 'aḍḍha'
# The half-unit forms are only attested up to this value
ADDHA_CEILING = 860


class NumeralError(ValueError):
    """Raised for digit strings the composer cannot handle"""


def is_compoundable(term: str) -> bool:
    """Forms ending in -ā or -ṃ are inflected and cannot start a compound"""
    return not term.endswith(('ā', 'ṃ'))


def is_addha_unit(term: str) -> bool:
    """Unit words usable before an addha form (no -e, -ā or -ṃ endings)"""
    return is_compoundable(term) and not term.endswith('e')


def unique(terms: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for term in terms:
        if term not in seen:
            seen.add(term)
            result.append(term)
    return result


def combine(firsts: List[str], seconds: List[str], join: Callable[[str, str], str]) -> List[str]:
    """Every first x second pairing (first-major order) joined with the given function"""
    return [join(f, s) for f in firsts for s in seconds]


class NumeralComposer:
    """Build cardinal and ordinal numeral words from a NumeralLexicon"""

    def __init__(self, lexicon: NumeralLexicon):
        self.lexicon = lexicon

    def get_2digit_numeral(self, value: int) -> List[str]:
        """
        Words for 1-99

        Tabulated values are returned as is; x9 values use the one-less-than
        construction on the next ten; the rest join units and tens by sandhi.
        """
        tabulated = self.lexicon.lookup(value)
        if tabulated:
            return tabulated

        if value % 10 == 9:
            return unique(combine(list(ONE_LESS), self.lexicon.lookup(value + 1), sandhi))

        units = self.lexicon.lookup(value % 10)
        tens = self.lexicon.lookup((value // 10) * 10)
        return unique(combine(units, tens, sandhi))

    def get_hundreds(self, hundreds: int) -> List[str]:
        """sata for 100, multiplier + sata (by sandhi) for 200-900"""
        if hundreds == 1:
            return [HUNDRED]
        multipliers = [m for m in self.lexicon.lookup(hundreds) if is_compoundable(m)]
        return unique(sandhi(m, HUNDRED) for m in multipliers)

    def get_3digit_addha(self, value: int) -> List[str]:
        """
        Half-unit forms for values whose tens digit is 5 (150 → diyaḍḍhasata)

        Only produced up to ADDHA_CEILING; above that the source data has no forms.
        """
        if value > ADDHA_CEILING:
            return []
        hundreds, remainder = divmod(value, 100)
        if hundreds == 0 or remainder // 10 != 5:
            return []

        if hundreds <= len(ADDHA_HUNDREDS):
            addhas = [ADDHA_HUNDREDS[hundreds - 1]]
        else:
            addhas = [ADDHA_PREFIX + t for t in self.lexicon.lookup_ordinal(hundreds + 1)]

        units = self.lexicon.lookup(remainder % 10)
        result = []
        for addha in addhas:
            if not units:
                result.append(addha + HUNDRED)
                continue
            for unit in units:
                if not is_addha_unit(unit):
                    continue
                result.append(sandhi(sandhi(unit, INCREASED_BY), addha) + HUNDRED)
        return unique(result)

    def get_3digit_numeral(self, value: int) -> List[str]:
        """Words for 1-999"""
        if value <= 0:
            return []
        hundreds, remainder = divmod(value % 1000, 100)

        lower = self.get_2digit_numeral(remainder) if remainder > 0 else []
        if hundreds == 0:
            return lower

        upper = self.get_hundreds(hundreds)
        if not lower:
            return upper

        compoundable_lower = [f for f in lower if is_compoundable(f)]
        result = combine(upper, compoundable_lower, lambda h, f: sandhi(f, INCREASED_BY) + h)
        result.extend(self.get_3digit_addha(value % 1000))
        return unique(result)

    def get_pali_cardinal(self, digits: str) -> List[str]:
        """
        Pāli cardinal word(s) for a decimal digit string

        Args:
            digits: ASCII digit string, leading zeros allowed

        Returns:
            Ordered list of alternative forms; empty for '' and 0

        Raises:
            NumeralError: for non-digit input or values of a million and above
        """
        if not digits:
            return []
        if not digits.isascii() or not digits.isdigit():
            raise NumeralError(f"Not a decimal number: '{digits}'")

        number = digits.lstrip('0')
        if not number:
            return []

        lower = self.get_3digit_numeral(int(number[-3:]))
        if len(number) <= 3:
            return lower

        upper_value = int(number[:-3])
        if upper_value >= 1000:
            raise NumeralError(f"Numbers of a million and above are not supported: '{digits}'")

        thousands = []
        for s in self.get_3digit_numeral(upper_value):
            if not is_compoundable(s):
                continue
            thousands.append(THOUSAND if s == 'eka' else s + THOUSAND)

        if not lower:
            return unique(thousands)

        compoundable_lower = [f for f in lower if is_compoundable(f)]
        return unique(combine(thousands, compoundable_lower, lambda t, f: sandhi(f, ADDITIONAL) + t))

    def get_pali_ordinal(self, digits: str) -> List[str]:
        """
        Pāli ordinal word(s) for a decimal digit string

        1st-10th come from the ordinal table; above that the compoundable
        cardinal forms take -ma (ekādasa → ekādasama, vīsati → vīsatima).
        """
        if not digits:
            return []
        if not digits.isascii() or not digits.isdigit():
            raise NumeralError(f"Not a decimal number: '{digits}'")
        number = digits.lstrip('0')
        if not number:
            return []
        if int(number) <= 10:
            return self.lexicon.lookup_ordinal(int(number))
        return unique(c + 'ma' for c in self.get_pali_cardinal(number) if is_compoundable(c))
