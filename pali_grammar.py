"""
Pāli Grammar Service
Numeral synthesis (cardinals, ordinals) and declension tables for pronouns,
numerals and irregular nouns, served as a JSON API or from the command line
"""

import os
import sys
import threading
from typing import Dict, List, Optional

# Load .env file for local development (ignored on Vercel where env vars are set in dashboard)
from dotenv import load_dotenv
load_dotenv()

from flask import Flask, jsonify, request

from dictionary_lookup import CpedDictionary
from numeral_composer import NumeralComposer, NumeralError
from numeral_lexicon import DATA_DIR, NUMERAL_LIST, NumeralLexicon
from pali_declension import (
    GENERIC,
    PARADIGM_TABLE,
    PaliDeclension,
    compute_declension,
    compute_declension_map,
    table_to_dict,
)
from pali_transliterator import normalize_digits, normalize_term, to_script, validate_pali_characters
from pali_word import ALL_GENDERS, DeclinedWord, Gender, PaliWord, ending_class, load_pronoun_list
from turso_db import TursoDatabase

PRONOUN_LIST = 'pronouns.csv'
CPED_DB = 'cped.db'

WORD_CLASSES = ('pronouns', 'numerals', 'irregular')

# Genders assumed for a bare term, by its ending class
DEFAULT_GENDERS = {
    'a': [Gender.MASC, Gender.NEUT],
    'ā': [Gender.FEM],
    'i': list(ALL_GENDERS),
    'ī': [Gender.MASC, Gender.FEM],
    'u': list(ALL_GENDERS),
    'ū': [Gender.MASC, Gender.FEM],
}


class PaliGrammar:
    """
    Service facade: numeral lexicon, paradigm table and per-class declension indexes
    """

    def __init__(self, data_dir: Optional[str] = None, turso_db: Optional[TursoDatabase] = None,
                 cped_path: Optional[str] = None):
        """
        Initialize the service

        Args:
            data_dir: Directory holding numerals.csv, pronouns.csv and paradigms.json
            turso_db: Turso client for irregular nouns (default: from environment)
            cped_path: Local CPED SQLite fallback (default: CPED_DB_PATH or data_dir/cped.db)
        """
        self.data_dir = data_dir or DATA_DIR
        self.turso_db = turso_db or TursoDatabase()
        self.cped_path = cped_path or os.getenv('CPED_DB_PATH', os.path.join(self.data_dir, CPED_DB))

        self.lexicon = NumeralLexicon.load(os.path.join(self.data_dir, NUMERAL_LIST))
        self.composer = NumeralComposer(self.lexicon)
        self.declension = PaliDeclension.load(os.path.join(self.data_dir, PARADIGM_TABLE))
        self.pronouns = load_pronoun_list(os.path.join(self.data_dir, PRONOUN_LIST))
        print(f"✓ Loaded {len(self.pronouns)} pronouns from {PRONOUN_LIST}")

        # Irregular nouns and the declension indexes are built on first use
        self.irregular_nouns: Optional[Dict[str, PaliWord]] = None
        self.data_source = "none"
        self._declined: Dict[str, Dict[str, DeclinedWord]] = {}
        self._lock = threading.Lock()

    def load_irregular_nouns(self) -> Dict[str, PaliWord]:
        """Load irregular nouns from Turso, with a local SQLite fallback"""
        if self.irregular_nouns is not None:
            return self.irregular_nouns

        rows = []
        if self.turso_db.connect():
            rows = self.turso_db.load_irregular_nouns()
            self.data_source = "turso"
        elif os.path.exists(self.cped_path):
            rows = CpedDictionary(self.cped_path).load_irregular_nouns()
            self.data_source = "local_sqlite"
            print(f"✓ Loaded {len(rows)} irregular nouns from {os.path.basename(self.cped_path)}")
        else:
            print("Warning: No CPED source available, irregular noun declension disabled")

        nouns = {}
        for row in rows:
            word = self.create_irregular_word(row)
            nouns[word.term] = word
        self.irregular_nouns = nouns
        return nouns

    def create_irregular_word(self, row: Dict) -> PaliWord:
        word = PaliWord(row['term'])
        word.set_paradigm(row['paradigm'])
        word.add_pos_info(row['pos'])
        word.for_compounds = row['in_compounds']
        word.add_meaning(row['meaning'])
        if row['submeaning']:
            word.submeaning.append(row['submeaning'])
        word.set_gender_from_pos()
        word.set_ending()
        return word

    def get_words(self, word_class: str) -> Dict[str, PaliWord]:
        if word_class == 'pronouns':
            return self.pronouns
        if word_class == 'numerals':
            return self.lexicon.all_words()
        if word_class == 'irregular':
            return self.load_irregular_nouns()
        raise ValueError(f"Unknown word class '{word_class}', expected one of {', '.join(WORD_CLASSES)}")

    def get_declined_map(self, word_class: str) -> Dict[str, DeclinedWord]:
        """Reverse declension index for a word class, computed once per process"""
        declined = self._declined.get(word_class)
        if declined is not None:
            return declined

        with self._lock:
            if word_class not in self._declined:
                words = self.get_words(word_class)
                self._declined[word_class] = compute_declension_map(words.values(), self.declension)
                print(f"✓ Computed {len(self._declined[word_class])} declined forms for {word_class}")
            return self._declined[word_class]

    def find_word(self, term: str) -> Optional[PaliWord]:
        """A known pronoun or numeral by its term"""
        if term in self.pronouns:
            return self.pronouns[term]
        return self.lexicon.all_words().get(term)

    def find_headword(self, term: str) -> Optional[PaliWord]:
        """
        A CPED headword with its paradigm and genders

        Uses Turso when configured, otherwise the local SQLite copy. Entries
        with a paradigm are preferred; one without falls back to 'generic'.
        """
        if self.turso_db.is_configured() and (self.turso_db.connected or self.turso_db.connect()):
            entries = self.turso_db.lookup_headword(term)
        elif os.path.exists(self.cped_path):
            entries = CpedDictionary(self.cped_path).lookup(term)
        else:
            return None

        if not entries:
            return None
        entry = next((e for e in entries if e['paradigm']), entries[0])
        word = self.create_irregular_word(entry)
        if not word.paradigm:
            word.set_paradigm(GENERIC)
        return word

    def build_word(self, term: str, paradigm: Optional[str] = None, gender: Optional[str] = None) -> PaliWord:
        """A PaliWord for an arbitrary term with the given (or default) paradigm and genders"""
        word = PaliWord(term)
        word.set_paradigm(paradigm or GENERIC)

        genders = []
        if gender:
            for token in gender.split(','):
                g = Gender.from_text(token)
                if g is None:
                    raise ValueError(f"Unknown gender '{token.strip()}'")
                if g not in genders:
                    genders.append(g)
        word.gender = genders or list(DEFAULT_GENDERS.get(ending_class(term), ALL_GENDERS))
        word.set_ending()
        return word

    def get_cardinal(self, number: str, script: Optional[str] = None) -> Dict:
        digits = normalize_digits(number)
        terms = self.composer.get_pali_cardinal(digits)
        result = {
            'success': True,
            'number': digits,
            'terms': terms,
        }
        if script:
            result['script'] = script
            result['script_terms'] = [to_script(t, script) for t in terms]
        return result

    def get_ordinal(self, number: str, script: Optional[str] = None) -> Dict:
        digits = normalize_digits(number)
        terms = self.composer.get_pali_ordinal(digits)
        result = {
            'success': True,
            'number': digits,
            'terms': terms,
        }
        if script:
            result['script'] = script
            result['script_terms'] = [to_script(t, script) for t in terms]
        return result

    def decline(self, text: str, paradigm: Optional[str] = None, gender: Optional[str] = None,
                script: Optional[str] = None) -> Dict:
        """
        Declension table(s) of a word, one per gender

        Known pronouns and numerals use their own paradigms unless a paradigm
        is given explicitly; other terms are looked up as CPED headwords
        before falling back to the ending-based default.
        """
        is_valid, error_msg = validate_pali_characters(text)
        if not is_valid:
            return {
                'success': False,
                'error': error_msg
            }

        term = normalize_term(text)
        word = None
        source = 'paradigm'
        if not paradigm and not gender:
            word = self.find_word(term)
            source = 'lexicon'
            if word is None:
                word = self.find_headword(term)
                source = 'cped'
        if word is None:
            word = self.build_word(term, paradigm, gender)
            source = 'paradigm'

        tables = []
        for index, g in enumerate(word.gender):
            rows = table_to_dict(compute_declension(word, index, self.declension))
            if script:
                for row in rows:
                    row['singular'] = [to_script(t, script) for t in row['singular']]
                    row['plural'] = [to_script(t, script) for t in row['plural']]
            tables.append({
                'gender': g.abbr,
                'ending': word.ending.get(g, ''),
                'rows': rows,
            })

        return {
            'success': True,
            'term': term,
            'source': source,
            'paradigm': list(word.paradigm),
            'meaning': word.get_meaning(),
            'tables': tables,
        }

    def lookup_declined(self, word_class: str, text: str) -> Dict:
        """Which words, genders, numbers and cases a surface form belongs to"""
        form = normalize_term(text)
        declined = self.get_declined_map(word_class).get(form)
        if declined is None:
            return {
                'success': True,
                'form': form,
                'found': False,
                'analyses': [],
            }
        result = declined.to_dict()
        return {
            'success': True,
            'form': form,
            'found': True,
            'analyses': result['analyses'],
        }

    def paradigm_list(self) -> List[Dict]:
        return [
            {'name': name, 'ending': ending, 'gender': gender.abbr}
            for name, ending, gender in self.declension.keys()
        ]


# Initialize service
grammar = PaliGrammar()

app = Flask(__name__)


def _cors(response):
    response.headers.add('Access-Control-Allow-Origin', '*')
    return response


def _preflight():
    response = jsonify({'status': 'ok'})
    response.headers.add('Access-Control-Allow-Origin', '*')
    response.headers.add('Access-Control-Allow-Headers', 'Content-Type')
    response.headers.add('Access-Control-Allow-Methods', 'GET, POST')
    return response


def _request_data() -> Dict:
    """Parameters from query string, JSON body or form body"""
    data = dict(request.args.items())
    body = request.get_json(force=True, silent=True)
    if isinstance(body, dict):
        data.update(body)
    elif request.form:
        data.update(request.form.to_dict())
    return data


def _error(message: str, status: int):
    return _cors(jsonify({
        'success': False,
        'error': message
    })), status


@app.route('/', methods=['GET'])
def index():
    return _cors(jsonify({
        'service': 'pali-grammar',
        'data_source': grammar.data_source,
        'numeral_terms': len(grammar.lexicon.words),
        'pronouns': len(grammar.pronouns),
        'paradigms': len(grammar.declension),
        'word_classes': list(WORD_CLASSES),
    }))


@app.route('/api/cardinal', methods=['GET', 'POST', 'OPTIONS'])
def api_cardinal():
    """Pāli cardinal word(s) for a number"""
    if request.method == 'OPTIONS':
        return _preflight()

    data = _request_data()
    number = str(data.get('number', '')).strip()
    if not number:
        return _error('Please provide a number', 400)

    try:
        return _cors(jsonify(grammar.get_cardinal(number, data.get('script'))))
    except NumeralError as e:
        return _error(str(e), 400)
    except Exception as e:
        return _error(f'Numeral error: {str(e)}', 500)


@app.route('/api/ordinal', methods=['GET', 'POST', 'OPTIONS'])
def api_ordinal():
    """Pāli ordinal word(s) for a number"""
    if request.method == 'OPTIONS':
        return _preflight()

    data = _request_data()
    number = str(data.get('number', '')).strip()
    if not number:
        return _error('Please provide a number', 400)

    try:
        return _cors(jsonify(grammar.get_ordinal(number, data.get('script'))))
    except NumeralError as e:
        return _error(str(e), 400)
    except Exception as e:
        return _error(f'Numeral error: {str(e)}', 500)


@app.route('/api/declension', methods=['GET', 'POST', 'OPTIONS'])
def api_declension():
    """Declension table of a term"""
    if request.method == 'OPTIONS':
        return _preflight()

    data = _request_data()
    term = str(data.get('term', '')).strip()
    if not term:
        return _error('Please provide a Pāli term', 400)

    try:
        result = grammar.decline(term, data.get('paradigm'), data.get('gender'), data.get('script'))
    except ValueError as e:
        return _error(str(e), 400)
    except Exception as e:
        return _error(f'Declension error: {str(e)}', 500)

    if not result['success']:
        return _cors(jsonify(result)), 400
    return _cors(jsonify(result))


@app.route('/api/declined/<word_class>', methods=['GET'])
def api_declined(word_class):
    """Reverse lookup of a declined form within a word class"""
    if word_class not in WORD_CLASSES:
        return _error(f"Unknown word class '{word_class}'", 404)

    form = request.args.get('form', '').strip()
    if not form:
        return _error('Please provide a form', 400)

    try:
        return _cors(jsonify(grammar.lookup_declined(word_class, form)))
    except Exception as e:
        return _error(f'Lookup error: {str(e)}', 500)


@app.route('/api/paradigms', methods=['GET'])
def api_paradigms():
    return _cors(jsonify({
        'paradigms': grammar.paradigm_list()
    }))


def print_declension(result: Dict):
    print(f"\n=== Declension of: {result['term']} ({', '.join(result['paradigm'])}) ===")
    if result['meaning']:
        print(f"Meaning: {result['meaning']}")
    for table in result['tables']:
        print(f"\n--- {table['gender']} ({table['ending']}-ending) ---")
        for row in table['rows']:
            singular = ', '.join(row['singular']) or '-'
            plural = ', '.join(row['plural']) or '-'
            print(f"{row['case_number']} {row['case']:5s} {singular:40s} {plural}")


def main(argv: List[str]) -> int:
    """CLI mode: cardinal N | ordinal N | decline TERM [PARADIGM [GENDER]] | lookup CLASS FORM"""
    command, args = argv[0], argv[1:]

    try:
        if command in ('cardinal', 'ordinal') and args:
            result = grammar.get_cardinal(args[0]) if command == 'cardinal' else grammar.get_ordinal(args[0])
            print(f"\n=== {command.capitalize()} {result['number']} ===")
            for term in result['terms']:
                print(f"  {term}")
            if not result['terms']:
                print("  (no Pāli form)")
            return 0

        if command == 'decline' and args:
            paradigm = args[1] if len(args) > 1 else None
            gender = args[2] if len(args) > 2 else None
            result = grammar.decline(args[0], paradigm, gender)
            if not result['success']:
                print(f"\nError: {result['error']}")
                return 1
            print_declension(result)
            return 0

        if command == 'lookup' and len(args) == 2:
            result = grammar.lookup_declined(args[0], args[1])
            print(f"\n=== {result['form']} in {args[0]} ===")
            if not result['found']:
                print("  Not found")
            for a in result['analyses']:
                print(f"  {a['case']} {a['number']} {a['gender']}  {a['meaning']}")
            return 0
    except ValueError as e:
        print(f"\nError: {e}")
        return 1

    print(main.__doc__)
    return 1


if __name__ == '__main__':
    if len(sys.argv) > 1:
        sys.exit(main(sys.argv[1:]))

    port = int(os.environ.get("PORT", 5000))
    app.run(host='0.0.0.0', port=port, debug=True)
