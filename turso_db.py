"""
Turso database connection and query utilities for the Pāli grammar service
Uses Turso HTTP API (compatible with Vercel serverless) to read the CPED
dictionary table that carries declension paradigms for irregular nouns
"""

import os
import requests
from typing import Dict, List, Optional

# Paradigms handled by the pronoun and numeral word lists, not by CPED
EXCLUDED_PARADIGMS = ('eka', 'dvi', 'ti', 'catu', 'sabba', 'pubba', 'asuka')

IRREGULAR_NOUN_QUERY = (
    "SELECT term, pos, paradigm, in_compounds, meaning, submeaning FROM cped "
    "WHERE paradigm != '' "
    f"AND paradigm NOT IN ({', '.join(repr(p) for p in EXCLUDED_PARADIGMS)}) "
    "AND paradigm NOT LIKE 'number%'"
)


def _to_https_url(url: str) -> str:
    """Convert libsql:// or other URL schemes to https://"""
    if url.startswith('libsql://'):
        return url.replace('libsql://', 'https://', 1)
    if url.startswith('http://'):
        return url.replace('http://', 'https://', 1)
    if not url.startswith('https://'):
        return 'https://' + url
    return url


def row_to_noun(row: List) -> Dict:
    """Map a (term, pos, paradigm, in_compounds, meaning, submeaning) row to a dict"""
    term, pos, paradigm, in_compounds, meaning, submeaning = (list(row) + [None] * 6)[:6]
    return {
        'term': term or '',
        'pos': pos or '',
        'paradigm': paradigm or '',
        'in_compounds': str(in_compounds).lower() in ('1', 'true'),
        'meaning': meaning or '',
        'submeaning': submeaning or '',
    }


class TursoDatabase:
    """Turso database connection wrapper using HTTP API"""

    def __init__(self, database_url: Optional[str] = None, auth_token: Optional[str] = None):
        """
        Initialize Turso database connection

        Args:
            database_url: libsql:// or https:// URL (default: TURSO_DATABASE_URL)
            auth_token: Bearer token (default: TURSO_AUTH_TOKEN)
        """
        database_url = database_url if database_url is not None else os.getenv('TURSO_DATABASE_URL', '')
        self.auth_token = auth_token if auth_token is not None else os.getenv('TURSO_AUTH_TOKEN', '')
        self.connected = False
        self.base_url = _to_https_url(database_url) if database_url else ''
        self.pipeline_url = f'{self.base_url}/v2/pipeline' if self.base_url else ''
        self.headers = {
            'Authorization': f'Bearer {self.auth_token}',
            'Content-Type': 'application/json'
        } if self.auth_token else {}

    def _execute(self, sql: str, args: Optional[List] = None) -> Optional[List[List]]:
        """
        Execute a SQL query via Turso HTTP pipeline API

        Args:
            sql: SQL query string
            args: Optional list of query arguments

        Returns:
            List of rows (each row is a list of values), or None on error
        """
        if not self.pipeline_url or not self.headers:
            return None

        stmt = {'sql': sql}
        if args:
            stmt['args'] = [{'type': 'text', 'value': str(a)} for a in args]

        payload = {
            'requests': [
                {'type': 'execute', 'stmt': stmt},
                {'type': 'close'}
            ]
        }

        try:
            resp = requests.post(
                self.pipeline_url,
                headers=self.headers,
                json=payload,
                timeout=8
            )
        except requests.RequestException as e:
            print(f"Turso: Request failed: {e}")
            return None

        if resp.status_code != 200:
            print(f"Turso: HTTP {resp.status_code}")
            return None

        try:
            data = resp.json()
        except ValueError:
            print("Turso: Response is not JSON")
            return None

        results = data.get('results', [])
        if not results or results[0].get('type') != 'ok':
            return None

        result = results[0].get('response', {}).get('result', {})
        raw_rows = result.get('rows', [])

        # Extract values from typed response
        rows = []
        for raw_row in raw_rows:
            row = []
            for col in raw_row:
                if isinstance(col, dict):
                    row.append(col.get('value'))
                else:
                    row.append(col)
            rows.append(row)

        return rows

    def is_configured(self) -> bool:
        return bool(self.base_url and self.auth_token)

    def connect(self) -> bool:
        """Establish connection to Turso database"""
        if not self.is_configured():
            print("Turso: URL or auth token not configured")
            self.connected = False
            return False

        rows = self._execute("SELECT 1")
        if rows is not None:
            self.connected = True
            print("Turso: Connected successfully")
            return True

        print("Turso: Connection test failed")
        self.connected = False
        return False

    def load_irregular_nouns(self) -> List[Dict]:
        """
        Load CPED entries that carry an irregular declension paradigm

        Returns:
            List of noun dicts (term, pos, paradigm, in_compounds, meaning, submeaning)
        """
        if not self.connected:
            if not self.connect():
                return []

        rows = self._execute(IRREGULAR_NOUN_QUERY)
        if rows is None:
            return []

        nouns = [row_to_noun(row) for row in rows if row and row[0]]
        print(f"Turso: Loaded {len(nouns)} irregular nouns")
        return nouns

    def lookup_headword(self, term: str) -> List[Dict]:
        """
        Look up CPED entries for a headword

        Args:
            term: Headword in Roman Pāli

        Returns:
            List of noun dicts for all matching rows
        """
        if not self.connected:
            if not self.connect():
                return []

        rows = self._execute(
            "SELECT term, pos, paradigm, in_compounds, meaning, submeaning FROM cped WHERE term = ? LIMIT 50",
            [term]
        )
        if not rows:
            return []
        return [row_to_noun(row) for row in rows]

    def close(self):
        """Close database connection"""
        self.connected = False
