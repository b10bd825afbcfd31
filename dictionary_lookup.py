"""
CPED Dictionary Lookup Module

Local SQLite access to the Concise Pāli-English Dictionary table. Used as the
fallback source of irregular nouns when Turso is not configured, and for
headword lookups.

Usage:
    from dictionary_lookup import CpedDictionary

    cped = CpedDictionary('cped.db')
    entries = cped.lookup('rāja')
"""

import os
import sqlite3
from typing import Dict, List

from turso_db import IRREGULAR_NOUN_QUERY, row_to_noun


class CpedDictionary:
    """SQLite-based CPED lookup"""

    def __init__(self, db_path: str):
        """
        Initialize dictionary

        Args:
            db_path: Path to SQLite database file
        """
        if not os.path.exists(db_path):
            raise FileNotFoundError(f"Dictionary database not found: {db_path}")

        self.db_path = db_path
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.cursor = self.conn.cursor()

    def __del__(self):
        """Close database connection"""
        if hasattr(self, 'conn'):
            self.conn.close()

    def lookup(self, term: str) -> List[Dict]:
        """
        Look up a headword

        Args:
            term: Headword in Roman Pāli

        Returns:
            List of dictionary entries
        """
        self.cursor.execute(
            'SELECT term, pos, paradigm, in_compounds, meaning, submeaning FROM cped WHERE term = ?',
            (term,)
        )
        return [row_to_noun(row) for row in self.cursor.fetchall()]

    def load_irregular_nouns(self) -> List[Dict]:
        """
        Load entries that carry an irregular declension paradigm

        Returns:
            List of noun dicts (term, pos, paradigm, in_compounds, meaning, submeaning)
        """
        self.cursor.execute(IRREGULAR_NOUN_QUERY)
        return [row_to_noun(row) for row in self.cursor.fetchall() if row[0]]

    def get_stats(self) -> Dict:
        """Get dictionary statistics"""
        stats = {}

        self.cursor.execute('SELECT COUNT(*) FROM cped')
        stats['total_entries'] = self.cursor.fetchone()[0]

        self.cursor.execute("SELECT COUNT(*) FROM cped WHERE paradigm != ''")
        stats['with_paradigm'] = self.cursor.fetchone()[0]

        self.cursor.execute("SELECT COUNT(DISTINCT paradigm) FROM cped WHERE paradigm != ''")
        stats['paradigms'] = self.cursor.fetchone()[0]

        return stats


# Example usage
if __name__ == '__main__':
    import sys

    if len(sys.argv) < 2:
        print("Usage: python3 dictionary_lookup.py <cped.db> [term]")
        sys.exit(1)

    db_path = sys.argv[1]
    test_term = sys.argv[2] if len(sys.argv) > 2 else 'rāja'

    print(f"Opening dictionary: {db_path}")
    cped = CpedDictionary(db_path)

    stats = cped.get_stats()
    print(f"\nDictionary Statistics:")
    print(f"  Total entries: {stats['total_entries']}")
    print(f"  With paradigm: {stats['with_paradigm']}")
    print(f"  Distinct paradigms: {stats['paradigms']}")

    print(f"\n--- Looking up: {test_term} ---")
    entries = cped.lookup(test_term)

    if entries:
        for i, entry in enumerate(entries, 1):
            print(f"\nEntry {i}:")
            print(f"  Term: {entry['term']}")
            print(f"  POS: {entry['pos']}")
            if entry['paradigm']:
                print(f"  Paradigm: {entry['paradigm']}")
            if entry['in_compounds']:
                print(f"  [In compounds]")
            print(f"  Meaning: {entry['meaning']}")
    else:
        print("  No entries found")
