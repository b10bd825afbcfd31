"""
Vercel serverless function entry point for the Pāli grammar API
"""
import sys
import os

# Make the flat modules next to api/ importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pali_grammar import app

# Vercel serves the Flask WSGI application bound to 'app'
