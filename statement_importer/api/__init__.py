"""
API Module - HTTP surface for the importer.
"""

from .main import app, create_app

__all__ = [
    'app',
    'create_app',
]
