"""
Database module for Sanitary Map AI
SQL persistence for the key/value report store
"""

from .connection import DatabaseConnection
from .models import Base, KeyValueEntry

__all__ = [
    "DatabaseConnection",
    "Base",
    "KeyValueEntry",
]
