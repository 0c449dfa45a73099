"""
Store engine: open, put and get.
"""

from kvdb.engine.loader import StoreLoader
from kvdb.engine.store import Store, open

__all__ = ["Store", "StoreLoader", "open"]
