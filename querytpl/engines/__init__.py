"""
Engines: query template compiler (``engines.sql``).
"""

from querytpl.engines.sql import Database, compile_query, new_skip_signal

__all__ = [
    "Database",
    "compile_query",
    "new_skip_signal",
]
