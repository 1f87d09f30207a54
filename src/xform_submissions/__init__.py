"""XForm submissions utility.

Lazily extracts form identity, version, dates, encryption artifacts and
media attachment references from XForm submission documents.
"""

__version__ = "0.1.0"
