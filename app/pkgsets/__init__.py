"""pkgsets - Declarative package sets for Linux systems.

Tracks which packages a user wants, grouped into named set files, and
reconciles them against the package manager's explicitly installed state.
"""

__version__ = "0.1.0"
