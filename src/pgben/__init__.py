"""
pgben

Top-level package for the PGBen benefits-management backend.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file free of imports; the seed CLI and the API both import it first.
