"""
pgben.api

HTTP API package for the PGBen backend.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers validate input, authorize and delegate; workflow rules live in `pgben.services`.
