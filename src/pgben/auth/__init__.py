"""
pgben.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- FastAPI auth dependencies (Principal, role checks, granular permission checks).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Permission resolution itself lives in `pgben.services.permission_service`.
