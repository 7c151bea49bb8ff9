"""
pgben.services

Service-layer package.

Responsibilities:
- Own transaction boundaries for permissions, notifications and approvals.
- Combine repositories, the action executor and the notification renderer.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services take an AsyncSession in the constructor and commit explicitly.
