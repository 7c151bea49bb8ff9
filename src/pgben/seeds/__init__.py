"""
pgben.seeds

Idempotent reference-data seeds and their runner.

Responsibilities:
- Load units, permissions, roles, benefit types, notification templates and the
  approval configuration into the database, in a fixed order.
- Expose the runner to the CLI (`pgben-seed`) and to app startup (`seed_on_startup`).
"""

# Package marker; import `pgben.seeds.runner` for the runner.


# --- Module Notes -----------------------------------------------------------
# Catalog data lives in `pgben.seeds.catalog`; seed modules only hold persistence logic.
