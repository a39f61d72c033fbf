"""Data stores for persistence.

Stores handle:
- Database: engine, sessions, table management
- Product records: ORM reads/writes, returned as typed row projections

No business/validation logic in stores - that belongs in services.
"""
