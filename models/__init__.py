"""
models/ - Domain Models
=======================
Plain dataclasses for every persisted entity and for read-only report rows.
"""

# Identity of an entity that has not been inserted yet.
NEW_ID = -1
