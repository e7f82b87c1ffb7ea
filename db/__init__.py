"""
db/ - Database Layer
====================
Handles the shared connection handle, transaction scopes, schema initialization
and the persistence error taxonomy.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
