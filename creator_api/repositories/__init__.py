"""
Persistence adapters.

Two record stores share one interface: the SQL store (remote, reached through
DATABASE_URL) and the JSON slot store (local fallback). Services depend on the
RecordStore interface rather than on either backend.
"""
