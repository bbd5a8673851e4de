"""
High-level use cases for the Creator Intelligence API.

Routers call these services (generate content, save and list history) instead
of touching the record stores directly.
"""
