"""
Creator Intelligence API: templated content generation for video creators
with a history store that uses SQL when available and a local JSON slot
otherwise.

Run with:
  uvicorn creator_api.app:app
"""

__version__ = "0.1.0"
