"""
FastAPI routers grouped by domain (content generation, history).

Each module exposes an APIRouter that app.py includes.
"""
