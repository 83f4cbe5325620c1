"""
FastAPI routers grouped by resource (auth, users, cats).

Each module exposes an APIRouter included by catapi.app under the API prefix.
"""
