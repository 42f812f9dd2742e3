"""
FastAPI routers for the Profile API.

Each module exposes an APIRouter included by ``profile_api.app.create_app``.
Routers decode and validate input, call the profile service and leave the
error-to-status mapping to the handlers registered on the app.
"""
