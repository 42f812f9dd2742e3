"""Entry point for ASGI servers: ``uvicorn profile_api.app_factory:app``."""
from profile_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
