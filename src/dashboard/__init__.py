# Dashboard — Flask JSON API and operator UI
from .app import create_app

__all__ = ["create_app"]
