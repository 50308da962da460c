from __future__ import annotations

from app.api import app, create_app

__all__ = ["app", "create_app"]
