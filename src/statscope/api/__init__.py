"""API module - JSON HTTP endpoints."""

from __future__ import annotations

from statscope.api.app import create_app

__all__ = ["create_app"]
