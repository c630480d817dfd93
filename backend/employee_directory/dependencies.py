"""Reusable FastAPI dependencies."""
from fastapi import Request

from .config import Settings
from .resolvers import Resolvers


def get_resolvers(request: Request) -> Resolvers:
    """Resolvers created by the application lifespan."""
    return request.app.state.resolvers


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings
