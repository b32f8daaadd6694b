"""FastAPI dependencies exposing process-wide collaborators.

Settings and the code store are created once at startup and kept on
``app.state``; handlers receive them through these dependencies.
"""

from fastapi import Request

from .config import Settings
from .domain.ports.code_store_port import CodeStorePort


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_code_store(request: Request) -> CodeStorePort:
    return request.app.state.code_store
