"""
FastAPI dependencies
"""
from fastapi import Request

from services.registry import RegistryServices


def get_services(request: Request) -> RegistryServices:
    """Registry services attached to the app at startup"""
    return request.app.state.services
