"""
API Module Exports
"""

from .app import app
from .public import router as public_router
from .operator import router as operator_router

__all__ = ['app', 'public_router', 'operator_router']
