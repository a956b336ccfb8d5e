"""
Glissando - API Layer

REST facade over the transition service.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
"""

from api.main import create_app

__all__ = ["create_app"]
