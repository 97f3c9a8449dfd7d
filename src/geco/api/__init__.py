"""
Geco - API Layer

REST interface over the animation engines.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
"""

from geco.api.main import create_app

__all__ = ["create_app"]
