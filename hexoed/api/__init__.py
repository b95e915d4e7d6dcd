"""Local HTTP API over the post/asset stores."""

from .routes import ApiServices, api_bp
from .server import ApiServer, create_app

__all__ = ["ApiServer", "ApiServices", "api_bp", "create_app"]
