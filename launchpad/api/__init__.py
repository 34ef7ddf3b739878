from .routes.launches import router
from .error_handlers import setup_error_handlers

__all__ = ["router", "setup_error_handlers"]
