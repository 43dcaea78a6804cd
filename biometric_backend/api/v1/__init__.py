from .enrollment_controller import router as enrollment_router
from .health_controller import router as health_router


__all__ = ["enrollment_router", "health_router"]
