from .vector_validator import validate, normalize

__all__ = ["validate", "normalize"]
