# Export all catalog models for easy imports
from .base import Base
from .university import RecUniversity

__all__ = [
    "Base",
    "RecUniversity",
]
