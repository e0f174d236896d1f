# Re-export the main Base class from db.py for catalog models
# This ensures all models share the same metadata
from db import Base

__all__ = ["Base"]
