from .base import CamelModel, PartialUpdate, to_changes

__all__ = ["CamelModel", "PartialUpdate", "to_changes"]
