from .categories import Categories
from .environments import Environment

__all__ = ["Categories", "Environment"]
