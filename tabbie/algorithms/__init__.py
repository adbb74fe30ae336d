from tabbie.algorithms._base import DrawGenerator
from tabbie.algorithms._registry import (
    DEFAULT_ALGORITHM,
    get_algorithms,
    get_generator,
    register,
)

__all__ = ["DEFAULT_ALGORITHM", "DrawGenerator", "get_algorithms", "get_generator", "register"]
