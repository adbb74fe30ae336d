import importlib
import pkgutil
from typing import Dict, Type

from tabbie import algorithms
from tabbie.algorithms._base import DrawGenerator
from tabbie.exceptions import ValidationError

DEFAULT_ALGORITHM = "power"

_registry: Dict[str, Type[DrawGenerator]] = {}


def register(cls: Type[DrawGenerator]) -> Type[DrawGenerator]:
    """Register a DrawGenerator under the name of the module that defines it.

    `tabbie/algorithms/power.py` registers as "power".
    """
    _registry[cls.__module__.rsplit(".", 1)[-1]] = cls
    return cls


def _discover_algorithms() -> None:
    """Import every public module in the algorithms package so that @register runs."""
    for module in pkgutil.iter_modules(algorithms.__path__):
        if module.name.startswith("_"):
            continue
        importlib.import_module(f"{algorithms.__name__}.{module.name}")


def get_algorithms() -> Dict[str, Type[DrawGenerator]]:
    _discover_algorithms()
    return dict(sorted(_registry.items()))


def get_generator(name: str) -> Type[DrawGenerator]:
    _discover_algorithms()
    try:
        return _registry[name]
    except KeyError:
        raise ValidationError(
            f"No algorithm named {name!r} (one of {sorted(_registry)} expected)"
        )
