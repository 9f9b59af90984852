"""
Strategy Factory Module - Registry of line analyzers by name.

Strategies register themselves with @register_strategy when the
strategies package is imported; front ends then pick one by the name
stored in settings or given on the command line.
"""

from typing import Dict, List, Optional, Type

from .base import SolverStrategy


DEFAULT_STRATEGY = "overlap"

# Registered analyzers, in registration order
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Class decorator adding a strategy to the registry under cls.name.

    Usage:
        @register_strategy
        class MyStrategy(SolverStrategy):
            name = "my_strategy"

            def deduce(self, line, hints):
                ...

    Raises:
        ValueError: If another class already uses the same name
    """
    existing = _STRATEGIES.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Strategy name {cls.name!r} already used by {existing.__name__}"
        )
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: Optional[str] = None) -> SolverStrategy:
    """
    Instantiate a registered strategy.

    Args:
        name: Strategy name (e.g. "overlap", "positional"); the default
            strategy when None or empty

    Returns:
        New strategy instance

    Raises:
        ValueError: If the name is not registered
    """
    name = name or get_default_strategy_name()
    try:
        strategy_cls = _STRATEGIES[name]
    except KeyError:
        available = ", ".join(_STRATEGIES) or "none"
        raise ValueError(f"Unknown strategy: {name}. Available: {available}") from None
    return strategy_cls()


def get_strategy_names() -> List[str]:
    return list(_STRATEGIES)


def get_strategy_info() -> List[Dict[str, object]]:
    """
    Describe every registered strategy for menus and --help output.

    Returns:
        One dict per strategy with 'name', 'description' and
        'default' (True for the default strategy)
    """
    default = get_default_strategy_name()
    return [
        {"name": name, "description": cls.description, "default": name == default}
        for name, cls in _STRATEGIES.items()
    ]


def get_default_strategy_name() -> str:
    """Name used when none is given: "overlap", else the first registered."""
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    return next(iter(_STRATEGIES), "")
