"""
Action registry - finds prep action classes by description
"""
import importlib
import logging
import pkgutil
from typing import Dict, List, Type
from .base import Action
logger = logging.getLogger(__name__)

# Cache of discovered action classes
_action_cache: Dict[str, Type[Action]] = {}


def _normalize(name: str) -> str:
    return name.lower().strip().replace("_", "-").replace(" ", "-")


def _discover_actions() -> Dict[str, Type[Action]]:
    """
    Discover all action classes in the actions package
    Returns:
        Dictionary mapping normalized descriptions to action classes
    """
    if _action_cache:
        return _action_cache
    package = importlib.import_module(__package__)
    for _, modname, ispkg in pkgutil.iter_modules(package.__path__, package.__name__ + "."):
        if ispkg or modname.endswith(".base") or modname.endswith(".registry"):
            continue
        module = importlib.import_module(modname)
        for attr in vars(module).values():
            if isinstance(attr, type) and issubclass(attr, Action) and attr is not Action and attr.description:
                _action_cache[_normalize(attr.description)] = attr
    logger.debug("Discovered %d prep actions", len(_action_cache))
    return _action_cache


def get_action_class(action_name: str) -> Type[Action]:
    """
    Get action class by name (matches action.description)
    Args:
        action_name: Action name from the configuration, spaces/dashes/underscores interchangeable
    Returns:
        Action class
    Raises:
        ValueError: If action name not found
    """
    registry = _discover_actions()
    action_class = registry.get(_normalize(action_name))
    if action_class is None:
        available = sorted(cls.description for cls in registry.values())
        raise ValueError(f"Action '{action_name}' not found. Available actions: {available}")
    return action_class


def resolve_actions(action_names: List[str]) -> List[Type[Action]]:
    """Resolve configured action names in order, reporting every unknown name at once."""
    classes = []
    unknown = []
    for name in action_names:
        try:
            classes.append(get_action_class(name))
        except ValueError:
            unknown.append(name)
    if unknown:
        available = sorted(cls.description for cls in _discover_actions().values())
        raise ValueError(f"Unknown prep action(s) {unknown}. Available actions: {available}")
    return classes
