"""
Check registry system.

Provides decorator-based registration for rule checks and retrieval functions.
This allows rules in YAML configuration to reference checks by name.
"""

from typing import Any, Dict, Type, Optional
from modules.feedback.core.base import BaseCheck
from modules.feedback.core.exceptions import UnknownCheckError
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

# Global registry of all checks
CHECK_REGISTRY: Dict[str, Type[BaseCheck]] = {}


def register_check(name: str):
    """
    Decorator to register a check in the global registry.

    Usage:
        @register_check("luhn")
        class LuhnCheck(BaseCheck):
            def check(self, value):
                ...

    Args:
        name: Unique name for the check (used in configuration)

    Returns:
        Decorator function
    """
    def decorator(cls: Type[BaseCheck]):
        if name in CHECK_REGISTRY:
            logger.warning(
                f"Check '{name}' is already registered. "
                f"Overwriting with {cls.__name__}"
            )

        CHECK_REGISTRY[name] = cls
        logger.debug(f"Registered check: {name} -> {cls.__name__}")
        return cls

    return decorator


def get_check(name: str) -> Optional[Type[BaseCheck]]:
    """
    Get check class by name from registry.

    Args:
        name: Check name

    Returns:
        Check class or None if not found
    """
    return CHECK_REGISTRY.get(name)


def create_check(name: str, params: Optional[Dict[str, Any]] = None) -> BaseCheck:
    """
    Instantiate a registered check.

    Args:
        name: Check name
        params: Check parameters

    Returns:
        Check instance

    Raises:
        UnknownCheckError: If no check is registered under name
    """
    check_class = get_check(name)
    if check_class is None:
        raise UnknownCheckError(f"Check '{name}' not found in registry")
    return check_class(params)


def list_checks() -> Dict[str, str]:
    """
    List all registered checks.

    Returns:
        Dictionary mapping check names to class names
    """
    return {
        name: cls.__name__
        for name, cls in CHECK_REGISTRY.items()
    }


def is_registered(name: str) -> bool:
    """
    Check if a check is registered.

    Args:
        name: Check name

    Returns:
        True if registered, False otherwise
    """
    return name in CHECK_REGISTRY
