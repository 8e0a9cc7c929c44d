"""Infrastructure hooks module.

Contains the built-in storage source listeners and their registration.
"""

from filegate.infrastructure.hooks.builtin_hooks import (
    BUILTIN_PRIORITY,
    register_builtin_listeners,
)

__all__ = [
    "BUILTIN_PRIORITY",
    "register_builtin_listeners",
]
