"""WordPress-like action hooks used as the admin host's event binding.

Admin pages are loaded lazily: registering a page binds its ``load`` callback
to an action named after the page's hook suffix, and the host fires that
action only when a request is routed to the page.

Usage:
    from adminmenus.lib.hooks import hooks, action, load_hook_name

    # Using the decorator (auto-registered on import)
    @action("load-settings_page_my-plugin", priority=5)
    def prepare_settings():
        ...

    # Using direct registration
    hooks.add_action(load_hook_name(hook_suffix), page.load)

    # Triggering hooks
    await hooks.do_action(load_hook_name(hook_suffix))
"""

import asyncio
from collections import defaultdict
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable

LOAD_HOOK_PREFIX = "load-"


def load_hook_name(hook_suffix: str) -> str:
    """Return the action name fired when the page with ``hook_suffix`` loads."""
    return f"{LOAD_HOOK_PREFIX}{hook_suffix}"


@dataclass(order=True)
class HookHandler:
    """A registered hook handler with priority."""

    priority: int
    callback: Callable = field(compare=False)

    async def call(self, *args: Any, **kwargs: Any) -> Any:
        """Call the handler, handling both sync and async callbacks."""
        result = self.callback(*args, **kwargs)
        if asyncio.iscoroutine(result):
            return await result
        return result


class HookRegistry:
    """Registry of action callbacks keyed by hook name."""

    def __init__(self) -> None:
        self._actions: dict[str, list[HookHandler]] = defaultdict(list)

    def add_action(
        self,
        hook_name: str,
        callback: Callable[..., Any],
        priority: int = 10,
    ) -> None:
        """Register an action callback.

        Args:
            hook_name: Name of the action hook
            callback: Function to call when action is triggered
            priority: Lower numbers execute first (default: 10)
        """
        handler = HookHandler(priority=priority, callback=callback)
        self._actions[hook_name].append(handler)
        self._actions[hook_name].sort()

    def remove_action(
        self,
        hook_name: str,
        callback: Callable[..., Any],
    ) -> bool:
        """Remove an action callback.

        Returns:
            True if callback was found and removed
        """
        handlers = self._actions.get(hook_name, [])
        for i, handler in enumerate(handlers):
            if handler.callback == callback:
                handlers.pop(i)
                return True
        return False

    def has_action(self, hook_name: str) -> bool:
        """Check if any actions are registered for a hook."""
        return bool(self._actions.get(hook_name))

    async def do_action(
        self,
        hook_name: str,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Execute all registered action callbacks in priority order."""
        from adminmenus.lib.observability import span

        with span(f"hook.action:{hook_name}", hook_name=hook_name):
            handlers = list(self._actions.get(hook_name, []))
            for handler in handlers:
                await handler.call(*args, **kwargs)

    def clear(self) -> None:
        """Clear all registered hooks. Useful for testing."""
        self._actions.clear()


# Global singleton registry
hooks = HookRegistry()


def add_action(
    hook_name: str,
    callback: Callable[..., Any],
    priority: int = 10,
) -> None:
    """Register an action callback to the global registry."""
    hooks.add_action(hook_name, callback, priority)


def remove_action(hook_name: str, callback: Callable[..., Any]) -> bool:
    """Remove an action callback from the global registry."""
    return hooks.remove_action(hook_name, callback)


async def do_action(hook_name: str, *args: Any, **kwargs: Any) -> None:
    """Execute all registered action callbacks via the global registry."""
    await hooks.do_action(hook_name, *args, **kwargs)


def action(hook_name: str, priority: int = 10) -> Callable[[Callable], Callable]:
    """Decorator to register a function as an action handler.

    Usage:
        @action("load-toplevel_page_my-plugin", priority=5)
        def my_handler():
            ...
    """

    def decorator(func: Callable) -> Callable:
        hooks.add_action(hook_name, func, priority)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return func(*args, **kwargs)

        return wrapper

    return decorator
