"""
Hook registry for site build events.

Handlers are registered per owner ("site", "pages", "posts", "documents")
and event ("pre_render", "post_render"), and run synchronously in priority
order when the host triggers the event.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)


@dataclass
class HookHandler:
    """Registered hook handler with priority."""

    handler: Callable[..., Any]
    priority: int = 0
    name: str | None = None

    def __lt__(self, other: "HookHandler") -> bool:
        """Sort by priority (lower number = higher priority)."""
        return self.priority < other.priority


class HookRegistry:
    """
    Manages site build hooks.
    Handlers for one owner and event run in priority order.
    """

    PRE_RENDER = "pre_render"
    POST_RENDER = "post_render"

    def __init__(self):
        """Initialize empty hook registry."""
        self._handlers: dict[tuple[str, str], list[HookHandler]] = defaultdict(list)

    def register(
        self,
        owners: str | Iterable[str],
        event: str,
        handler: Callable[..., Any],
        priority: int = 0,
        name: str | None = None,
    ) -> Callable[[], None]:
        """
        Register a handler for an event on one or more owners.

        Args:
            owners: Owner name or names, e.g. ["pages", "documents"]
            event: Event name
            handler: Called with the event's arguments
            priority: Execution priority (lower = earlier)
            name: Optional handler name for debugging

        Returns:
            Unregister function
        """
        owner_names = [owners] if isinstance(owners, str) else list(owners)
        hook_handler = HookHandler(handler=handler, priority=priority, name=name or handler.__name__)

        for owner in owner_names:
            handlers = self._handlers[(owner, event)]
            handlers.append(hook_handler)
            handlers.sort()
            logger.debug(f"Registered hook '{hook_handler.name}' for {owner}:{event} with priority {priority}")

        def unregister():
            """Remove this handler from every owner it was registered on."""
            for owner in owner_names:
                handlers = self._handlers.get((owner, event), [])
                if hook_handler in handlers:
                    handlers.remove(hook_handler)
                    logger.debug(f"Unregistered hook '{hook_handler.name}' from {owner}:{event}")

        return unregister

    def handlers(self, owner: str, event: str) -> list[HookHandler]:
        """Return the handlers for an owner and event, in execution order."""
        return list(self._handlers.get((owner, event), []))

    def trigger(self, owner: str, event: str, *args: Any) -> None:
        """Call every handler registered for `owner` and `event` with `args`."""
        for hook_handler in self.handlers(owner, event):
            hook_handler.handler(*args)
