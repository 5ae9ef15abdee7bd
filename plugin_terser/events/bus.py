"""
String-keyed event bus shared by the host and its plugins.
"""

import asyncio
import inspect
import types
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from ..errors import EventBusError


@dataclass
class HandlerRegistration:
    """Registration information for an event handler."""

    event_name: str
    handler: Callable[..., Any]
    context: Any = None

    @property
    def callback(self) -> Callable[..., Any]:
        """Handler bound to its context, if one was given."""
        if self.context is not None and not inspect.ismethod(self.handler):
            return types.MethodType(self.handler, self.context)
        return self.handler

    def invoke(self, *args, **kwargs) -> Any:
        return self.callback(*args, **kwargs)


def _collapse(results: List[Any]) -> Any:
    """None for no handlers, the value for one handler, else the list."""
    if not results:
        return None
    if len(results) == 1:
        return results[0]
    return results


class EventBus:
    """Minimal publish/subscribe bus with sync and async dispatch.

    Handlers run in registration order. Exceptions raised by handlers
    propagate to whoever triggered the event.
    """

    def __init__(self, name: str = "eventbus"):
        """
        Initialize event bus.

        Args:
            name: Bus name, used in log messages
        """
        self.name = name
        self._registrations: Dict[str, List[HandlerRegistration]] = {}
        self._background: set = set()

    def on(self, event_name: str, handler: Callable[..., Any], context: Any = None) -> HandlerRegistration:
        """
        Register a handler for an event.

        Args:
            event_name: Event to listen for
            handler: Callable invoked with the trigger arguments
            context: Optional object the handler is bound to

        Returns:
            The registration
        """
        registration = HandlerRegistration(event_name=event_name, handler=handler, context=context)
        self._registrations.setdefault(event_name, []).append(registration)
        logger.debug(f"[{self.name}] registered handler for '{event_name}'")
        return registration

    def off(self, event_name: Optional[str] = None, handler: Optional[Callable[..., Any]] = None) -> int:
        """
        Remove handlers.

        Args:
            event_name: Only remove handlers of this event (all events if None)
            handler: Only remove this handler (all handlers if None)

        Returns:
            Number of handlers removed
        """
        names = [event_name] if event_name is not None else list(self._registrations)
        removed = 0

        for name in names:
            registrations = self._registrations.get(name, [])
            kept = [r for r in registrations if handler is not None and r.handler != handler]
            removed += len(registrations) - len(kept)
            if kept:
                self._registrations[name] = kept
            else:
                self._registrations.pop(name, None)

        return removed

    def has_handlers(self, event_name: str) -> bool:
        return bool(self._registrations.get(event_name))

    @property
    def event_names(self) -> List[str]:
        return list(self._registrations)

    def _handlers_for(self, event_name: str) -> List[HandlerRegistration]:
        return list(self._registrations.get(event_name, []))

    def trigger(self, event_name: str, *args, **kwargs) -> None:
        """
        Fire-and-forget dispatch.

        Coroutine results are scheduled on the running loop, or run to
        completion when no loop is running.
        """
        for registration in self._handlers_for(event_name):
            result = registration.invoke(*args, **kwargs)
            if inspect.isawaitable(result):
                self._schedule(result)

    def trigger_sync(self, event_name: str, *args, **kwargs) -> Any:
        """
        Dispatch synchronously and collect results.

        Returns:
            None without handlers, the single result for one handler,
            otherwise a list of results

        Raises:
            EventBusError: If a handler returns an awaitable
        """
        results = []
        for registration in self._handlers_for(event_name):
            result = registration.invoke(*args, **kwargs)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise EventBusError(
                    f"Handler for '{event_name}' is asynchronous; use trigger_async"
                )
            results.append(result)

        return _collapse(results)

    async def trigger_async(self, event_name: str, *args, **kwargs) -> Any:
        """
        Dispatch and await all handler results concurrently.

        Returns:
            None without handlers, the single result for one handler,
            otherwise a list of results in registration order
        """
        results = [
            registration.invoke(*args, **kwargs)
            for registration in self._handlers_for(event_name)
        ]

        pending = [(i, r) for i, r in enumerate(results) if inspect.isawaitable(r)]
        if pending:
            resolved = await asyncio.gather(*(r for _, r in pending))
            for (i, _), value in zip(pending, resolved):
                results[i] = value

        return _collapse(results)

    def _schedule(self, awaitable: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            asyncio.run(self._await(awaitable))
            return

        task = loop.create_task(self._await(awaitable))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    @staticmethod
    async def _await(awaitable: Any) -> Any:
        return await awaitable
