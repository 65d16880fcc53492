from __future__ import annotations

import logging
from types import MethodType
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


def _describe(listener: Listener) -> str:
    return getattr(listener, "__name__", repr(listener))


def _require_callable(listener: Listener) -> None:
    if not callable(listener):
        raise TypeError("listener must be callable")


def _same(item: Listener, listener: Listener) -> bool:
    if item is listener:
        return True
    # Each attribute access builds a new bound method; match on object and function.
    return (
        isinstance(item, MethodType)
        and isinstance(listener, MethodType)
        and item.__self__ is listener.__self__
        and item.__func__ is listener.__func__
    )


def _index(listeners: List[Listener], listener: Listener) -> int:
    return next((i for i, item in enumerate(listeners) if _same(item, listener)), -1)


def _remove(listeners: List[Listener], listener: Listener) -> bool:
    index = _index(listeners, listener)
    if index < 0:
        return False
    del listeners[index]
    return True


class _OnceListener:
    """Adapter that runs ``listener`` once, then drops itself from ``listeners``.

    The adapter, not the wrapped callable, is what gets stored, deduplicated
    and disposed.
    """

    __slots__ = ("listener", "_listeners")

    def __init__(self, listeners: List[Listener], listener: Listener) -> None:
        self.listener = listener
        self._listeners = listeners

    def __call__(self, *args: Any) -> None:
        self.listener(*args)
        _remove(self._listeners, self)

    def __repr__(self) -> str:
        return f"<_OnceListener {_describe(self.listener)}>"


class Registration:
    """Handle returned by :meth:`Emitter.on` and :meth:`Emitter.once`."""

    __slots__ = ("_emitter", "event_name", "listener", "_disposed")

    def __init__(self, emitter: "Emitter", event_name: str, listener: Listener) -> None:
        self._emitter = emitter
        self.event_name = event_name
        self.listener = listener
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Remove this listener from its event. Later calls do nothing."""
        if self._disposed:
            return
        self._disposed = True
        self._emitter.off(self.event_name, self.listener)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"<Registration '{self.event_name}' {_describe(self.listener)} {state}>"


class Emitter:
    """Synchronous named-event emitter.

    Each event name maps to a list of listeners. New listeners are appended
    and ``emit`` walks the list from the back, so the most recently
    registered listener runs first. ``prepend_listener`` stores at the
    front, which makes the listener run last.

    Not thread-safe; callers sharing an instance across threads must
    serialize access themselves.
    """

    def __init__(self) -> None:
        self._events: Dict[str, List[Listener]] = {}

    def on(self, event_name: str, listener: Listener) -> Registration:
        """Register ``listener`` for ``event_name``.

        Args:
            event_name: Event channel name.
            listener: Callable receiving the positional arguments given to ``emit``.

        Returns:
            Registration whose ``dispose()`` removes this listener.
        """
        self._add(event_name, listener, prepend=False)
        return Registration(self, event_name, listener)

    def once(self, event_name: str, listener: Listener) -> Registration:
        """Register ``listener`` to run on the next ``emit`` only."""
        _require_callable(listener)
        wrapper = _OnceListener(self._sequence(event_name), listener)
        self._add(event_name, wrapper, prepend=False)
        return Registration(self, event_name, wrapper)

    def prepend_listener(self, event_name: str, listener: Listener) -> "Emitter":
        """Register ``listener`` so it runs after every other listener of the event."""
        self._add(event_name, listener, prepend=True)
        return self

    def prepend_once_listener(self, event_name: str, listener: Listener) -> "Emitter":
        """Register ``listener`` to run once, after every other listener of the event."""
        _require_callable(listener)
        wrapper = _OnceListener(self._sequence(event_name), listener)
        self._add(event_name, wrapper, prepend=True)
        return self

    def off(self, event_name: str, listener: Optional[Listener] = None) -> "Emitter":
        """Remove ``listener`` from ``event_name``, or every listener when omitted.

        Unknown events and unregistered listeners are ignored.
        """
        listeners = self._events.get(event_name)
        if listeners is None:
            return self
        if listener is None:
            # Cleared in place so running emits and once adapters see it.
            del listeners[:]
            logger.debug("Cleared all listeners from event '%s'", event_name)
        elif _remove(listeners, listener):
            logger.debug("Removed listener %s from event '%s'", _describe(listener), event_name)
        return self

    def emit(self, event_name: str, *args: Any) -> "Emitter":
        """Invoke the listeners of ``event_name`` with ``args``.

        The live list is walked by index from last to first, so listeners
        added or removed during the pass shift what is visited. Exceptions
        from a listener propagate and end the pass.

        Returns:
            This emitter, for chaining.
        """
        listeners = self._events.get(event_name)
        if not listeners:
            logger.debug("Emitting '%s' with no listeners", event_name)
            return self
        logger.debug("Emitting '%s' to %d listeners", event_name, len(listeners))
        index = len(listeners) - 1
        while index > -1:
            if index < len(listeners):
                listeners[index](*args)
            index -= 1
        return self

    def event_names(self) -> List[str]:
        """Return every event name that has been registered against."""
        return list(self._events)

    def listeners(self, event_name: str) -> List[Listener]:
        """Return a copy of the stored listeners, in storage order (not emit order)."""
        return list(self._events.get(event_name, ()))

    def _sequence(self, event_name: str) -> List[Listener]:
        return self._events.setdefault(event_name, [])

    def _add(self, event_name: str, listener: Listener, prepend: bool) -> None:
        _require_callable(listener)
        listeners = self._sequence(event_name)
        if _index(listeners, listener) >= 0:
            logger.debug("Listener %s already registered for event '%s'", _describe(listener), event_name)
            return
        if prepend:
            listeners.insert(0, listener)
        else:
            listeners.append(listener)
        logger.debug("Registered listener %s for event '%s'", _describe(listener), event_name)


def create_emitter() -> Emitter:
    """Return a new, independent :class:`Emitter`."""
    return Emitter()
