"""Subscription handles and a minimal event emitter."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional


class Disposable:
    """Releases one subscription when ``dispose`` is called."""

    def __init__(self, callback: Optional[Callable[[], None]] = None) -> None:
        self._callback = callback
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


class CompositeDisposable(Disposable):
    """Owns a set of disposables and releases them together."""

    def __init__(self, *disposables: Disposable) -> None:
        super().__init__()
        self._children: List[Disposable] = []
        self.add(*disposables)

    def add(self, *disposables: Disposable) -> None:
        for disposable in disposables:
            if self.disposed:
                disposable.dispose()
            elif disposable not in self._children:
                self._children.append(disposable)

    def remove(self, disposable: Disposable) -> None:
        if disposable in self._children:
            self._children.remove(disposable)

    def clear(self) -> None:
        self._children.clear()

    def dispose(self) -> None:
        if self.disposed:
            return
        self._disposed = True
        children, self._children = self._children, []
        for child in children:
            child.dispose()

    def __len__(self) -> int:
        return len(self._children)


class Emitter:
    """Named-event bus; ``on`` hands back a ``Disposable`` for the listener."""

    def __init__(self) -> None:
        self._listeners: Dict[str, list[Callable[[object], None]]] = {}

    def on(self, event: str, callback: Callable[[object], None]) -> Disposable:
        self._listeners.setdefault(event, []).append(callback)
        return Disposable(lambda: self._off(event, callback))

    def _off(self, event: str, callback: Callable[[object], None]) -> None:
        listeners = self._listeners.get(event)
        if not listeners:
            return
        try:
            listeners.remove(callback)
        except ValueError:
            return
        if not listeners:
            del self._listeners[event]

    def emit(self, event: str, payload: object | None = None) -> None:
        # Listeners added mid-dispatch only see the next emit; removed ones are skipped.
        for callback in tuple(self._listeners.get(event, ())):
            if callback in self._listeners.get(event, ()):
                callback(payload)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def clear(self) -> None:
        self._listeners.clear()


__all__ = ["CompositeDisposable", "Disposable", "Emitter"]
