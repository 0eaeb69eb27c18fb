import collections
from typing import Any, Callable

EventListener = Callable[..., Any]


class EventEmitter:
    listeners: dict[str, list[EventListener]]

    def __init__(self, names: frozenset[str] | None = None):
        """
        :param names: the accepted event names, any name if None
        """
        self.names = names
        self.listeners = collections.defaultdict(list)

    def _check_name(self, name: str) -> None:
        if self.names is not None and name not in self.names:
            raise ValueError(f"Unknown event {name!r}")

    def add_listener(
        self,
        name: str,
        fn: EventListener,
        prepend: bool = False,
    ) -> None:
        self._check_name(name)
        listeners = self.listeners[name]

        if prepend:
            listeners.insert(0, fn)
        else:
            listeners.append(fn)

    def remove_listener(self, name: str, fn: EventListener) -> bool:
        listeners = self.listeners.get(name)
        if not listeners or fn not in listeners:
            return False
        listeners.remove(fn)
        return True

    def emit(self, /, name: str, *args: Any) -> None:
        self._check_name(name)
        # copy so a listener may detach itself while being called
        for fn in list(self.listeners.get(name, ())):
            fn(*args)
