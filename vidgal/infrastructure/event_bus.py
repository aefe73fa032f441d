from typing import Type, Callable, List, Dict, Any, Optional
from vidgal.domain.events import Event

class EventBus:
    """A simple synchronous event bus for decoupled communication."""

    def __init__(self):
        self._subscribers: Dict[Type[Event], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[Event], callback: Optional[Callable[[Any], None]] = None):
        """Subscribes a callback to a specific event type. Can be used as a decorator."""
        if callback is None:
            def decorator(func: Callable[[Any], None]):
                self.subscribe(event_type, func)
                return func
            return decorator

        self._subscribers.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: Type[Event], callback: Callable[[Any], None]):
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def publish(self, event: Event):
        """Publishes an event to subscribers of its exact type."""
        for callback in list(self._subscribers.get(type(event), [])):
            callback(event)
