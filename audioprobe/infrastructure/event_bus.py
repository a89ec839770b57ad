import logging
import threading
from typing import Type, Callable, List, Dict, Any, Optional
from audioprobe.domain.events import Event

logger = logging.getLogger(__name__)

class EventBus:
    """Synchronous pub/sub bus between the batch scheduler and its observers.

    Callbacks run on the publishing thread. A failing callback is logged and
    skipped so observers can never break the publisher.
    """

    def __init__(self):
        self._subscribers: Dict[Type[Event], List[Callable[[Any], None]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[Event], callback: Optional[Callable[[Any], None]] = None):
        """Subscribes a callback to a specific event type. Can be used as a decorator."""
        if callback is None:
            def decorator(func: Callable[[Any], None]):
                self.subscribe(event_type, func)
                return func
            return decorator

        with self._lock:
            self._subscribers.setdefault(event_type, []).append(callback)

    def publish(self, event: Event):
        """Delivers an event to the subscribers of its exact type."""
        with self._lock:
            callbacks = list(self._subscribers.get(type(event), []))
        for callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                logger.warning(f"Subscriber failed for {type(event).__name__}: {e}")
