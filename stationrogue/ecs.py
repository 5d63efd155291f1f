"""A small entity-component-system core: entities, components, events and systems."""

from __future__ import annotations

import itertools
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

EntityID = int
ComponentID = int
EventType = str
EventHandler = Callable[["Event"], None]
GenericEventListener = Callable[["World", Any], None]

_id_counter = itertools.count(1)
_id_lock = threading.Lock()


def new_entity_id() -> EntityID:
    """Return a fresh, process-wide unique entity id (starting at 1)."""
    with _id_lock:
        return next(_id_counter)


@dataclass(eq=False)
class Entity:
    """A game object identified by an id and carrying a set of tags."""

    id: EntityID = field(default_factory=new_entity_id)
    tags: set[str] = field(default_factory=set)

    def add_tag(self, tag: str) -> None:
        self.tags.add(tag)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def remove_tag(self, tag: str) -> None:
        self.tags.discard(tag)


class Event(ABC):
    """Base class for typed events dispatched through an EventManager."""

    @abstractmethod
    def event_type(self) -> EventType:
        """Return the type key under which handlers are subscribed."""


class EventManager:
    """Keeps handlers per event type and dispatches events to them."""

    def __init__(self) -> None:
        self._subscribers: dict[EventType, list[EventHandler]] = {}

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._subscribers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        handlers = self._subscribers.get(event_type)
        if handlers is None:
            return
        remaining = [h for h in handlers if h != handler]
        if remaining:
            self._subscribers[event_type] = remaining
        else:
            del self._subscribers[event_type]

    def emit(self, event: Event) -> None:
        for handler in list(self._subscribers.get(event.event_type(), ())):
            handler(event)

    def handlers(self, event_type: EventType) -> list[EventHandler]:
        """Return a copy of the handlers subscribed to an event type."""
        return list(self._subscribers.get(event_type, ()))


class System(ABC):
    """Something the world runs once per frame."""

    @abstractmethod
    def update(self, world: "World", dt: float) -> None:
        """Process the world for one frame of length dt seconds."""


class World:
    """Owns all entities, their components, the systems and event routing."""

    def __init__(self) -> None:
        self._entities: dict[EntityID, Entity] = {}
        self._components: dict[EntityID, dict[ComponentID, Any]] = {}
        self._systems: list[System] = []
        self._entity_tags: dict[str, dict[EntityID, None]] = {}
        self.event_manager = EventManager()
        self._generic_listeners: list[GenericEventListener] = []

    @property
    def systems(self) -> list[System]:
        return list(self._systems)

    def create_entity(self) -> Entity:
        entity = Entity()
        self._entities[entity.id] = entity
        self._components[entity.id] = {}
        return entity

    def remove_entity(self, entity_id: EntityID) -> None:
        entity = self._entities.get(entity_id)
        if entity is None:
            return
        for tag in entity.tags:
            tagged = self._entity_tags.get(tag)
            if tagged is None:
                continue
            tagged.pop(entity_id, None)
            if not tagged:
                del self._entity_tags[tag]
        self._components.pop(entity_id, None)
        del self._entities[entity_id]

    def add_component(self, entity_id: EntityID, component_id: ComponentID, component: Any) -> None:
        """Attach a component; silently ignored for unknown entities."""
        if entity_id not in self._entities:
            return
        self._components.setdefault(entity_id, {})[component_id] = component

    def get_component(self, entity_id: EntityID, component_id: ComponentID) -> Any | None:
        """Return the component, or None if the entity does not have it."""
        return self._components.get(entity_id, {}).get(component_id)

    def has_component(self, entity_id: EntityID, component_id: ComponentID) -> bool:
        return component_id in self._components.get(entity_id, {})

    def remove_component(self, entity_id: EntityID, component_id: ComponentID) -> None:
        self._components.get(entity_id, {}).pop(component_id, None)

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def update(self, dt: float) -> None:
        for system in self._systems:
            system.update(self, dt)

    def tag_entity(self, entity_id: EntityID, tag: str) -> None:
        entity = self._entities.get(entity_id)
        if entity is None:
            return
        entity.add_tag(tag)
        self._entity_tags.setdefault(tag, {})[entity_id] = None

    def entities_with_tag(self, tag: str) -> list[Entity]:
        tagged: Iterable[EntityID] = self._entity_tags.get(tag, {})
        return [self._entities[eid] for eid in tagged if eid in self._entities]

    def all_entities(self) -> list[Entity]:
        return list(self._entities.values())

    def register_event_listener(self, listener: GenericEventListener) -> None:
        self._generic_listeners.append(listener)

    def emit_event(self, event: Any) -> None:
        """Route typed events to subscribers, then give any event to generic listeners."""
        if isinstance(event, Event):
            self.event_manager.emit(event)
        for listener in list(self._generic_listeners):
            listener(self, event)

    def get_entity(self, entity_id: EntityID) -> Entity | None:
        return self._entities.get(entity_id)

    def entities_with_component(self, component_id: ComponentID) -> list[Entity]:
        return [
            self._entities[eid]
            for eid, components in self._components.items()
            if component_id in components and eid in self._entities
        ]