# stationrogue

The building blocks of a tile-based roguelike set on a derelict space station.
The package uses only the standard library.

## Modules

- `stationrogue.ecs`: an entity-component-system core.
  - `World` owns entities, their components, systems and event routing:
    `create_entity`, `remove_entity`, `add_component`, `get_component`
    (returns `None` when absent), `has_component`, `remove_component`,
    `tag_entity`, `entities_with_tag`, `entities_with_component`,
    `all_entities`, `get_entity`, `add_system`, `update(dt)`,
    `register_event_listener` and `emit_event`.
  - `Entity` carries an id (from `new_entity_id()`, unique per process and
    starting at 1) and a set of tags.
  - `Event` and `System` are abstract base classes; `EventManager` keeps
    handlers per event type (`subscribe`, `unsubscribe`, `emit`).
- `stationrogue.component_registry`: the `ComponentID` enum,
  `component_id_by_name` (exact match first, then case-insensitive; `None` if
  unknown), and `get_component_property` / `set_component_property`, which read
  and write fields of dataclass components by field name or CamelCase name,
  converting numbers where the field type allows.
- `stationrogue.components`: component dataclasses such as
  `PositionComponent`, `RenderableComponent`, `StatsComponent`,
  `CollisionComponent`, `AIComponent`, `CameraComponent`,
  `InventoryComponent`, `ItemComponent`, `FOVComponent`,
  `EquipmentComponent` (with the `EquipmentSlot` enum and `ItemEffect`),
  `ContainerComponent`, `MapContextComponent`, `MapTransitionComponent`
  (with `TransitionType`), `MapTypeComponent`, `NameComponent`, and the `RGBA`
  colour.
- `stationrogue.maps`: `TileType`, `TileDefinition`, `TileMappingComponent`
  (`TileMappingComponent.default()` builds the standard mapping; unknown tile
  types give a magenta `?`), and `MapComponent`, a grid that starts as all
  walls with visibility and exploration flags. Wall detection, floor detection
  and box-drawing wall conversion are pluggable through
  `register_wall_detector`, `register_floor_detector` and
  `register_box_drawing`; `debug_wall_detection()` prints how each wall tile
  type is classified.
- `stationrogue.templates`: `EntityTemplate`, `ItemTemplate` and
  `ContainerTemplate` (with `InitialItem`, `LootEntry`, `LootTable`), loaded
  from JSON by `EntityTemplateManager`; `parse_hex_color`,
  `validate_item_template` and `validate_container_template`. Read, decode
  and validation failures raise `TemplateError`.
- `stationrogue.config`: screen and tile layout constants,
  `screen_dimensions()` and `window_size()`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from stationrogue.ecs import World
from stationrogue.component_registry import ComponentID
from stationrogue.components import PositionComponent, InventoryComponent

world = World()
player = world.create_entity()
world.tag_entity(player.id, "player")
world.add_component(player.id, ComponentID.POSITION, PositionComponent(3, 4))
world.add_component(player.id, ComponentID.INVENTORY, InventoryComponent(max_capacity=10))

position = world.get_component(player.id, ComponentID.POSITION)
print(position.x, position.y)
```

Component properties can be read and written by name, for example when item
effects come from data files:

```python
from stationrogue.component_registry import component_id_by_name, set_component_property
from stationrogue.components import StatsComponent

stats = StatsComponent(health=10, max_health=10)
set_component_property(stats, "Attack", 5)
component_id = component_id_by_name("stats")
```

Templates are loaded from directories of JSON files, in file-name order:

```python
from stationrogue.templates import EntityTemplateManager, TemplateError

manager = EntityTemplateManager()
try:
    manager.load_templates_from_directory("data/monsters")
    manager.load_item_templates_from_directory("data/items")
    manager.load_container_templates_from_directory("data/containers")
except TemplateError as exc:
    print(f"Warning: {exc}")
```

## What this package does not do

This is a library of game data structures, not a playable game. It has no
command to run, no window, rendering or tileset loading, no input handling,
no sound, and no map or dungeon generation. It ships no concrete systems
(movement, combat, AI, field of view and so on) and no template data files;
`System` is only the base class such systems would derive from.