import pytest

from stationrogue.component_registry import get_component_property, set_component_property
from stationrogue.components import (
    BLACK,
    MAP_TRANSITION,
    AIComponent,
    CameraComponent,
    CollisionComponent,
    ContainerComponent,
    EquipmentComponent,
    EquipmentSlot,
    FOVComponent,
    InventoryComponent,
    ItemComponent,
    ItemEffect,
    MapContextComponent,
    MapTransitionComponent,
    MapTypeComponent,
    NameComponent,
    PathNode,
    PositionComponent,
    RenderableComponent,
    RGBA,
    StatsComponent,
    TransitionType,
)


def test_renderable_from_glyph():
    fg = RGBA(10, 20, 30)
    r = RenderableComponent.from_glyph("@", fg)
    assert r.char == "@"
    assert r.use_tile_pos is False
    assert r.fg == fg
    assert r.bg == RGBA(0, 0, 0, 255)


def test_renderable_from_tile_pos():
    fg = RGBA(1, 2, 3)
    r = RenderableComponent.from_tile_pos(4, 12, fg)
    assert (r.tile_x, r.tile_y) == (4, 12)
    assert r.use_tile_pos is True
    assert r.bg == BLACK


def test_rgba_default_alpha():
    assert RGBA(5, 6, 7).a == 255


def test_inventory_capacity():
    inv = InventoryComponent(max_capacity=2)
    assert inv.has_space() and not inv.is_full()
    assert inv.add_item(11)
    assert inv.add_item(12)
    assert not inv.add_item(13)
    assert inv.is_full() and not inv.has_space()
    assert len(inv) == 2
    assert inv.items == [11, 12]


def test_inventory_remove_swaps_last():
    inv = InventoryComponent(max_capacity=5)
    for item in (1, 2, 3, 4):
        inv.add_item(item)
    assert inv.remove_item(2)
    assert inv.items == [1, 4, 3]
    assert not inv.remove_item(99)
    assert inv.remove_item(3)
    assert inv.items == [1, 4]


def test_inventory_item_at():
    inv = InventoryComponent(max_capacity=3, items=[7, 8])
    assert inv.item_at(0) == 7
    assert inv.item_at(1) == 8
    assert inv.item_at(2) == 0
    assert inv.item_at(-1) == 0


def test_inventory_instances_do_not_share_items():
    a = InventoryComponent(max_capacity=3)
    b = InventoryComponent(max_capacity=3)
    a.add_item(1)
    assert b.items == []


def test_item_component_defaults_and_template():
    item = ItemComponent("potion", 5, 1)
    assert item.description == "" and item.template_id == "" and item.data is None
    t = ItemComponent.from_template("small_potion", "potion", 5, 1, "heals")
    assert t.template_id == "small_potion"
    assert t.item_type == "potion"
    assert t.description == "heals"
    assert (t.value, t.weight) == (5, 1)


def test_fov_components():
    plain = FOVComponent(8)
    assert plain.range == 8 and plain.emits_light is False and plain.light_range == 0
    lit = FOVComponent.light_source(8, 4)
    assert lit.emits_light is True
    assert (lit.range, lit.light_range) == (8, 4)


def test_equipment_slot_values():
    assert EquipmentSlot.MAIN_HAND.value == "mainhand"
    assert EquipmentSlot("offhand") is EquipmentSlot.OFF_HAND


def test_equip_and_unequip():
    eq = EquipmentComponent()
    assert not eq.is_slot_occupied(EquipmentSlot.HEAD)
    assert eq.equipped_item(EquipmentSlot.HEAD) == 0
    eq.equip_item(EquipmentSlot.HEAD, 42)
    assert eq.is_slot_occupied(EquipmentSlot.HEAD)
    assert eq.equipped_item(EquipmentSlot.HEAD) == 42
    assert eq.unequip_item(EquipmentSlot.HEAD) == 42
    assert not eq.is_slot_occupied(EquipmentSlot.HEAD)
    assert eq.unequip_item(EquipmentSlot.HEAD) == 0


def test_equipment_effects():
    eq = EquipmentComponent()
    e1 = ItemEffect("Stats", "Attack", "add", 2)
    e2 = ItemEffect("Stats", "Defense", "add", 1)
    e3 = ItemEffect("Stats", "MaxHealth", "set", 30)
    eq.add_effect(1, e1)
    eq.add_effect(1, e2)
    eq.add_effect(2, e3)
    effects = eq.all_effects()
    assert len(effects) == 3
    assert {e.property for e in effects} == {"Attack", "Defense", "MaxHealth"}
    eq.remove_effects(1)
    assert eq.all_effects() == [e3]
    eq.remove_effects(99)
    assert eq.all_effects() == [e3]


def test_container_add_and_remove_keeps_order():
    c = ContainerComponent(max_capacity=3)
    assert (c.locked, c.key_id, c.looted) == (False, "", False)
    assert c.add_item(1) and c.add_item(2) and c.add_item(3)
    assert not c.add_item(4)
    assert c.remove_item(1)
    assert c.items == [2, 3]
    assert not c.remove_item(1)


def test_map_context_and_name():
    assert MapContextComponent(5).map_id == 5
    assert NameComponent("Rat").name == "Rat"


def test_transition_components():
    assert TransitionType.STAIRS_DOWN == 0
    assert TransitionType.STAIRS_UP == 1
    assert TransitionType.PORTAL == 2
    assert MAP_TRANSITION == "map_transition"
    t = MapTransitionComponent(TransitionType.STAIRS_UP, "worldmap", 3, 4)
    assert t.destination_map_type == "worldmap"
    assert (t.destination_x, t.destination_y) == (3, 4)
    m = MapTypeComponent("starting_station", 1)
    assert (m.map_type, m.level) == ("starting_station", 1)


def test_camera_and_ai_defaults():
    cam = CameraComponent(target=9)
    assert (cam.x, cam.y, cam.target) == (0, 0, 9)
    ai = AIComponent(type="chase", sight_range=6)
    ai.path.append(PathNode(1, 2))
    assert AIComponent().path == []
    assert ai.path[0] == PathNode(1, 2)


def test_stats_properties_via_registry():
    stats = StatsComponent(health=10, max_health=10)
    set_component_property(stats, "MaxHealth", 25.9)
    assert stats.max_health == 25
    assert get_component_property(stats, "MaxHealth") == 25
    with pytest.raises(ValueError):
        set_component_property(stats, "Attack", "strong")


def test_position_and_collision_via_registry():
    pos = PositionComponent(1, 2)
    set_component_property(pos, "X", 7)
    assert pos.x == 7
    col = CollisionComponent()
    set_component_property(col, "Blocks", True)
    assert col.blocks is True
    with pytest.raises(AttributeError):
        get_component_property(pos, "Z")