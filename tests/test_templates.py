import json

import pytest

from stationrogue.components import RGBA
from stationrogue.templates import (
    ContainerTemplate,
    EntityTemplateManager,
    ItemTemplate,
    TemplateError,
    parse_hex_color,
    validate_container_template,
    validate_item_template,
)


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def manager():
    return EntityTemplateManager()


def test_parse_hex_color_valid():
    assert parse_hex_color("#00FF00") == RGBA(0x00, 0xFF, 0x00, 255)
    assert parse_hex_color("#0a0b0c") == RGBA(0x0A, 0x0B, 0x0C, 255)


def test_parse_hex_color_short_is_black():
    assert parse_hex_color("#fff") == RGBA(0, 0, 0, 255)
    assert parse_hex_color("") == RGBA(0, 0, 0, 255)


def test_parse_hex_color_malformed_is_white():
    assert parse_hex_color("#zzzzzz") == RGBA(255, 255, 255, 255)
    assert parse_hex_color("00FF00x") == RGBA(255, 255, 255, 255)


def test_load_entity_template(manager, tmp_path):
    path = _write(
        tmp_path / "rat.json",
        {
            "id": "rat",
            "name": "Rat",
            "tileX": 3,
            "tileY": 7,
            "color": "#00FF00",
            "health": 5,
            "maxActionPoints": 10,
            "aiType": "chase",
            "tags": ["enemy"],
            "blocksPath": True,
            "spawnWeight": 4,
        },
    )
    manager.load_template_from_file(path)
    rat = manager.get_template("rat")
    assert rat.name == "Rat"
    assert (rat.tile_x, rat.tile_y) == (3, 7)
    assert rat.health == 5
    assert rat.max_action_points == 10
    assert rat.ai_type == "chase"
    assert rat.tags == ["enemy"]
    assert rat.blocks_path is True
    assert rat.spawn_weight == 4
    assert rat.attack == 0


def test_entity_keys_match_case_insensitively(manager, tmp_path):
    path = _write(tmp_path / "bat.json", {"ID": "bat", "TILEX": 2})
    manager.load_template_from_file(path)
    assert manager.get_template("bat").tile_x == 2


def test_entity_template_empty_id_rejected(manager, tmp_path):
    path = _write(tmp_path / "noid.json", {"name": "Nameless"})
    with pytest.raises(TemplateError, match="template ID cannot be empty"):
        manager.load_template_from_file(path)
    assert manager.templates == {}


def test_wrong_field_type_rejected(manager, tmp_path):
    path = _write(tmp_path / "bad.json", {"id": "bad", "health": "lots"})
    with pytest.raises(TemplateError):
        manager.load_template_from_file(path)


def test_float_into_int_field_rejected(manager, tmp_path):
    path = _write(tmp_path / "bad.json", {"id": "bad", "health": 1.5})
    with pytest.raises(TemplateError):
        manager.load_template_from_file(path)


def test_invalid_json_rejected(manager, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(TemplateError):
        manager.load_template_from_file(path)


def test_missing_file_rejected(manager, tmp_path):
    with pytest.raises(TemplateError):
        manager.load_template_from_file(tmp_path / "absent.json")


def test_load_directory_skips_non_json(manager, tmp_path):
    _write(tmp_path / "a.json", {"id": "a", "name": "A"})
    _write(tmp_path / "b.json", {"id": "b", "name": "B"})
    (tmp_path / "notes.txt").write_text("ignore me", encoding="utf-8")
    manager.load_templates_from_directory(tmp_path)
    assert sorted(manager.templates) == ["a", "b"]


def test_load_directory_missing(manager, tmp_path):
    with pytest.raises(TemplateError, match="failed to read template directory"):
        manager.load_templates_from_directory(tmp_path / "nowhere")


def test_load_directory_reports_failing_file(manager, tmp_path):
    _write(tmp_path / "a.json", {"id": "a"})
    _write(tmp_path / "z.json", {"name": "no id"})
    with pytest.raises(TemplateError, match="z.json"):
        manager.load_templates_from_directory(tmp_path)
    assert manager.get_template("a") is not None and manager.get_template("a").id == "a"


def test_load_item_template(manager, tmp_path):
    path = _write(
        tmp_path / "knife.json",
        {
            "id": "knife",
            "name": "Knife",
            "item_type": "weapon",
            "tile_x": 1,
            "tile_y": 2,
            "value": 3,
            "weight": 1,
            "equip_slot": "mainhand",
            "effects": [
                {"component": "Stats", "property": "Attack", "operation": "add", "value": 2}
            ],
        },
    )
    manager.load_item_template_from_file(path)
    knife = manager.get_item_template("knife")
    assert knife.item_type == "weapon"
    assert knife.equip_slot == "mainhand"
    assert knife.effects[0]["property"] == "Attack"
    assert knife.effects[0]["value"] == 2


def test_load_item_template_invalid(manager, tmp_path):
    path = _write(tmp_path / "junk.json", {"id": "junk", "name": "Junk"})
    with pytest.raises(TemplateError, match="invalid item template"):
        manager.load_item_template_from_file(path)
    assert manager.get_item_template("junk") is None


def test_load_item_directory(manager, tmp_path):
    _write(tmp_path / "p.json", {"id": "p", "name": "Potion", "item_type": "potion"})
    manager.load_item_templates_from_directory(tmp_path)
    assert manager.get_item_template("p").name == "Potion"


def test_validate_item_template_messages():
    with pytest.raises(TemplateError, match="item template missing ID"):
        validate_item_template(ItemTemplate())
    with pytest.raises(TemplateError, match="'x' missing name"):
        validate_item_template(ItemTemplate(id="x"))
    with pytest.raises(TemplateError, match="'x' missing item_type"):
        validate_item_template(ItemTemplate(id="x", name="X"))


def test_validate_container_template_messages():
    with pytest.raises(TemplateError, match="container template missing ID"):
        validate_container_template(ContainerTemplate())
    with pytest.raises(TemplateError, match="'box' missing name"):
        validate_container_template(ContainerTemplate(id="box"))


def test_load_container_template(manager, tmp_path):
    path = _write(
        tmp_path / "starter_chest.json",
        {
            "id": "starter_chest",
            "name": "Starter Chest",
            "capacity": 10,
            "locked": False,
            "key_id": "",
            "initial_items": [{"template_id": "knife", "count": 1}],
            "loot_table": {
                "entries": [
                    {"template_id": "potion", "weight": 5, "min_count": 1, "max_count": 3}
                ]
            },
        },
    )
    manager.load_container_template_from_file(path)
    chest = manager.get_container_template("starter_chest")
    assert chest.capacity == 10
    assert chest.initial_items[0].template_id == "knife"
    assert chest.initial_items[0].count == 1
    entry = chest.loot_table.entries[0]
    assert (entry.template_id, entry.weight, entry.min_count, entry.max_count) == (
        "potion",
        5,
        1,
        3,
    )


def test_container_directory_and_missing_lookup(manager, tmp_path):
    _write(tmp_path / "c.json", {"id": "crate", "name": "Crate"})
    manager.load_container_templates_from_directory(tmp_path)
    assert manager.get_container_template("crate").loot_table.entries == []
    assert manager.get_container_template("absent") is None


def test_container_invalid(manager, tmp_path):
    path = _write(tmp_path / "c.json", {"id": "crate"})
    with pytest.raises(TemplateError, match="invalid container template"):
        manager.load_container_template_from_file(path)


def test_getters_return_none_for_unknown(manager):
    assert manager.get_template("ghost") is None
    assert manager.get_item_template("ghost") is None