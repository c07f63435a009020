import json

import pytest

import run
from dungeonforge.dungeon import (
    ConfigurationError,
    EnemyDescriptor,
    RoomCatalog,
    RoomContent,
    RoomRole,
    default_catalog,
    load_catalog,
)


def test_default_catalog_landmarks():
    catalog = default_catalog()
    assert catalog.for_role(RoomRole.SPAWN).landmark == "player"
    assert catalog.for_role(RoomRole.EXIT).landmark == "exit"
    assert catalog.for_role(RoomRole.TREASURE).landmark == "treasure_chest"
    assert catalog.for_role(RoomRole.SHOP).landmark == "merchant"
    assert catalog.for_role(RoomRole.GENERIC).landmark is None


def test_default_catalog_enemy_rooms():
    catalog = default_catalog()
    for role in (RoomRole.GENERIC, RoomRole.TREASURE):
        content = catalog.for_role(role)
        assert content.can_spawn_enemies and content.enemies
    for role in (RoomRole.SPAWN, RoomRole.EXIT, RoomRole.SHOP):
        assert not catalog.for_role(role).can_spawn_enemies


def test_missing_role_is_bare():
    catalog = RoomCatalog({RoomRole.SPAWN: RoomContent(landmark="player")})
    content = catalog.for_role(RoomRole.SHOP)
    assert content.landmark is None and content.objects == [] and not content.can_spawn_enemies


def test_dict_round_trip_preserves_content():
    catalog = default_catalog()
    again = RoomCatalog.from_dict(json.loads(json.dumps(catalog.to_dict())))
    assert again.contents == catalog.contents


def test_enemy_room_without_enemies_rejected():
    with pytest.raises(ConfigurationError):
        RoomCatalog({RoomRole.GENERIC: RoomContent(can_spawn_enemies=True)})


def test_bad_quantity_range_rejected():
    with pytest.raises(ConfigurationError):
        RoomCatalog(
            {RoomRole.GENERIC: RoomContent(enemies=[EnemyDescriptor("rat", 3, 1)], can_spawn_enemies=True)}
        )


@pytest.mark.parametrize(
    "data",
    [
        {"dragon_lair": {}},
        {"spawn": ["player"]},
        {"spawn": {"objects": [{"name": "lamp", "glow": 3}]}},
        {"generic": {"objects": [{"name": "barrel", "width": "2"}]}},
        {"generic": {"objects": [{"name": "barrel", "near_wall": "yes"}]}},
        {"generic": {"objects": [{"name": "barrel", "unlock_level": 1.5}]}},
        {"generic": {"objects": ["barrel"]}},
        {"generic": {"enemies": [{"name": "rat", "min_quantity": 0.5}], "can_spawn_enemies": True}},
        {"generic": {"enemies": [{"name": "rat", "max_quantity": True}], "can_spawn_enemies": True}},
        {"generic": {"enemies": [{"name": "rat"}], "can_spawn_enemies": True, "enemy_picks": "two"}},
        {"generic": {"enemies": [{"name": "rat"}], "can_spawn_enemies": "sometimes"}},
        {"spawn": {"landmark": 7}},
        {"spawn": {"objects": [{"name": ""}]}},
    ],
)
def test_malformed_catalog_rejected(data):
    with pytest.raises(ConfigurationError):
        RoomCatalog.from_dict(data)


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "spawn": {"landmark": "campfire"},
                "generic": {
                    "objects": [{"name": "barrel", "width": 1, "height": 2, "near_wall": True}],
                    "enemies": [{"name": "rat", "min_quantity": 2, "max_quantity": 4}],
                    "can_spawn_enemies": True,
                    "enemy_picks": 1,
                },
            }
        ),
        encoding="utf-8",
    )
    catalog = load_catalog(path)
    assert catalog.for_role(RoomRole.SPAWN).landmark == "campfire"
    generic = catalog.for_role(RoomRole.GENERIC)
    assert generic.objects[0].near_wall and generic.objects[0].height == 2
    assert generic.enemies[0].max_quantity == 4 and generic.enemy_picks == 1


def test_load_catalog_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_catalog(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(bad)
    listy = tmp_path / "list.json"
    listy.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(listy)


def test_malformed_catalog_file_reaches_cli_as_config_error(tmp_path, capsys):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"generic": {"objects": [{"name": "barrel", "width": "2"}]}}), encoding="utf-8")
    assert run.main(["generate", "--seed", "1", "--catalog", str(path)]) == 2
    assert "width must be an integer" in capsys.readouterr().err
