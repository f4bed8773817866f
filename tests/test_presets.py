import json

import pytest

from ballsim.errors import InvalidArgument
from ballsim.presets_loader import (
    BUILTIN_SCENARIOS,
    get_scenario,
    list_scenario_files,
    list_scenarios,
    load_scenario_file,
)
from ballsim.vector import Vector


def write_json(path, data) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


TRIO = {
    "name": "trio",
    "description": "three in a row",
    "bodies": [
        {"name": "left", "position": [0, 0], "velocity": [0, 1], "mass": 10},
        {"position": [50, 0], "velocity": [0, 0], "mass": 20.5},
        {"position": [100, 0], "velocity": [0, -1], "mass": 10},
    ],
}


def test_builtin_scenarios_match_reference_data() -> None:
    dancing = BUILTIN_SCENARIOS["dancing balls"].spawn()
    assert [(b.position, b.velocity, b.mass) for b in dancing] == [
        (Vector(100, 100), Vector(0, 40), 100000),
        (Vector(250, 200), Vector(0, 0), 300000),
        (Vector(300, 300), Vector(0, -40), 100000),
    ]
    ejected = BUILTIN_SCENARIOS["ejected ball"].spawn()
    assert ejected[1].position == Vector(200, 200)
    assert ejected[1].mass == 300000


def test_load_scenario_file(tmp_path) -> None:
    scenario = load_scenario_file(write_json(tmp_path / "trio.json", TRIO))
    assert scenario.name == "trio"
    assert scenario.description == "three in a row"
    bodies = scenario.spawn()
    assert [b.name for b in bodies] == ["left", "", ""]
    assert bodies[1].mass == 20.5
    assert bodies[2].velocity == Vector(0, -1)


def test_name_defaults_to_file_name(tmp_path) -> None:
    data = dict(TRIO)
    del data["name"]
    assert load_scenario_file(write_json(tmp_path / "unnamed.json", data)).name == "unnamed"


@pytest.mark.parametrize("body, field", [
    ({"position": [0, 0], "velocity": [0, 0], "mass": 0}, "bodies[0].mass"),
    ({"position": [0, 0], "velocity": [0, 0], "mass": "big"}, "bodies[0].mass"),
    ({"position": [0], "velocity": [0, 0], "mass": 1}, "pair"),
    ({"position": [0, "x"], "velocity": [0, 0], "mass": 1}, "y"),
    ({"velocity": [0, 0], "mass": 1}, "bodies[0]"),
    ([1, 2, 3], "bodies[0]"),
])
def test_invalid_bodies_are_rejected(tmp_path, body, field) -> None:
    path = write_json(tmp_path / "bad.json", {"name": "bad", "bodies": [body]})
    with pytest.raises(InvalidArgument) as excinfo:
        load_scenario_file(path)
    assert excinfo.value.field == field


def test_unreadable_file_is_rejected(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidArgument) as excinfo:
        load_scenario_file(str(path))
    assert excinfo.value.field == "path"
    with pytest.raises(InvalidArgument):
        load_scenario_file(str(tmp_path / "missing.json"))


def test_listing_skips_invalid_and_shadowing_files(tmp_path) -> None:
    write_json(tmp_path / "a_trio.json", TRIO)
    write_json(tmp_path / "b_shadow.json", {"name": "dancing balls", "bodies": []})
    (tmp_path / "c_broken.json").write_text("[", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    files = list_scenario_files(str(tmp_path))
    assert [fn for fn, _ in files] == ["a_trio.json"]
    assert list_scenarios(str(tmp_path)) == ["ejected ball", "dancing balls", "trio"]


def test_get_scenario(tmp_path) -> None:
    write_json(tmp_path / "trio.json", TRIO)
    assert get_scenario("trio", str(tmp_path)).name == "trio"
    assert get_scenario("dancing balls", None) is BUILTIN_SCENARIOS["dancing balls"]
    with pytest.raises(InvalidArgument) as excinfo:
        get_scenario("no such scenario", str(tmp_path))
    assert excinfo.value.field == "scenario"


def test_missing_directory_lists_only_builtins(tmp_path) -> None:
    assert list_scenarios(str(tmp_path / "nowhere")) == list(BUILTIN_SCENARIOS)


def test_bundled_scenario_files_load() -> None:
    names = list_scenarios()
    assert names[:2] == ["ejected ball", "dancing balls"]
    assert "binary pair" in names
    assert len(get_scenario("binary pair").spawn()) == 2


def test_huge_int_mass_is_rejected(tmp_path) -> None:
    path = write_json(tmp_path / "huge.json", {
        "name": "huge",
        "bodies": [{"position": [0, 0], "velocity": [0, 0], "mass": 10 ** 400}],
    })
    with pytest.raises(InvalidArgument) as excinfo:
        load_scenario_file(path)
    assert excinfo.value.field == "bodies[0].mass"


def test_listing_skips_huge_int_file(tmp_path) -> None:
    write_json(tmp_path / "huge.json", {
        "name": "huge",
        "bodies": [{"position": [10 ** 400, 0], "velocity": [0, 0], "mass": 1}],
    })
    assert list_scenarios(str(tmp_path)) == ["ejected ball", "dancing balls"]
