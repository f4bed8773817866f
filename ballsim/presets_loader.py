#!/usr/bin/env python3
"""
Scenario catalogue: built-in scenarios plus JSON scenario files.

Schema
======
Scenario JSON (scenarios/*.json):
{
  "name": "Human-friendly scenario name",
  "description": "Optional description",
  "bodies": [
    {
      "name": "Optional body name",
      "position": [100.0, 100.0],
      "velocity": [0.0, 40.0],
      "mass": 100000.0
    }
  ]
}

Users can add their own JSON files into the scenarios folder and they'll be
picked up by list_scenarios()/get_scenario(). Built-in names cannot be shadowed.
"""
import json
import logging
import os
from typing import Dict, List, Optional, Tuple

from .data_models import BodySpec, Scenario
from .errors import InvalidArgument
from .vector import Vector, check_number

logger = logging.getLogger(__name__)

SCENARIOS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "scenarios")

BUILTIN_SCENARIOS: Dict[str, Scenario] = {
  "ejected ball": Scenario(
    name="ejected ball",
    description=(
      "The second ball remains static for a long time while the others orbit it; "
      "after the third orbit one ball is ejected and the other two stay in a close orbit."
    ),
    bodies=(
      BodySpec((100, 100), (0, 40), 100000),
      BodySpec((200, 200), (0, 0), 300000),
      BodySpec((300, 300), (0, -40), 100000),
    ),
  ),
  "dancing balls": Scenario(
    name="dancing balls",
    description="The balls perform an interesting dance before one of them gets ejected.",
    bodies=(
      BodySpec((100, 100), (0, 40), 100000),
      BodySpec((250, 200), (0, 0), 300000),
      BodySpec((300, 300), (0, -40), 100000),
    ),
  ),
}


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    raise InvalidArgument("path", path, f"a readable scenario file ({exc})") from exc
  if not isinstance(data, dict):
    raise InvalidArgument("path", path, "a JSON object")
  return data


def _parse_body(raw, index: int) -> BodySpec:
  field = f"bodies[{index}]"
  if not isinstance(raw, dict):
    raise InvalidArgument(field, raw, "a JSON object")
  try:
    position = Vector.from_pair(raw["position"])
    velocity = Vector.from_pair(raw["velocity"])
    mass = raw["mass"]
  except KeyError as exc:
    raise InvalidArgument(field, raw, f"a body with {exc.args[0]!r}") from None
  check_number(mass, f"{field}.mass")
  if mass <= 0:
    raise InvalidArgument(f"{field}.mass", mass, "a positive number")
  return BodySpec((position.x, position.y), (velocity.x, velocity.y), mass, str(raw.get("name", "")))


def load_scenario_file(path: str) -> Scenario:
  """
  Parse a single scenario JSON file.

  Raises InvalidArgument if the file cannot be read or any value is invalid.
  """
  data = _read_json(path)
  name = data.get("name") or os.path.splitext(os.path.basename(path))[0]
  raw_bodies = data.get("bodies", [])
  if not isinstance(raw_bodies, list):
    raise InvalidArgument("bodies", raw_bodies, "a list")
  bodies = tuple(_parse_body(b, i) for i, b in enumerate(raw_bodies))
  return Scenario(name=str(name), bodies=bodies, description=str(data.get("description", "")))


def list_scenario_files(directory: str = SCENARIOS_DIR) -> List[Tuple[str, Scenario]]:
  """Return (file_name, scenario) for every valid JSON file in directory, sorted by file name."""
  items: List[Tuple[str, Scenario]] = []
  if not os.path.isdir(directory):
    return items
  for fn in sorted(os.listdir(directory)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      scenario = load_scenario_file(os.path.join(directory, fn))
    except InvalidArgument as exc:
      logger.warning("Skipping scenario file %s: %s", fn, exc)
      continue
    if scenario.name in BUILTIN_SCENARIOS:
      logger.warning("Skipping scenario file %s: %r is a built-in scenario", fn, scenario.name)
      continue
    items.append((fn, scenario))
  return items


def _catalogue(directory: Optional[str]) -> Dict[str, Scenario]:
  scenarios = dict(BUILTIN_SCENARIOS)
  if directory is not None:
    for _, scenario in list_scenario_files(directory):
      scenarios.setdefault(scenario.name, scenario)
  return scenarios


def list_scenarios(directory: Optional[str] = SCENARIOS_DIR) -> List[str]:
  """Names of the built-in scenarios followed by those found in directory."""
  return list(_catalogue(directory))


def get_scenario(name: str, directory: Optional[str] = SCENARIOS_DIR) -> Scenario:
  """Look a scenario up by name; raises InvalidArgument for unknown names."""
  try:
    return _catalogue(directory)[name]
  except KeyError:
    raise InvalidArgument("scenario", name, "a known scenario name") from None
