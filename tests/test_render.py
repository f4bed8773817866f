from ballsim.data_models import Body
from ballsim.presets_loader import BUILTIN_SCENARIOS
from ballsim.render import BallItem, BallRenderer, DrawingSurface
from ballsim.simulation import SimulationRun
from ballsim.vector import Vector


class RecordingSurface(DrawingSurface):
    def __init__(self):
        self.calls = []

    def clear_rect(self, x, y, w, h):
        self.calls.append(("clear", x, y, w, h))

    def fill_circle(self, cx, cy, r, color):
        self.calls.append(("circle", cx, cy, r))


def test_ball_item_rectangle_uses_rounded_position() -> None:
    item = BallItem(Body(Vector(10.5, 20.4), Vector(0, 0), 1), radius=5)
    assert item.rectangle == (6, 15, 11, 11)


def test_first_frame_only_draws() -> None:
    run = SimulationRun.from_scenario(BUILTIN_SCENARIOS["dancing balls"])
    surface = RecordingSurface()
    BallRenderer(run, surface).frame()
    assert surface.calls == [
        ("circle", 100, 100, 5),
        ("circle", 250, 200, 5),
        ("circle", 300, 300, 5),
    ]


def test_next_frame_erases_previous_boxes_before_drawing() -> None:
    run = SimulationRun([Body(Vector(50, 50), Vector(100, 0), 1)])
    surface = RecordingSurface()
    renderer = BallRenderer(run, surface, radius=5)
    renderer.frame()
    run.step(0.1)
    surface.calls.clear()
    renderer.frame()
    assert surface.calls == [
        ("clear", 45, 45, 11, 11),
        ("circle", 60, 50, 5),
    ]
    assert renderer.items[0].rendered_rectangle == (55, 45, 11, 11)


def test_all_boxes_are_erased_before_any_ball_is_drawn() -> None:
    run = SimulationRun.from_scenario(BUILTIN_SCENARIOS["ejected ball"])
    surface = RecordingSurface()
    renderer = BallRenderer(run, surface)
    renderer.frame()
    surface.calls.clear()
    renderer.frame()
    kinds = [c[0] for c in surface.calls]
    assert kinds == ["clear"] * 3 + ["circle"] * 3


def test_renderer_does_not_mutate_bodies() -> None:
    run = SimulationRun.from_scenario(BUILTIN_SCENARIOS["dancing balls"])
    before = run.snapshot()
    renderer = BallRenderer(run, RecordingSurface())
    renderer.frame()
    renderer.frame()
    assert run.snapshot() == before


def test_scenario_change_rebuilds_items() -> None:
    run = SimulationRun([Body(Vector(10, 10), Vector(0, 0), 1)])
    surface = RecordingSurface()
    renderer = BallRenderer(run, surface, radius=2)
    renderer.frame()
    run.load_scenario(BUILTIN_SCENARIOS["dancing balls"])
    surface.calls.clear()
    renderer.frame()
    assert surface.calls[0] == ("clear", 8, 8, 5, 5)
    assert len(renderer.items) == 3
    assert [c[0] for c in surface.calls[1:]] == ["circle"] * 3
