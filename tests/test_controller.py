import random
from concurrent.futures import Executor, Future

import pytest

from sidewalk_gaps.layers.controller import LayerStatus, MapStateError, OverlayController
from sidewalk_gaps.layers.fetch import FetchError, FetchFailure, FetchSuccess
from sidewalk_gaps.layers.sources import BaseLayer, MapConfig, OverlayRegistry, OverlaySource


def _fc(name: str) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": name},
                "geometry": {"type": "Point", "coordinates": [-76.75, 38.81]},
            }
        ],
    }


class ManualExecutor(Executor):
    """Executor whose jobs only run when the test says so."""

    def __init__(self):
        self.jobs: dict[str, tuple[Future, object, tuple]] = {}
        self.submitted: list[str] = []

    def submit(self, fn, *args, **kwargs):
        fut = Future()
        key = args[0].key
        self.jobs[key] = (fut, fn, args)
        self.submitted.append(key)
        return fut

    def start(self, key: str) -> None:
        self.jobs[key][0].set_running_or_notify_cancel()

    def run(self, key: str) -> None:
        fut, fn, args = self.jobs.pop(key)
        if not fut.running() and not fut.set_running_or_notify_cancel():
            return
        try:
            fut.set_result(fn(*args))
        except Exception as e:
            fut.set_exception(e)


class FakeFetcher:
    def __init__(self, failing: set[str] = frozenset()):
        self.failing = set(failing)
        self.calls: list[str] = []

    def __call__(self, url: str, timeout_s: float) -> dict:
        self.calls.append(url)
        key = url.rsplit("/", 1)[-1]
        if key in self.failing:
            raise FetchError(f"boom: {key}")
        return _fc(key)


BASES = (
    BaseLayer("OSM", "OpenStreetMap", "https://tile.example/{z}/{x}/{y}.png"),
    BaseLayer("Toner", "Toner", "https://toner.example/{z}/{x}/{y}.png"),
    BaseLayer("Terrain", "Terrain", "https://terrain.example/{z}/{x}/{y}.png"),
)


def _registry() -> OverlayRegistry:
    """Two remote line/point layers around a static point layer."""
    return OverlayRegistry(
        [
            OverlaySource("sidewalks", "Sidewalks", "line", url="https://gis.example/sidewalks"),
            OverlaySource("schools", "Schools", "point", data=_fc("Elementary")),
            OverlaySource("busStops", "Bus stops", "point", url="https://gis.example/busStops"),
        ]
    )


def _controller(defaults=("sidewalks",), prefetch=True, failing=frozenset()):
    executor = ManualExecutor()
    fetcher = FakeFetcher(failing)
    controller = OverlayController(fetcher=fetcher, executor=executor, timeout_s=5.0)
    controller.initialize(
        MapConfig(
            overlays=_registry(),
            base_layers=BASES,
            default_base="OSM",
            default_overlays=frozenset(defaults),
            prefetch=prefetch,
        )
    )
    return controller, executor, fetcher


def test_deselect_before_fetch_resolves_leaves_overlay_detached():
    controller, executor, _ = _controller(defaults=("sidewalks",))
    assert controller.attached_keys() == []
    assert controller.pending_keys() == ["sidewalks"]

    controller.set_active_overlay_set({"schools"})
    assert controller.attached_keys() == ["schools"]

    executor.run("sidewalks")
    assert controller.attached_keys() == ["schools"]
    assert controller.status("sidewalks") is LayerStatus.READY


def test_pending_overlay_attaches_when_fetch_resolves():
    controller, executor, _ = _controller(defaults=("sidewalks", "schools"))
    assert controller.attached_keys() == ["schools"]
    assert controller.status("sidewalks") is LayerStatus.LOADING

    executor.run("sidewalks")
    assert controller.attached_keys() == ["sidewalks", "schools"]
    assert controller.pending_keys() == []


def test_unknown_base_layer_keeps_previous():
    controller, _, _ = _controller()
    controller.set_active_base_layer("Toner")
    controller.set_active_base_layer("bogus")
    assert controller.active_base_layer == "Toner"
    assert controller.canvas.base.key == "Toner"


def test_base_layer_switches():
    controller, _, _ = _controller()
    assert controller.active_base_layer == "OSM"
    for key in ("Terrain", "OSM", "Toner"):
        controller.set_active_base_layer(key)
        assert controller.active_base_layer == key


def test_unknown_overlay_keys_are_ignored():
    controller, _, _ = _controller(defaults=())
    controller.set_active_overlay_set({"schools", "nope", "also-missing"})
    assert controller.selected_keys() == ["schools"]
    assert controller.attached_keys() == ["schools"]


def test_fetch_failure_only_affects_its_own_overlay():
    controller, executor, fetcher = _controller(defaults=("sidewalks", "schools", "busStops"), failing={"busStops"})
    executor.run("busStops")
    executor.run("sidewalks")

    assert controller.attached_keys() == ["sidewalks", "schools"]
    assert controller.status("busStops") is LayerStatus.UNAVAILABLE
    assert "boom" in controller.failure_reason("busStops")

    # no retry on reselection
    controller.set_active_overlay_set({"busStops"})
    controller.set_active_overlay_set({"busStops", "sidewalks"})
    assert fetcher.calls.count("https://gis.example/busStops") == 1
    assert controller.attached_keys() == ["sidewalks"]
    assert controller.pending_keys() == []


def test_unexpected_fetcher_exception_marks_unavailable():
    def fetcher(url, timeout_s):
        raise RuntimeError("socket exploded")

    executor = ManualExecutor()
    controller = OverlayController(fetcher=fetcher, executor=executor)
    controller.initialize(
        MapConfig(overlays=_registry(), base_layers=BASES, default_base="OSM", default_overlays=frozenset({"sidewalks"}))
    )
    executor.run("sidewalks")
    assert controller.status("sidewalks") is LayerStatus.UNAVAILABLE
    assert "RuntimeError" in controller.failure_reason("sidewalks")


def test_draw_order_follows_registry_not_selection():
    controller, executor, _ = _controller(defaults=())
    controller.set_active_overlay_set({"busStops"})
    executor.run("busStops")
    controller.set_active_overlay_set({"busStops", "schools"})
    executor.run("sidewalks")
    controller.set_active_overlay_set({"busStops", "schools", "sidewalks"})
    assert controller.attached_keys() == ["sidewalks", "schools", "busStops"]


def test_prefetch_disabled_fetches_on_selection():
    controller, executor, _ = _controller(defaults=("sidewalks",), prefetch=False)
    assert executor.submitted == ["sidewalks"]
    assert controller.status("busStops") is LayerStatus.IDLE

    controller.set_active_overlay_set({"busStops"})
    assert executor.submitted == ["sidewalks", "busStops"]
    assert controller.status("busStops") is LayerStatus.LOADING


def test_fetch_overlay_is_issued_once():
    controller, executor, _ = _controller()
    source = controller.registry.get("sidewalks")
    first = controller.fetch_overlay(source)
    assert controller.fetch_overlay(source) is first
    assert executor.submitted.count("sidewalks") == 1

    executor.run("sidewalks")
    result = first.result()
    assert isinstance(result, FetchSuccess)
    assert result.collection["features"][0]["properties"]["name"] == "sidewalks"


def test_static_overlay_resolves_immediately():
    controller, _, _ = _controller(defaults=())
    fut = controller.fetch_overlay(controller.registry.get("schools"))
    assert fut.done()
    assert isinstance(fut.result(), FetchSuccess)
    assert controller.status("schools") is LayerStatus.READY


def test_malformed_static_overlay_is_unavailable():
    registry = OverlayRegistry([OverlaySource("bad", "Bad", "point", data={"type": "Feature"})])
    controller = OverlayController(executor=ManualExecutor())
    controller.initialize(
        MapConfig(overlays=registry, base_layers=BASES, default_base="OSM", default_overlays=frozenset({"bad"}))
    )
    assert isinstance(controller.fetch_overlay(registry.get("bad")).result(), FetchFailure)
    assert controller.attached_keys() == []
    assert controller.status("bad") is LayerStatus.UNAVAILABLE


def test_result_after_close_is_discarded():
    controller, executor, _ = _controller(defaults=("sidewalks",))
    executor.start("sidewalks")
    canvas = controller.canvas
    controller.close()

    executor.run("sidewalks")
    assert canvas.overlay_keys() == []
    assert controller.status("sidewalks") is LayerStatus.LOADING
    with pytest.raises(MapStateError):
        controller.set_active_overlay_set({"sidewalks"})


def test_close_cancels_queued_fetches():
    controller, executor, _ = _controller(defaults=("sidewalks",))
    controller.close()
    fut, _, _ = executor.jobs["sidewalks"]
    assert fut.cancelled()
    assert controller.attached_keys() == []


def test_controller_must_be_initialized_once():
    controller = OverlayController(executor=ManualExecutor())
    with pytest.raises(MapStateError):
        controller.set_active_base_layer("OSM")

    config = MapConfig(overlays=_registry(), base_layers=BASES, default_base="OSM")
    controller.initialize(config)
    with pytest.raises(MapStateError):
        controller.initialize(config)


def test_fetch_overlay_rejects_unregistered_source():
    controller, _, _ = _controller()
    stray = OverlaySource("stray", "Stray", "point", url="https://gis.example/stray")
    with pytest.raises(ValueError):
        controller.fetch_overlay(stray)


def test_attached_set_is_selection_intersect_available():
    rng = random.Random(7)
    keys = ["sidewalks", "schools", "busStops", "unknown"]
    for _ in range(25):
        controller, executor, _ = _controller(defaults=(), prefetch=False, failing={"busStops"})
        selection: set[str] = set()
        for _ in range(12):
            if executor.jobs and rng.random() < 0.4:
                executor.run(rng.choice(sorted(executor.jobs)))
            else:
                selection = {k for k in keys if rng.random() < 0.5}
                controller.set_active_overlay_set(selection)

            available = {k for k, s in controller.statuses().items() if s is LayerStatus.READY}
            expected = [k for k in ["sidewalks", "schools", "busStops"] if k in selection and k in available]
            assert controller.attached_keys() == expected
