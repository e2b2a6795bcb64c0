"""Map overlay controller.

Owns the map canvas, the overlay registry and the user's selection, and keeps
the drawn overlays equal to `selected ∩ overlays with geometry` as remote
fetches complete.

Remote fetches run on a thread pool. User operations and fetch completions
are serialized through one re-entrant lock, so all state changes happen one
event at a time. After `close()` late fetch results are discarded.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from functools import partial
from typing import Any, Callable, Iterable

from loguru import logger

from sidewalk_gaps.config import settings
from sidewalk_gaps.layers.canvas import MapCanvas
from sidewalk_gaps.layers.fetch import (
    FetchError,
    FetchFailure,
    FetchSuccess,
    fetch_feature_collection,
    validate_feature_collection,
)
from sidewalk_gaps.layers.sources import MapConfig, OverlayRegistry, OverlaySource

Fetcher = Callable[[str, float], dict[str, Any]]
FetchResult = FetchSuccess | FetchFailure


class LayerStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class MapStateError(RuntimeError):
    """Controller used before `initialize()`, after `close()`, or initialized twice."""


class OverlayController:
    def __init__(
        self,
        fetcher: Fetcher | None = None,
        executor: Executor | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self._fetcher = fetcher or fetch_feature_collection
        self._executor = executor
        self._owns_executor = executor is None
        self._timeout_s = settings.fetch_timeout_s if timeout_s is None else timeout_s

        self._lock = threading.RLock()
        self._alive = False
        self._config: MapConfig | None = None
        self._canvas: MapCanvas | None = None

        self._selected: set[str] = set()
        self._geometry: dict[str, dict[str, Any]] = {}
        self._unavailable: dict[str, str] = {}
        self._futures: dict[str, Future] = {}

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def initialize(self, config: MapConfig) -> None:
        """Build the map, attach the default base layer and default overlays.

        Static overlays are available at once; remote ones are scheduled and
        attach when their fetch resolves (if still selected).
        """
        with self._lock:
            if self._config is not None:
                raise MapStateError("Controller is already initialized.")
            self._config = config
            self._canvas = MapCanvas(center=config.center, zoom=config.zoom)
            self._alive = True

            self._canvas.set_base_layer(config.base_layer(config.default_base))
            self._selected = set(config.overlays.sort_keys(config.default_overlays))

            for source in config.overlays:
                if not source.is_remote:
                    self.fetch_overlay(source)
            for source in config.overlays:
                if source.is_remote and (config.prefetch or source.key in self._selected):
                    self.fetch_overlay(source)

            self._reconcile()
            logger.info(
                "Map initialized | base={} | selected={} | overlays={}",
                config.default_base,
                sorted(self._selected),
                len(config.overlays),
            )

    def close(self) -> None:
        """Tear down: results of fetches still in flight will be discarded."""
        with self._lock:
            if not self._alive:
                return
            self._alive = False
            for fut in self._futures.values():
                fut.cancel()
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("Overlay controller closed")

    @property
    def is_alive(self) -> bool:
        return self._alive

    # ---------------------------
    # User operations
    # ---------------------------
    def set_active_overlay_set(self, selected_keys: Iterable[str]) -> None:
        """Make `selected_keys` the visible overlay set (last selection wins).

        Unknown keys are ignored. Selected overlays without geometry yet are
        pending and attach when their data arrives.
        """
        with self._lock:
            registry = self._require_map().overlays
            requested = set(selected_keys)
            unknown = {k for k in requested if k not in registry}
            if unknown:
                logger.debug("Ignoring unknown overlay key(s): {}", sorted(map(str, unknown)))

            self._selected = set(registry.sort_keys(requested))
            for key in registry.sort_keys(self._selected):
                if key not in self._futures:
                    self.fetch_overlay(registry.get(key))
            self._reconcile()

    def set_active_base_layer(self, key: str) -> None:
        with self._lock:
            config = self._require_map()
            layer = config.base_layer(key)
            if layer is None:
                logger.debug("Ignoring unknown base layer {!r}", key)
                return
            self._canvas.set_base_layer(layer)

    def fetch_overlay(self, source: OverlaySource) -> Future:
        """Retrieve the geometry for `source`, at most once per session.

        Returns a future resolving to `FetchSuccess` or `FetchFailure`. Inline
        sources resolve immediately.
        """
        with self._lock:
            registry = self._require_map().overlays
            if registry.get(source.key) is not source:
                raise ValueError(f"Overlay {source.key!r} is not registered with this map.")

            existing = self._futures.get(source.key)
            if existing is not None:
                return existing

            if not source.is_remote:
                fut: Future = Future()
                fut.set_result(self._load_inline(source))
                self._futures[source.key] = fut
                self._apply(fut.result())
                return fut

            logger.debug("Fetching overlay {} from {}", source.key, source.url)
            fut = self._get_executor().submit(self._fetch_remote, source)
            self._futures[source.key] = fut
            fut.add_done_callback(partial(self._on_fetch_done, source.key))
            return fut

    # ---------------------------
    # Queries
    # ---------------------------
    @property
    def canvas(self) -> MapCanvas:
        with self._lock:
            if self._canvas is None:
                raise MapStateError("Controller is not initialized.")
            return self._canvas

    @property
    def registry(self) -> OverlayRegistry:
        if self._config is None:
            raise MapStateError("Controller is not initialized.")
        return self._config.overlays

    @property
    def active_base_layer(self) -> str | None:
        base = self.canvas.base
        return base.key if base is not None else None

    def attached_keys(self) -> list[str]:
        with self._lock:
            return self.canvas.overlay_keys()

    def selected_keys(self) -> list[str]:
        with self._lock:
            return self.registry.sort_keys(self._selected)

    def pending_keys(self) -> list[str]:
        """Selected overlays still waiting for their geometry."""
        with self._lock:
            return [
                k
                for k in self.registry.sort_keys(self._selected)
                if k not in self._geometry and k not in self._unavailable
            ]

    def status(self, key: str) -> LayerStatus | None:
        with self._lock:
            if self._config is None or key not in self._config.overlays:
                return None
            if key in self._geometry:
                return LayerStatus.READY
            if key in self._unavailable:
                return LayerStatus.UNAVAILABLE
            if key in self._futures:
                return LayerStatus.LOADING
            return LayerStatus.IDLE

    def statuses(self) -> dict[str, LayerStatus]:
        with self._lock:
            return {k: self.status(k) for k in self.registry.keys()}

    def failure_reason(self, key: str) -> str | None:
        return self._unavailable.get(key)

    def geometry(self, key: str) -> dict[str, Any] | None:
        return self._geometry.get(key)

    def has_loading(self) -> bool:
        return any(s is LayerStatus.LOADING for s in self.statuses().values())

    # ---------------------------
    # Internals
    # ---------------------------
    def _require_map(self) -> MapConfig:
        if self._config is None:
            raise MapStateError("Controller is not initialized.")
        if not self._alive:
            raise MapStateError("Controller has been closed.")
        return self._config

    def _get_executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=settings.fetch_workers,
                thread_name_prefix="overlay-fetch",
            )
        return self._executor

    @staticmethod
    def _load_inline(source: OverlaySource) -> FetchResult:
        try:
            return FetchSuccess(source.key, validate_feature_collection(source.data))
        except FetchError as e:
            return FetchFailure(source.key, str(e))

    def _fetch_remote(self, source: OverlaySource) -> FetchResult:
        # runs on a pool thread: no controller state is touched here
        try:
            collection = self._fetcher(source.url, self._timeout_s)
            return FetchSuccess(source.key, collection)
        except FetchError as e:
            return FetchFailure(source.key, str(e))

    def _on_fetch_done(self, key: str, fut: Future) -> None:
        if fut.cancelled():
            result = FetchFailure(key, "cancelled")
        elif fut.exception() is not None:
            result = FetchFailure(key, f"{type(fut.exception()).__name__}: {fut.exception()}")
        else:
            result = fut.result()

        with self._lock:
            if not self._alive:
                logger.debug("Discarding result for {}: controller closed", key)
                return
            self._apply(result)

    def _apply(self, result: FetchResult) -> None:
        if result.ok:
            self._geometry[result.key] = result.collection
            logger.info(
                "Overlay {} ready ({} features)", result.key, len(result.collection.get("features", []))
            )
        else:
            self._unavailable[result.key] = result.reason
            logger.warning("Overlay {} unavailable: {}", result.key, result.reason)
        self._reconcile()

    def _reconcile(self) -> None:
        registry = self._config.overlays
        target = [k for k in registry.keys() if k in self._selected and k in self._geometry]
        attached = set(self._canvas.overlay_keys())

        for key in attached - set(target):
            self._canvas.detach(key)
        for key in target:
            if key not in attached:
                self._canvas.attach(registry.get(key), self._geometry[key], registry.order(key))
