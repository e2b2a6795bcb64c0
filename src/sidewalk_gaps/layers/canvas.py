from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sidewalk_gaps.layers.sources import BaseLayer, OverlaySource


@dataclass
class AttachedOverlay:
    source: OverlaySource
    collection: dict[str, Any]
    order: int


@dataclass
class MapCanvas:
    """In-memory map: one base layer plus overlays kept in draw order.

    The controller is the only writer; renderers read `overlays` and `base`.
    """

    center: tuple[float, float]
    zoom: float
    base: BaseLayer | None = None
    overlays: list[AttachedOverlay] = field(default_factory=list)

    def set_base_layer(self, layer: BaseLayer) -> None:
        self.base = layer

    def attach(self, source: OverlaySource, collection: dict[str, Any], order: int) -> None:
        if self.has_overlay(source.key):
            return
        item = AttachedOverlay(source=source, collection=collection, order=order)
        current = self.overlays
        idx = next((i for i, o in enumerate(current) if o.order > order), len(current))
        # rebind, never mutate: renders may be iterating the old list
        self.overlays = [*current[:idx], item, *current[idx:]]

    def detach(self, key: str) -> None:
        self.overlays = [o for o in self.overlays if o.source.key != key]

    def has_overlay(self, key: str) -> bool:
        return any(o.source.key == key for o in self.overlays)

    def overlay_keys(self) -> list[str]:
        return [o.source.key for o in self.overlays]
