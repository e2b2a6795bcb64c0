from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

GEOMETRY_KINDS = ("line", "point", "polygon")


@dataclass(frozen=True)
class OverlayStyle:
    color: str = "#3388ff"
    weight: float = 2.0
    radius: float = 5.0
    fill_opacity: float = 0.9


@dataclass(frozen=True)
class OverlaySource:
    """A named, independently toggleable map layer.

    Exactly one origin must be given: `data` (an inline FeatureCollection) or
    `url` (a remote GeoJSON endpoint).
    """

    key: str
    label: str
    geometry_kind: str
    url: str | None = None
    data: dict[str, Any] | None = field(default=None, compare=False, hash=False, repr=False)
    style: OverlayStyle = field(default_factory=OverlayStyle)
    popup: str | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Overlay key must be a non-empty string.")
        if self.geometry_kind not in GEOMETRY_KINDS:
            raise ValueError(
                f"Overlay {self.key!r}: geometry_kind must be one of {GEOMETRY_KINDS}, got {self.geometry_kind!r}."
            )
        if (self.url is None) == (self.data is None):
            raise ValueError(f"Overlay {self.key!r} needs exactly one origin (inline data or url).")

    @property
    def is_remote(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class BaseLayer:
    key: str
    label: str
    url_template: str
    attribution: str = ""
    max_zoom: int = 19

    def __post_init__(self) -> None:
        for token in ("{z}", "{x}", "{y}"):
            if token not in self.url_template:
                raise ValueError(f"Base layer {self.key!r}: tile template is missing {token}.")


class OverlayRegistry:
    """Ordered, key-unique collection of overlay sources.

    Declaration order is draw order: earlier sources are drawn first (underneath).
    """

    def __init__(self, sources: Iterable[OverlaySource] = ()) -> None:
        self._sources: dict[str, OverlaySource] = {}
        for source in sources:
            self.register(source)

    def register(self, source: OverlaySource) -> None:
        if source.key in self._sources:
            raise ValueError(f"Duplicate overlay key: {source.key!r}")
        self._sources[source.key] = source

    def get(self, key: str) -> OverlaySource | None:
        return self._sources.get(key)

    def order(self, key: str) -> int:
        return list(self._sources).index(key)

    def keys(self) -> list[str]:
        return list(self._sources)

    def sort_keys(self, keys: Iterable[str]) -> list[str]:
        """Known keys from `keys`, in declaration order."""
        wanted = set(keys)
        return [k for k in self._sources if k in wanted]

    def __contains__(self, key: object) -> bool:
        return key in self._sources

    def __iter__(self) -> Iterator[OverlaySource]:
        return iter(self._sources.values())

    def __len__(self) -> int:
        return len(self._sources)


@dataclass(frozen=True)
class MapConfig:
    """Everything the overlay controller needs to build a map."""

    overlays: OverlayRegistry
    base_layers: tuple[BaseLayer, ...]
    default_base: str
    default_overlays: frozenset[str] = frozenset()
    center: tuple[float, float] = (38.8157, -76.7497)
    zoom: float = 14.0
    prefetch: bool = True

    def __post_init__(self) -> None:
        keys = [b.key for b in self.base_layers]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate base layer key in {keys}")
        if self.default_base not in keys:
            raise ValueError(f"Default base layer {self.default_base!r} is not registered.")

    def base_layer(self, key: str) -> BaseLayer | None:
        return next((b for b in self.base_layers if b.key == key), None)
