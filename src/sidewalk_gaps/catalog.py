from __future__ import annotations

from dataclasses import dataclass

from sidewalk_gaps.config import settings
from sidewalk_gaps.content import THEME
from sidewalk_gaps.layers.fetch import arcgis_geojson_url
from sidewalk_gaps.layers.sources import (
    BaseLayer,
    MapConfig,
    OverlayRegistry,
    OverlaySource,
    OverlayStyle,
)

PGC_GIS = "https://gis.princegeorgescountymd.gov/arcgis/rest/services"


# -----------------
# Base layers
# -----------------
BASE_LAYERS: tuple[BaseLayer, ...] = (
    BaseLayer(
        key="OSM",
        label="OpenStreetMap",
        url_template="https://tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution="&copy; OpenStreetMap",
        max_zoom=19,
    ),
    BaseLayer(
        key="Toner",
        label="Stamen Toner",
        url_template="https://tiles.stadiamaps.com/tiles/stamen_toner/{z}/{x}/{y}.png",
        attribution="Stamen",
        max_zoom=20,
    ),
    BaseLayer(
        key="Terrain",
        label="Stamen Terrain",
        url_template="https://tiles.stadiamaps.com/tiles/stamen_terrain/{z}/{x}/{y}.png",
        attribution="Stamen",
        max_zoom=18,
    ),
)


# -----------------
# Live county / WMATA layers (Maps page)
# -----------------
TOWN_CENTER = OverlaySource(
    key="town_center",
    label="Upper Marlboro town center",
    geometry_kind="point",
    data={
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Upper Marlboro"},
                "geometry": {"type": "Point", "coordinates": [-76.7497, 38.8157]},
            }
        ],
    },
    style=OverlayStyle(color="#111827", weight=2, radius=6, fill_opacity=1.0),
    popup="<b>{name}</b>",
)

DATA_SOURCES: tuple[OverlaySource, ...] = (
    OverlaySource(
        key="sidewalks",
        label="PGC Sidewalk Inventory (DPWT)",
        geometry_kind="line",
        url=arcgis_geojson_url(f"{PGC_GIS}/transportation/Sidewalks/MapServer/0"),
        style=OverlayStyle(color=THEME["accent"], weight=2),
        popup="Sidewalk: <b>{name}</b>",
    ),
    OverlaySource(
        key="theBusRoutes",
        label="TheBus Routes (Summer 2025)",
        geometry_kind="line",
        url=arcgis_geojson_url(f"{PGC_GIS}/dpwt/BUS_STOP_ROUTE_SUMMER2025/FeatureServer/1"),
        style=OverlayStyle(color=THEME["primary"], weight=2),
        popup="TheBus route: <b>{name}</b>",
    ),
    OverlaySource(
        key="wmataBusRoutes",
        label="WMATA Major Bus Routes (2025)",
        geometry_kind="line",
        url=arcgis_geojson_url(
            "https://services2.arcgis.com/2NBEaAVPObxRmRog/ArcGIS/rest/services/WMATA_Rail_Map_WFL1/FeatureServer/17"
        ),
        style=OverlayStyle(color=THEME["secondary"], weight=2),
        popup="Metrobus route: <b>{name}</b>",
    ),
    OverlaySource(
        key="busStops",
        label="TheBus Stops (Summer 2025)",
        geometry_kind="point",
        url=arcgis_geojson_url(f"{PGC_GIS}/dpwt/BUS_STOP_ROUTE_SUMMER2025/FeatureServer/0"),
        style=OverlayStyle(color=THEME["highlight"], weight=1, radius=4),
        popup="Bus stop: <b>{name}</b>",
    ),
    OverlaySource(
        key="schools",
        label="PGCPS School Locations",
        geometry_kind="point",
        url=arcgis_geojson_url(
            "https://services1.arcgis.com/qTQ6qYkHpxlu0G82/arcgis/rest/services/PGCPS_School_Locations/FeatureServer/0"
        ),
        style=OverlayStyle(color="#c62828", weight=1, radius=5),
        popup="School: <b>{name}</b>",
    ),
    OverlaySource(
        key="groceries",
        label="Grocery Stores (PGC Business)",
        geometry_kind="point",
        url=arcgis_geojson_url(f"{PGC_GIS}/Business/Businesses/MapServer/7"),
        style=OverlayStyle(color="#795548", weight=1, radius=5),
        popup="Grocery: <b>{name}</b>",
    ),
)


@dataclass(frozen=True)
class MapTab:
    id: str
    label: str
    overlays: frozenset[str]


_TRANSIT = frozenset({"theBusRoutes", "wmataBusRoutes", "busStops"})

MAP_TABS: tuple[MapTab, ...] = (
    MapTab("sidewalks", "Sidewalk Coverage", frozenset({"town_center", "sidewalks"})),
    MapTab(
        "transit",
        "Transit Access (TheBus + Metrobus)",
        frozenset({"town_center", "sidewalks"}) | _TRANSIT,
    ),
    MapTab(
        "schools",
        "Schools & First/Last-Mile",
        frozenset({"town_center", "sidewalks", "schools"}) | _TRANSIT,
    ),
    MapTab(
        "food",
        "Food Access (Grocery)",
        frozenset({"town_center", "sidewalks", "groceries"}) | _TRANSIT,
    ),
)


def tab_overlays(tab_id: str) -> frozenset[str]:
    """Overlay keys shown for a Maps-page tab; unknown tabs show nothing."""
    tab = next((t for t in MAP_TABS if t.id == tab_id), None)
    return tab.overlays if tab is not None else frozenset()


def live_registry() -> OverlayRegistry:
    # drawn bottom to top: lines first, then points, town marker on top
    return OverlayRegistry((*DATA_SOURCES, TOWN_CENTER))


def live_map_config(tab_id: str | None = None) -> MapConfig:
    return MapConfig(
        overlays=live_registry(),
        base_layers=BASE_LAYERS,
        default_base=settings.default_base_layer,
        default_overlays=tab_overlays(tab_id or settings.default_tab),
        center=(settings.map_center_lat, settings.map_center_lon),
        zoom=settings.map_zoom,
        prefetch=settings.prefetch_all_overlays,
    )


def home_map_config() -> MapConfig:
    """Tiles only: the small preview map on the Home page."""
    return MapConfig(
        overlays=OverlayRegistry(),
        base_layers=BASE_LAYERS,
        default_base=settings.default_base_layer,
        center=(settings.map_center_lat, settings.map_center_lon),
        zoom=settings.home_map_zoom,
        prefetch=False,
    )


# -----------------
# Demo layers (single-page map)
# -----------------
DEMO_SIDEWALK_GAPS = OverlaySource(
    key="Sidewalk Gaps",
    label="Sidewalk Gaps",
    geometry_kind="line",
    data={
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Gap A"},
                "geometry": {"type": "LineString", "coordinates": [[-76.751, 38.81], [-76.74, 38.813]]},
            },
            {
                "type": "Feature",
                "properties": {"name": "Gap B"},
                "geometry": {"type": "LineString", "coordinates": [[-76.76, 38.82], [-76.75, 38.83]]},
            },
        ],
    },
    style=OverlayStyle(color="#ffef5a", weight=5),
    popup="Sidewalk gap: <b>{name}</b>",
)

DEMO_SCHOOLS = OverlaySource(
    key="Schools",
    label="Schools",
    geometry_kind="point",
    data={
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Elementary"},
                "geometry": {"type": "Point", "coordinates": [-76.748, 38.816]},
            },
            {
                "type": "Feature",
                "properties": {"name": "Middle"},
                "geometry": {"type": "Point", "coordinates": [-76.755, 38.825]},
            },
        ],
    },
    style=OverlayStyle(color="#3388ff", weight=2, radius=8, fill_opacity=0.9),
    popup="School: <b>{name}</b>",
)

DEMO_DATASETS = (DEMO_SIDEWALK_GAPS.key, DEMO_SCHOOLS.key)


def demo_map_config() -> MapConfig:
    return MapConfig(
        overlays=OverlayRegistry((DEMO_SIDEWALK_GAPS, DEMO_SCHOOLS)),
        base_layers=BASE_LAYERS,
        default_base="OSM",
        default_overlays=frozenset({DEMO_SIDEWALK_GAPS.key}),
        center=(38.815, -76.749),
        zoom=12.0,
        prefetch=False,
    )
