from __future__ import annotations

from typing import Any, Iterable

import pandas as pd
import plotly.graph_objects as go
from loguru import logger
from shapely.errors import GEOSException
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from sidewalk_gaps.helpers import clean_property_value, popup_text
from sidewalk_gaps.layers.canvas import AttachedOverlay, MapCanvas
from sidewalk_gaps.layers.sources import OverlaySource


def _parts(geom: BaseGeometry) -> list[BaseGeometry]:
    """Flatten Multi* and GeometryCollection into simple geometries."""
    if hasattr(geom, "geoms"):
        out: list[BaseGeometry] = []
        for g in geom.geoms:
            out.extend(_parts(g))
        return out
    return [geom]


def _decode(feature: dict[str, Any]) -> list[BaseGeometry]:
    try:
        return [g for g in _parts(shape(feature["geometry"])) if not g.is_empty]
    except (GEOSException, KeyError, TypeError, ValueError, AttributeError) as e:
        logger.debug("Skipping undecodable geometry: {}", e)
        return []


def overlay_coordinates(
    source: OverlaySource, collection: dict[str, Any]
) -> tuple[list[float | None], list[float | None], list[str]]:
    """Lon/lat/hover lists for one overlay.

    Lines and rings are separated by `None` so a single trace can draw many
    paths; every vertex carries the hover text of its feature.
    """
    lons: list[float | None] = []
    lats: list[float | None] = []
    text: list[str] = []

    for feature in collection.get("features", []):
        label = popup_text(source.popup, feature.get("properties"), fallback=source.label)
        for geom in _decode(feature):
            if geom.geom_type == "Point":
                lons.append(geom.x)
                lats.append(geom.y)
                text.append(label)
                continue

            rings = [geom] if geom.geom_type == "LineString" else [geom.exterior, *geom.interiors]
            for ring in rings:
                xs, ys = ring.xy  # xs=lon, ys=lat
                lons.extend(list(xs) + [None])
                lats.extend(list(ys) + [None])
                text.extend([label] * len(xs) + [""])

    return lons, lats, text


def build_overlay_trace(item: AttachedOverlay) -> go.Scattermap:
    source = item.source
    style = source.style
    lons, lats, text = overlay_coordinates(source, item.collection)

    if source.geometry_kind == "point":
        return go.Scattermap(
            lon=lons,
            lat=lats,
            mode="markers",
            marker=dict(size=style.radius * 2, color=style.color, opacity=style.fill_opacity),
            name=source.label,
            text=text,
            hoverinfo="text",
        )

    trace = go.Scattermap(
        lon=lons,
        lat=lats,
        mode="lines",
        line=dict(width=style.weight, color=style.color),
        name=source.label,
        text=text,
        hoverinfo="text",
    )
    if source.geometry_kind == "polygon":
        trace.update(fill="toself", fillcolor=style.color, opacity=style.fill_opacity)
    return trace


def build_map_figure(canvas: MapCanvas, height: int = 560, show_legend: bool = False) -> go.Figure:
    """Plotly map of everything attached to `canvas`, in draw order."""
    fig = go.Figure()
    overlays = canvas.overlays  # one snapshot; fetch threads rebind the list

    for item in overlays:
        fig.add_trace(build_overlay_trace(item))

    # An empty trace keeps the map widget alive when no overlay is attached
    if not overlays:
        fig.add_trace(go.Scattermap(lon=[], lat=[], mode="markers", showlegend=False, hoverinfo="skip"))

    tile_layers = []
    if canvas.base is not None:
        tile_layers.append(
            dict(
                below="traces",
                sourcetype="raster",
                sourceattribution=canvas.base.attribution,
                source=[canvas.base.url_template],
            )
        )

    lat, lon = canvas.center
    fig.update_layout(
        map=dict(
            style="white-bg",
            layers=tile_layers,
            center=dict(lat=lat, lon=lon),
            zoom=canvas.zoom,
        ),
        margin=dict(l=0, r=0, t=0, b=0),
        height=height,
        showlegend=show_legend,
    )
    return fig


def legend_items(sources: Iterable[OverlaySource]) -> list[dict[str, str]]:
    return [{"label": s.label, "color": s.style.color} for s in sources]


def features_frame(collection: dict[str, Any] | None, max_rows: int | None = None) -> pd.DataFrame:
    """Attribute table of a FeatureCollection: one row per feature."""
    if not collection:
        return pd.DataFrame(columns=["geometry_type"])

    features = collection.get("features", [])
    if max_rows is not None:
        features = features[:max_rows]

    rows = []
    for feature in features:
        props = feature.get("properties") or {}
        row = {"geometry_type": (feature.get("geometry") or {}).get("type")}
        for k, v in props.items():
            row[str(k)] = clean_property_value(v)
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=["geometry_type"])
    return pd.DataFrame(rows)
