"""Remote GeoJSON retrieval from ArcGIS REST services.

Every layer is requested as a GeoJSON FeatureCollection in WGS84 (EPSG:4326).
Failures of any kind surface as `FetchError`; callers decide how to degrade.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import requests
from loguru import logger

SUPPORTED_GEOMETRIES = frozenset(
    {
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    }
)

ARCGIS_GEOJSON_PARAMS = {
    "where": "1=1",
    "outFields": "*",
    "outSR": "4326",
    "f": "geojson",
}


class FetchError(Exception):
    """Network, HTTP or payload failure while retrieving an overlay."""


@dataclass(frozen=True)
class FetchSuccess:
    key: str
    collection: dict[str, Any]

    ok = True


@dataclass(frozen=True)
class FetchFailure:
    key: str
    reason: str

    ok = False


def arcgis_geojson_url(layer_url: str) -> str:
    """Query URL selecting all records and fields of a Feature/MapServer layer as GeoJSON."""
    base = layer_url.rstrip("/")
    if not base.endswith("/query"):
        base += "/query"
    return f"{base}?{urlencode(ARCGIS_GEOJSON_PARAMS)}"


def validate_feature_collection(obj: Any) -> dict[str, Any]:
    """Return a cleaned FeatureCollection or raise `FetchError`.

    Features with a missing or unsupported geometry are dropped; property bags
    that are not objects are replaced by `{}`.
    """
    if not isinstance(obj, dict):
        raise FetchError(f"Expected a JSON object, got {type(obj).__name__}")
    if "error" in obj:
        # ArcGIS reports query errors with HTTP 200 and an error envelope
        err = obj.get("error") or {}
        msg = err.get("message") if isinstance(err, dict) else err
        raise FetchError(f"Service error: {msg}")
    if obj.get("type") != "FeatureCollection":
        raise FetchError(f"Expected a FeatureCollection, got type={obj.get('type')!r}")
    features = obj.get("features")
    if not isinstance(features, list):
        raise FetchError("FeatureCollection has no 'features' list")

    kept = []
    for feature in features:
        if not isinstance(feature, dict):
            continue
        geom = feature.get("geometry")
        if not isinstance(geom, dict) or geom.get("type") not in SUPPORTED_GEOMETRIES:
            continue
        props = feature.get("properties")
        kept.append(
            {
                "type": "Feature",
                "geometry": geom,
                "properties": props if isinstance(props, dict) else {},
            }
        )

    dropped = len(features) - len(kept)
    if dropped:
        logger.debug("Dropped {} feature(s) without a supported geometry", dropped)
    return {"type": "FeatureCollection", "features": kept}


def fetch_feature_collection(url: str, timeout_s: float) -> dict[str, Any]:
    """Issue a single GET for `url` and return the validated FeatureCollection."""
    try:
        resp = requests.get(url, timeout=timeout_s)
        resp.raise_for_status()
        payload = resp.json()
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Request failed: {e}") from e
    except ValueError as e:
        raise FetchError(f"Response is not valid JSON: {e}") from e
    return validate_feature_collection(payload)
