from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Dict
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration (env vars or local .env)."""

    model_config = SettingsConfigDict(env_prefix="SWG_", env_file=".env", extra="ignore")

    # -----------------
    # Site
    # -----------------
    site_title: str = "Where the Sidewalk Ends: Mapping Gaps in Walkability in Upper Marlboro, MD"
    log_level: str = "INFO"

    # -----------------
    # Map view
    # -----------------
    map_center_lat: float = 38.8157
    map_center_lon: float = -76.7497
    map_zoom: float = 14.0
    home_map_zoom: float = 13.0
    map_height: int = 560
    default_tab: str = "sidewalks"
    default_base_layer: str = "OSM"

    # -----------------
    # Remote GeoJSON fetch
    # -----------------
    fetch_timeout_s: float = 20.0
    fetch_workers: int = 6
    prefetch_all_overlays: bool = True  # request every remote layer when the map mounts
    pending_poll_s: float = 2.0

    # -----------------
    # Single-page export
    # -----------------
    export_path: Path = Field(default_factory=lambda: Path("sidewalk_gaps_map.html"))

    STATUS_LABELS: ClassVar[Dict[str, str]] = {
        "idle": "Not requested",
        "loading": "Loading…",
        "ready": "Loaded",
        "unavailable": "Unavailable",
    }

    STATUS_ICONS: ClassVar[Dict[str, str]] = {
        "idle": ":material/radio_button_unchecked:",
        "loading": ":material/hourglass_top:",
        "ready": ":material/check_circle:",
        "unavailable": ":material/error:",
    }

    ATTRIBUTE_HELP: ClassVar[Dict[str, str]] = {
        "geometry_type": "GeoJSON geometry type of the feature (Point, LineString, Polygon, ...).",
        "name": "Feature name as published by the source agency, when present.",
    }


settings = Settings()
