from __future__ import annotations

"""Single-page map: one dataset and one base map, written as standalone HTML.

Uses the inline demo layers, so it needs no network access beyond the tile
server the browser talks to when the file is opened.
"""

import argparse
from pathlib import Path

from loguru import logger

from sidewalk_gaps.catalog import BASE_LAYERS, DEMO_DATASETS, demo_map_config
from sidewalk_gaps.config import settings
from sidewalk_gaps.helpers import configure_logging
from sidewalk_gaps.layers.controller import OverlayController
from sidewalk_gaps.render import build_map_figure


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Write the single-page sidewalk gap map as HTML.")
    parser.add_argument("--dataset", choices=DEMO_DATASETS, default=DEMO_DATASETS[0])
    parser.add_argument("--basemap", choices=[b.key for b in BASE_LAYERS], default="OSM")
    parser.add_argument("--output", type=Path, default=settings.export_path)
    return parser


def export_map(dataset: str, basemap: str, output: Path) -> Path:
    controller = OverlayController()
    controller.initialize(demo_map_config())
    try:
        # dataset choice is exclusive: one layer at a time
        controller.set_active_overlay_set({dataset})
        controller.set_active_base_layer(basemap)
        fig = build_map_figure(controller.canvas, height=settings.map_height)
    finally:
        controller.close()

    output.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(output), include_plotlyjs="cdn")
    logger.info("Wrote {} map on {} tiles to {}", dataset, basemap, output)
    return output


def main(argv: list[str] | None = None) -> None:
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    export_map(args.dataset, args.basemap, args.output)


if __name__ == "__main__":
    main()
