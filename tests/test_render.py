from sidewalk_gaps.catalog import BASE_LAYERS, DATA_SOURCES, DEMO_SCHOOLS, DEMO_SIDEWALK_GAPS
from sidewalk_gaps.layers.canvas import MapCanvas
from sidewalk_gaps.layers.sources import OverlaySource, OverlayStyle
from sidewalk_gaps.render import build_map_figure, features_frame, legend_items, overlay_coordinates


def _canvas(*sources: OverlaySource) -> MapCanvas:
    canvas = MapCanvas(center=(38.815, -76.749), zoom=12)
    canvas.set_base_layer(BASE_LAYERS[0])
    for i, s in enumerate(sources):
        canvas.attach(s, s.data, order=i)
    return canvas


PARK = OverlaySource(
    key="park",
    label="Park",
    geometry_kind="polygon",
    data={
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"OBJECTID": 1},
                "geometry": {
                    "type": "MultiPolygon",
                    "coordinates": [[[[-76.75, 38.81], [-76.74, 38.81], [-76.74, 38.82], [-76.75, 38.81]]]],
                },
            }
        ],
    },
    style=OverlayStyle(color="#00ff00", fill_opacity=0.3),
    popup="Park: {name}",
)


def test_figure_has_one_trace_per_overlay_in_draw_order():
    fig = build_map_figure(_canvas(DEMO_SIDEWALK_GAPS, DEMO_SCHOOLS), height=400)
    assert [t.name for t in fig.data] == ["Sidewalk Gaps", "Schools"]
    assert fig.layout.height == 400

    layers = fig.layout.map.layers
    assert len(layers) == 1
    assert list(layers[0].source) == [BASE_LAYERS[0].url_template]
    assert layers[0].below == "traces"


def test_lines_are_separated_and_carry_popups():
    lons, lats, text = overlay_coordinates(DEMO_SIDEWALK_GAPS, DEMO_SIDEWALK_GAPS.data)
    assert lons == [-76.751, -76.74, None, -76.76, -76.75, None]
    assert lats[2] is None
    assert text[0] == "Sidewalk gap: <b>Gap A</b>"
    assert text[3] == "Sidewalk gap: <b>Gap B</b>"


def test_point_trace_uses_marker_style():
    fig = build_map_figure(_canvas(DEMO_SCHOOLS))
    trace = fig.data[0]
    assert trace.mode == "markers"
    assert trace.marker.size == DEMO_SCHOOLS.style.radius * 2
    assert list(trace.text) == ["School: <b>Elementary</b>", "School: <b>Middle</b>"]


def test_missing_popup_field_does_not_break_rendering():
    fig = build_map_figure(_canvas(PARK))
    trace = fig.data[0]
    assert trace.fill == "toself"
    assert trace.text[0] == "Park: —"


def test_empty_canvas_still_renders_base_map():
    canvas = MapCanvas(center=(38.8, -76.7), zoom=13)
    canvas.set_base_layer(BASE_LAYERS[1])
    fig = build_map_figure(canvas)
    assert len(fig.data) == 1
    assert list(fig.layout.map.layers[0].source) == [BASE_LAYERS[1].url_template]


def test_features_frame_lists_properties():
    df = features_frame(DEMO_SCHOOLS.data)
    assert list(df["name"]) == ["Elementary", "Middle"]
    assert set(df["geometry_type"]) == {"Point"}
    assert features_frame(None).empty


def test_legend_items_follow_input_order():
    assert legend_items([DEMO_SCHOOLS, PARK]) == [
        {"label": "Schools", "color": DEMO_SCHOOLS.style.color},
        {"label": "Park", "color": "#00ff00"},
    ]


def test_figure_uses_tile_map_traces_and_layout():
    fig = build_map_figure(_canvas(DEMO_SIDEWALK_GAPS, DEMO_SCHOOLS))
    assert {t.type for t in fig.data} == {"scattermap"}
    assert fig.layout.map.style == "white-bg"
    assert fig.layout.map.center.lat == 38.815
    assert fig.layout.map.zoom == 12


def test_site_legend_lists_every_data_source():
    items = legend_items(DATA_SOURCES)
    assert [i["label"] for i in items] == [s.label for s in DATA_SOURCES]
    assert len(items) == 6
