from sidewalk_gaps.export_map import export_map, main


def test_export_writes_selected_dataset_and_basemap(tmp_path):
    out = export_map("Schools", "Toner", tmp_path / "map.html")
    html = out.read_text(encoding="utf-8")
    assert "School: <b>Elementary</b>" in html or "School: \\u003cb\\u003eElementary" in html
    assert "stamen_toner" in html
    assert "Gap A" not in html


def test_main_uses_defaults(tmp_path):
    out = tmp_path / "nested" / "gaps.html"
    main(["--output", str(out)])
    html = out.read_text(encoding="utf-8")
    assert "Gap A" in html
    assert "tile.openstreetmap.org" in html
