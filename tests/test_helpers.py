from sidewalk_gaps.helpers import MISSING, clean_property_value, popup_text


def test_popup_fills_known_fields():
    assert popup_text("School: <b>{name}</b>", {"name": "Middle"}) == "School: <b>Middle</b>"


def test_popup_tolerates_missing_and_empty_fields():
    assert popup_text("Stop: {name}", {"STOP_ID": 12}) == f"Stop: {MISSING}"
    assert popup_text("Stop: {name}", {"name": None}) == f"Stop: {MISSING}"
    assert popup_text("Stop: {name}", None) == f"Stop: {MISSING}"


def test_popup_falls_back_on_broken_template():
    assert popup_text("{0}", {"name": "x"}, fallback="Layer") == "Layer"
    assert popup_text(None, {"name": "x"}, fallback="Layer") == "Layer"


def test_clean_property_value():
    assert clean_property_value(float("nan")) is None
    assert clean_property_value("  <Null> ") is None
    assert clean_property_value('["Old Crain Hwy", "MD 382"]') == "Old Crain Hwy"
    assert clean_property_value(42) == "42"
