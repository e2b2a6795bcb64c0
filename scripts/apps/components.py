from __future__ import annotations

import pandas as pd
import streamlit as st

from sidewalk_gaps.config import settings
from sidewalk_gaps.content import CONTENT
from sidewalk_gaps.layers.controller import LayerStatus, OverlayController


def page_setup(title: str | None = None) -> None:
    st.set_page_config(page_title=settings.site_title, layout="wide")
    if title:
        st.title(title)


def footer() -> None:
    st.markdown("---")
    st.caption(CONTENT["footer"])


def pills(labels: list[str]) -> None:
    st.markdown(" ".join(f":gray-badge[{label}]" for label in labels))


def kpi_cards(items: list[dict[str, str]]) -> None:
    cols = st.columns(len(items))
    for col, item in zip(cols, items):
        with col, st.container(border=True):
            st.markdown(f"### {item['value']}")
            st.caption(f"{item['label']} {item.get('footnote', '')}")


def legend(items: list[dict[str, str]]) -> None:
    rows = [
        f'<span style="display:inline-block;width:12px;height:12px;border-radius:3px;'
        f'background:{it["color"]};margin-right:6px"></span>{it["label"]}'
        for it in items
    ]
    st.markdown("<br>".join(rows), unsafe_allow_html=True)


def status_badges(controller: OverlayController, keys: list[str]) -> None:
    """One line per overlay so loading and failed layers are told apart."""
    for key in keys:
        status = controller.status(key) or LayerStatus.IDLE
        source = controller.registry.get(key)
        line = f"{settings.STATUS_ICONS[status.value]} {source.label}: {settings.STATUS_LABELS[status.value]}"
        if status is LayerStatus.UNAVAILABLE:
            st.caption(line, help=controller.failure_reason(key))
        else:
            st.caption(line)


def session_controller(name: str, config_factory) -> OverlayController:
    """One controller per browser session and map, created on first use."""
    state_key = f"overlay_controller__{name}"
    controller = st.session_state.get(state_key)
    if controller is None or not controller.is_alive:
        controller = OverlayController()
        controller.initialize(config_factory())
        st.session_state[state_key] = controller
    return controller


def show_column_help(df: pd.DataFrame, help_map: dict[str, str], *, title: str = "ℹ️ Column definitions") -> None:
    """Expander right above the table, listing definitions for the columns in df."""
    if df is None or df.empty:
        return

    with st.expander(title, expanded=False):
        for col in df.columns:
            desc = help_map.get(col, "Attribute published by the source agency.")
            st.markdown(f"**{col}** : {desc}")
