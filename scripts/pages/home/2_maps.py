from __future__ import annotations

import streamlit as st

from sidewalk_gaps.catalog import BASE_LAYERS, DATA_SOURCES, MAP_TABS, live_map_config, tab_overlays
from sidewalk_gaps.config import settings
from sidewalk_gaps.render import build_map_figure, features_frame, legend_items
from apps.components import (
    footer,
    legend,
    page_setup,
    session_controller,
    show_column_help,
    status_badges,
)

page_setup("Maps: Sidewalks, Transit, Schools & Food Access")

controller = session_controller("maps", live_map_config)
registry = controller.registry


# ---------------------------
# Sidebar controls
# ---------------------------
st.sidebar.header("Map options")

base_options = [b.key for b in BASE_LAYERS]
base_key = st.sidebar.selectbox(
    "Base map",
    base_options,
    index=base_options.index(settings.default_base_layer) if settings.default_base_layer in base_options else 0,
    format_func=lambda k: next(b.label for b in BASE_LAYERS if b.key == k),
    key="maps_base_layer",
)
controller.set_active_base_layer(base_key)

tab_ids = [t.id for t in MAP_TABS]
tab_labels = {t.id: t.label for t in MAP_TABS}
default_tab = settings.default_tab if settings.default_tab in tab_ids else tab_ids[0]
tab = st.radio(
    "Map view",
    tab_ids,
    index=tab_ids.index(default_tab),
    format_func=lambda t: tab_labels[t],
    horizontal=True,
    label_visibility="collapsed",
    key="maps_tab",
)
controller.set_active_overlay_set(tab_overlays(tab))


# ---------------------------
# Map (re-polls while layers are still loading)
# ---------------------------
poll_every = settings.pending_poll_s if controller.has_loading() else None


@st.fragment(run_every=poll_every)
def map_panel() -> None:
    with st.container(border=True):
        c1, c2 = st.columns([3, 1], gap="large")

        with c1:
            st.subheader("Interactive Map")
            fig = build_map_figure(controller.canvas, height=settings.map_height)
            st.plotly_chart(fig, width="stretch", config={"scrollZoom": True})
            st.caption(
                "Live layers from County/WMATA services. See the Sources page for citations and retrieval dates."
            )

        with c2:
            st.markdown("**Legend**")
            legend(legend_items(DATA_SOURCES))
            st.markdown("**Layer status**")
            status_badges(controller, controller.selected_keys())

    if poll_every and not controller.has_loading():
        # everything resolved: full rerun stops the polling
        st.rerun()


map_panel()


# ---------------------------
# Attribute preview
# ---------------------------
with st.container(border=True):
    st.subheader("Layer attributes")
    ready = [k for k in controller.attached_keys() if controller.geometry(k) is not None]
    if not ready:
        st.info("No layer data has loaded yet for this view.")
    else:
        key = st.selectbox("Layer", ready, format_func=lambda k: registry.get(k).label)
        df = features_frame(controller.geometry(key), max_rows=500)
        show_column_help(df, settings.ATTRIBUTE_HELP)
        st.dataframe(df, width="stretch")

footer()
