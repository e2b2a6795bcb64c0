import streamlit as st

from sidewalk_gaps.catalog import home_map_config
from sidewalk_gaps.config import settings
from sidewalk_gaps.content import CONTENT, HOME_PILLS, PROBLEM_BULLETS, PROBLEM_STATEMENT
from sidewalk_gaps.render import build_map_figure
from apps.components import footer, page_setup, pills, session_controller

page_setup(settings.site_title)

c1, c2 = st.columns([1, 1], gap="large")

with c1:
    st.caption(CONTENT["kicker"].upper())
    st.header(CONTENT["tagline"])
    st.write(CONTENT["intro"])
    pills(HOME_PILLS)

with c2:
    with st.container(border=True):
        controller = session_controller("home", home_map_config)
        fig = build_map_figure(controller.canvas, height=290)
        st.plotly_chart(fig, width="stretch", config={"scrollZoom": False})
        st.caption("Explore detailed maps, profiles, and data using the navigation.")

st.markdown("---")

st.subheader("Problem Statement")
st.write(PROBLEM_STATEMENT)
st.markdown("\n".join(f"- {b}" for b in PROBLEM_BULLETS))

footer()
