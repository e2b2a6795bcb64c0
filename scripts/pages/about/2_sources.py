import streamlit as st

from sidewalk_gaps.content import SOURCES, SOURCES_FOOTNOTE
from apps.components import footer, page_setup

page_setup("Sources & Citations")

st.markdown(
    "\n".join(
        f"{i}. {s['title']} — {s['detail']} Retrieved {s['retrieved']}. [{s['link_label']}]({s['url']})"
        for i, s in enumerate(SOURCES, start=1)
    )
)
st.caption(SOURCES_FOOTNOTE)

footer()
