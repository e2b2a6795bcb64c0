import streamlit as st

from sidewalk_gaps.content import VIDEO_PLACEHOLDER
from apps.components import footer, page_setup

page_setup("Presentation Video")

with st.container(border=True, height=360):
    st.info(VIDEO_PLACEHOLDER)

footer()
