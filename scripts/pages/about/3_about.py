import streamlit as st

from sidewalk_gaps.content import ABOUT_NOTE, CONTENT
from apps.components import footer, page_setup

page_setup("About the Project")

st.markdown(f"**{CONTENT['about_credit']}**")
st.caption(ABOUT_NOTE)

footer()
