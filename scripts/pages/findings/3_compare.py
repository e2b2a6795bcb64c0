import streamlit as st

from sidewalk_gaps.content import COMPARE
from apps.components import footer, page_setup, pills

page_setup(COMPARE["title"])

st.markdown(COMPARE["body"])

with st.container(border=True):
    st.caption(COMPARE["placeholder"])
    pills(COMPARE["pills"])

footer()
