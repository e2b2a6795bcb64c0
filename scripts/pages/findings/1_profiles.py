import streamlit as st

from sidewalk_gaps.content import PROFILES, PROFILES_INTRO
from apps.components import footer, page_setup

page_setup("Community Profiles: Who's Walking — and Where the Sidewalk Ends")

st.caption(PROFILES_INTRO)

cols = st.columns(2, gap="large")
for i, card in enumerate(PROFILES):
    with cols[i % 2], st.container(border=True):
        st.subheader(card["title"])
        st.write(card["body"])
        st.markdown("\n".join(f"- **{k}:** {v}" for k, v in card["items"]))

footer()
