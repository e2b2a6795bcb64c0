import streamlit as st

from sidewalk_gaps.content import KPI_PLACEHOLDERS, METHODS
from apps.components import footer, kpi_cards, page_setup

page_setup("Data & Methods")

for heading, text in METHODS.items():
    st.markdown(f"**{heading}.** {text}")

kpi_cards(KPI_PLACEHOLDERS)
st.caption("Footnotes refer to the numbered entries on the Sources page.")

footer()
