from pathlib import Path
import streamlit as st

from sidewalk_gaps.config import settings
from sidewalk_gaps.helpers import configure_logging

BASE_DIR = Path(__file__).resolve().parent
PAGES_DIR = BASE_DIR / "pages"

configure_logging(settings.log_level)

# Home Pages
home = st.Page(
    str(PAGES_DIR / "home" / "1_home.py"),
    title="Home",
    icon=":material/home:",
    default=True,
)

maps = st.Page(
    str(PAGES_DIR / "home" / "2_maps.py"),
    title="Maps",
    icon=":material/map:",
)

# Findings Pages
profiles = st.Page(
    str(PAGES_DIR / "findings" / "1_profiles.py"),
    title="Profiles",
    icon=":material/groups:",
)

methods = st.Page(
    str(PAGES_DIR / "findings" / "2_methods.py"),
    title="Data & Methods",
    icon=":material/science:",
)

compare = st.Page(
    str(PAGES_DIR / "findings" / "3_compare.py"),
    title="Compare",
    icon=":material/compare_arrows:",
)

# About Pages
video = st.Page(
    str(PAGES_DIR / "about" / "1_video.py"),
    title="Video",
    icon=":material/smart_display:",
)

sources = st.Page(
    str(PAGES_DIR / "about" / "2_sources.py"),
    title="Sources",
    icon=":material/menu_book:",
)

about = st.Page(
    str(PAGES_DIR / "about" / "3_about.py"),
    title="About",
    icon=":material/info:",
)

# Navigation (unknown URLs fall back to Streamlit's page-not-found handling)
pg = st.navigation({
    "Home": [home, maps],
    "Findings": [profiles, methods, compare],
    "About": [video, sources, about],
})

pg.run()
