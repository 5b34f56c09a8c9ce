# app.py
import logging

import streamlit as st

from core.monster_memory import DatasetError
from ui.monster_memory.constants import CONTRIBUTE_LABEL, CONTRIBUTE_URL, PAGE_TITLE
from ui.monster_memory.render import get_categories, render as monster_memory_render

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(
    page_title=PAGE_TITLE,
    layout="centered",
    initial_sidebar_state="collapsed",
)

st.markdown("""
    <style>
    /* Narrow card-like column, centred like a single reference sheet */
    .block-container {
        max-width: 56rem;
        padding-top: 2rem;
    }

    h3 {
        text-align: center;
        font-weight: 700;
    }

    [data-testid="stCaptionContainer"] {
        text-align: center;
    }

    /* FAQ sources inside the dialog */
    ul.faq-sources {
        list-style: disc;
        padding-left: 1.25rem;
    }
    ul.faq-sources a {
        color: #2563eb;
        text-decoration: none;
    }
    ul.faq-sources a:hover {
        text-decoration: underline;
    }

    .contribute-link {
        text-align: center;
        font-size: 0.875rem;
        margin-top: 1rem;
    }
    .contribute-link a {
        color: #2563eb;
    }
    </style>
""", unsafe_allow_html=True)

# --- Load dataset (fatal on failure) ---
try:
    categories = get_categories()
except DatasetError as exc:
    st.error(f"Could not load the monster memory dataset: {exc}")
    st.stop()

monster_memory_render(categories)

st.markdown(
    f'<div class="contribute-link"><a href="{CONTRIBUTE_URL}" target="_blank" '
    f'rel="noopener noreferrer">{CONTRIBUTE_LABEL}</a></div>',
    unsafe_allow_html=True,
)
