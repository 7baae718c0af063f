"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``client_portal/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from client_portal.app import main

st.set_page_config(page_title="Client Portal", layout="wide")
logger = logging.getLogger(__name__)

PAGES_DIR = Path(__file__).parent / "client_portal" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"client_portal.pages.{py.stem}"
    try:
        import_module(mod_name)
    except ImportError as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
