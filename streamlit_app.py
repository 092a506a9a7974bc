"""
Upcoming Content Admin
Entry point for Streamlit Cloud deployment
"""
import sys
import os

import streamlit as st

# Add the project root to the Python path
project_root = os.path.dirname(os.path.abspath(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from src.config.logging_config import setup_logging
from src.dashboard.pages.upcoming_content import show

setup_logging('src')


def main():
    st.set_page_config(
        page_title="Upcoming Content",
        page_icon="🎬",
        layout="wide"
    )
    show()


if __name__ == "__main__":
    main()
