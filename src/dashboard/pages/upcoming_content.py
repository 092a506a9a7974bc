"""Upcoming Content Admin Page

Announce, reorder and remove the titles shown in the "coming soon" list.
"""

import streamlit as st

from src.dashboard.components.upcoming_content_view import (
    get_registry,
    load_upcoming_content,
    render_upcoming_content_form,
    render_upcoming_content_list,
    run_registry_action,
)
from src.dashboard.services.upcoming_content import UpcomingContent
from src.dashboard.utils.messages import UserMessage


def show():
    """Main upcoming content page."""
    st.markdown("### Upcoming Content")

    # Results of the change that triggered this rerun
    UserMessage.flush()

    records = [UpcomingContent.model_validate(row) for row in load_upcoming_content()]
    max_items = get_registry().config.max_items
    next_order = max((r.content_order for r in records), default=-1) + 1

    st.caption(f"{len(records)} of {max_items} announcements")

    with st.expander("Announce New Content", expanded=not records):
        if len(records) >= max_items:
            st.warning("The list is full. Delete an announcement before adding another.")
        data = render_upcoming_content_form("create_upcoming_content", default_order=next_order)
        if data is not None:
            run_registry_action(get_registry().create(data))

    st.markdown("---")
    render_upcoming_content_list(records)


if __name__ == "__main__":
    show()
