"""Component for managing upcoming content announcements."""

import asyncio
import threading
from datetime import date
from typing import Any, Dict, List, Optional

import streamlit as st
from pydantic import ValidationError

from ...config.registry_config import RegistryConfig
from ...config.supabase_client import get_async_client
from ..services.upcoming_content import (
    ContentType,
    RatingType,
    SupabaseUpcomingContentStore,
    UpcomingContent,
    UpcomingContentData,
    UpcomingContentError,
    UpcomingContentRegistry,
)
from ..utils.messages import (
    INVALID_FORMAT,
    MISSING_REQUIRED,
    MessageCategory,
    MessageType,
    UserMessage,
)
from ..utils.style_config import COLORS, FONTS

GENRE_OPTIONS = [
    'Action', 'Adventure', 'Animation', 'Comedy', 'Crime', 'Documentary',
    'Drama', 'Family', 'Fantasy', 'Horror', 'Musical', 'Mystery', 'Romance',
    'Sci-Fi', 'Thriller', 'War', 'Western',
]

FIELD_LABELS = {
    'title': 'Title',
    'content_type': 'Content Type',
    'rating_type': 'Rating',
    'release_date': 'Release Date',
    'content_order': 'Display Order',
    'genres': 'Genres',
    'directors': 'Directors',
    'writers': 'Writers',
    'cast': 'Cast',
    'description': 'Description',
    'thumbnail_url': 'Thumbnail URL',
    'trailer_url': 'Trailer URL',
}

# Every Streamlit session thread shares one loop, because the async Supabase
# client is bound to the loop that created it. The lock keeps two sessions
# from driving that loop at once.
_loop: Optional[asyncio.AbstractEventLoop] = None
_loop_lock = threading.Lock()


def run_async(coro):
    """Run a coroutine from Streamlit's synchronous script thread."""
    global _loop
    with _loop_lock:
        if _loop is None or _loop.is_closed():
            _loop = asyncio.new_event_loop()
        return _loop.run_until_complete(coro)


def split_names(text: str) -> List[str]:
    """Split a comma separated text input into names."""
    if not text:
        return []
    return [name.strip() for name in text.split(',') if name.strip()]


def cache_ttl() -> int:
    """Seconds the collection view stays cached (UPCOMING_CONTENT_CACHE_TTL)."""
    return RegistryConfig.from_env().cache_ttl


def invalidate_cache(key: str) -> None:
    """Cache invalidation hook for the registry."""
    load_upcoming_content.clear()


@st.cache_resource
def get_registry() -> UpcomingContentRegistry:
    """Build the registry against the configured Supabase project."""
    config = RegistryConfig.from_env()
    client = run_async(get_async_client())
    store = SupabaseUpcomingContentStore(client, table=config.table)
    return UpcomingContentRegistry(
        store,
        config=config,
        notify=UserMessage.notify,
        invalidate=invalidate_cache,
    )


@st.cache_data(ttl=cache_ttl())
def load_upcoming_content() -> List[Dict[str, Any]]:
    """Load all upcoming content, sorted by content order."""
    records = run_async(get_registry().list_content())
    return [record.model_dump() for record in records]


def validation_messages(error: ValidationError) -> List[str]:
    """Turn pydantic errors into form messages keyed by field label."""
    messages = []
    for err in error.errors():
        name = str(err['loc'][0]) if err['loc'] else ''
        field = FIELD_LABELS.get(name, name)
        if err['type'] == 'missing':
            messages.append(MISSING_REQUIRED.format(field=field))
        else:
            messages.append(f"{INVALID_FORMAT.format(field=field)}: {err['msg']}")
    return messages


def build_content_data(values: Dict[str, Any]) -> Optional[UpcomingContentData]:
    """Validate submitted form values, reporting problems to the user.

    Args:
        values: Raw widget values keyed by UpcomingContentData field

    Returns:
        The field set, or None if it did not validate
    """
    if not str(values.get('title') or '').strip():
        UserMessage.show(MISSING_REQUIRED.format(field=FIELD_LABELS['title']),
                         MessageType.ERROR, MessageCategory.VALIDATION)
        return None

    fields = dict(values)
    for name in ('directors', 'writers', 'cast'):
        fields[name] = split_names(fields.get(name, ''))

    try:
        return UpcomingContentData(**fields)
    except ValidationError as e:
        for message in validation_messages(e):
            UserMessage.show(message, MessageType.ERROR, MessageCategory.VALIDATION)
        return None


def render_upcoming_content_form(key: str, record: Optional[UpcomingContent] = None,
                                 default_order: int = 0) -> Optional[UpcomingContentData]:
    """Render the create/edit form.

    Args:
        key: Unique form key
        record: Record to prefill when editing
        default_order: Order suggested for a new record

    Returns:
        The submitted field set, or None if the form was not submitted or
        did not validate
    """
    content_types = [t.value for t in ContentType]
    rating_types = [""] + [r.value for r in RatingType]

    with st.form(key=key, clear_on_submit=record is None):
        title = st.text_input("Title", value=record.title if record else "")
        col1, col2, col3 = st.columns(3)
        with col1:
            content_type = st.selectbox(
                "Content Type", content_types,
                index=content_types.index(record.content_type.value) if record else 0
            )
        with col2:
            rating_type = st.selectbox(
                "Rating", rating_types,
                index=rating_types.index(record.rating_type.value) if record and record.rating_type else 0
            )
        with col3:
            release_date = st.date_input(
                "Release Date", value=record.release_date if record else date.today()
            )
        content_order = st.text_input(
            "Display Order",
            value=str(record.content_order if record else default_order),
            help="0 is shown first. Taking an order that is in use moves later items down."
        )
        genres = st.multiselect(
            "Genres", GENRE_OPTIONS,
            default=[g for g in (record.genres if record else []) if g in GENRE_OPTIONS]
        )
        directors = st.text_input("Directors", value=", ".join(record.directors) if record else "")
        writers = st.text_input("Writers", value=", ".join(record.writers) if record else "")
        cast = st.text_input("Cast", value=", ".join(record.cast) if record else "")
        description = st.text_area("Description", value=record.description if record else "")
        thumbnail_url = st.text_input("Thumbnail URL", value=record.thumbnail_url if record else "")
        trailer_url = st.text_input("Trailer URL", value=record.trailer_url if record else "")

        submitted = st.form_submit_button("Save" if record else "Announce", type="primary")

    if not submitted:
        return None

    return build_content_data({
        'title': title,
        'content_type': content_type,
        'release_date': release_date,
        'content_order': content_order,
        'genres': genres,
        'rating_type': rating_type,
        'directors': directors,
        'writers': writers,
        'cast': cast,
        'description': description,
        'thumbnail_url': thumbnail_url,
        'trailer_url': trailer_url,
    })


def run_registry_action(coro) -> bool:
    """Run a registry operation and rerun the page on success.

    The registry has already queued the success or error message; on
    failure it is shown straight away since there is no rerun.
    """
    try:
        run_async(coro)
    except UpcomingContentError:
        UserMessage.flush()
        return False
    st.rerun()
    return True


def render_upcoming_content_card(record: UpcomingContent) -> None:
    """Render one announcement with edit and delete controls."""
    title_color = COLORS['text']['primary']
    meta_color = COLORS['text']['secondary']

    st.markdown(
        f"<div style='padding: 1em; border-radius: 4px; background: white; margin-bottom: 0.5em;'>"
        f"<h4 style='margin: 0; color: {title_color}; font-family: {FONTS['primary']['family']}; "
        f"font-size: {FONTS['primary']['sizes']['header']}px;'>"
        f"#{record.content_order} {record.title}</h4>"
        f"<p style='margin: 4px 0 0 0; color: {meta_color}; font-size: {FONTS['primary']['sizes']['small']}px;'>"
        f"{record.content_type.value.title()} | Releases {record.release_date.isoformat()}"
        f"{' | ' + ', '.join(record.genres) if record.genres else ''}"
        f"</p></div>",
        unsafe_allow_html=True
    )

    registry = get_registry()
    with st.expander("Edit"):
        data = render_upcoming_content_form(f"edit_{record.id}", record=record)
        if data is not None:
            run_registry_action(registry.update(record.id, data))

    if st.button("Delete", key=f"delete_{record.id}"):
        run_registry_action(registry.delete(record.id))


def render_upcoming_content_list(records: List[UpcomingContent]) -> None:
    """Render every announcement in display order."""
    if not records:
        st.info("No upcoming content announced")
        return
    for record in records:
        render_upcoming_content_card(record)
