"""User messaging system for the dashboard."""
from enum import Enum
import streamlit as st


class MessageType(Enum):
    """Types of messages that can be displayed to users."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


class MessageCategory(Enum):
    """Categories of messages for different parts of the application."""
    VALIDATION = "validation"
    UPCOMING_CONTENT = "upcoming_content"


PREFIXES = {
    MessageCategory.VALIDATION: "🔍 Validation",
    MessageCategory.UPCOMING_CONTENT: "🎬 Upcoming Content",
}

# Session key holding messages that must survive st.rerun()
PENDING_KEY = 'pending_messages'


class UserMessage:
    """Handle consistent user messaging throughout the application."""

    @staticmethod
    def show(message: str, msg_type: MessageType, category: MessageCategory) -> None:
        """Display a message to the user with consistent styling.

        Args:
            message: The message to display
            msg_type: Type of message (error, warning, info, success)
            category: Category the message belongs to
        """
        formatted_msg = f"{PREFIXES[category]}: {message}"

        if msg_type == MessageType.ERROR:
            st.error(formatted_msg)
        elif msg_type == MessageType.WARNING:
            st.warning(formatted_msg)
        elif msg_type == MessageType.INFO:
            st.info(formatted_msg)
        elif msg_type == MessageType.SUCCESS:
            st.success(formatted_msg)

    @staticmethod
    def notify(message: str, msg_type: MessageType) -> None:
        """Notification hook for the upcoming content registry.

        Messages are queued in session state rather than drawn immediately,
        since a successful change is followed by st.rerun(). ``flush`` draws
        them.
        """
        st.session_state.setdefault(PENDING_KEY, []).append((message, msg_type))

    @staticmethod
    def flush() -> None:
        """Show and clear every queued upcoming content message."""
        for message, msg_type in st.session_state.pop(PENDING_KEY, []):
            UserMessage.show(message, msg_type, MessageCategory.UPCOMING_CONTENT)


# Common validation messages
MISSING_REQUIRED = "Required field: {field}"
INVALID_FORMAT = "Invalid format for {field}"
