"""
Conversation title derivation.

Dependencies: None (pure domain layer)
System role: One-time display title computed from the first user message
"""

TITLE_MAX_LENGTH = 50
TITLE_ELLIPSIS = "..."


def derive_title(first_user_content: str) -> str:
    """
    Build a conversation title from the first user message.

    The first 50 characters are kept; "..." is appended if and only if the
    content is longer than that.

    Args:
        first_user_content: Content of the conversation's first USER message

    Returns:
        str: Display title
    """
    if len(first_user_content) > TITLE_MAX_LENGTH:
        return first_user_content[:TITLE_MAX_LENGTH] + TITLE_ELLIPSIS
    return first_user_content


def should_set_title(message_count: int, current_title: str | None) -> bool:
    """
    Whether an exchange that just completed should assign the title.

    An empty stored title counts as no title.
    """
    return message_count == 2 and not current_title
