"""
Tests del formateo del campo Comments.
Run with: pytest tests/test_formatting.py
"""

from inkeep_salesforce.formatting import (
    build_chat_preview_url,
    build_comments,
    format_chat_history,
    format_item,
)
from inkeep_salesforce.schemas import Message, parse_case_request


# ---------------------------------------------------------------------------
# format_item
# ---------------------------------------------------------------------------

def test_format_item_empty_content():
    """Sin contenido no se emite nada."""
    assert format_item("X", None) == ""
    assert format_item("X", "") == ""
    assert format_item("X", "   ") == ""


def test_format_item_with_content():
    result = format_item("X", "y")
    assert "X:" in result
    assert "y" in result
    assert result == "X:\ny\n"


# ---------------------------------------------------------------------------
# format_chat_history
# ---------------------------------------------------------------------------

def test_chat_history_empty():
    assert format_chat_history(None) == ""
    assert format_chat_history([]) == ""


def test_chat_history_roles_in_order_and_footnotes_stripped():
    messages = [
        Message(role="user", content="Hi [^1]"),
        Message(role="assistant", content="Hello"),
    ]
    history = format_chat_history(messages)

    assert history.startswith("Chat History\n")
    assert "[^1]" not in history
    question = history.index("Question:")
    hi = history.index("Hi ")
    answer = history.index("Answer:")
    hello = history.index("Hello")
    assert question < hi < answer < hello


def test_chat_history_strips_multi_digit_footnotes():
    history = format_chat_history([Message(role="assistant", content="See docs[^12][^3].")])
    assert "See docs." in history
    assert "[^" not in history


# ---------------------------------------------------------------------------
# build_chat_preview_url / build_comments
# ---------------------------------------------------------------------------

def test_chat_preview_url_requires_root_and_id():
    assert build_chat_preview_url(None, "abc") is None
    assert build_chat_preview_url("https://portal.example.com/chat", None) is None
    assert build_chat_preview_url("https://portal.example.com/chat", "abc") == (
        "https://portal.example.com/chat?chatId=abc"
    )


def test_build_comments_includes_all_sections(valid_body):
    case_request = parse_case_request(valid_body)
    comments = build_comments(case_request, "https://portal.example.com/chat?chatId=chat-123")

    assert "Additional details:\nThe widget crashes on submit" in comments
    assert "Chat History" in comments
    assert "Note:" in comments
    assert "Inkeep Chat URL:\nhttps://portal.example.com/chat?chatId=chat-123" in comments
    assert "Client (Interaction Point):\nhttps://docs.example.com/keys" in comments
    assert comments.index("Additional details") < comments.index("Chat History") < comments.index("Note:")


def test_build_comments_without_chat(valid_body):
    del valid_body["chatSession"]
    comments = build_comments(parse_case_request(valid_body))

    assert "Chat History" not in comments
    assert "Inkeep Chat URL" not in comments
    assert "Client (Interaction Point)" in comments
