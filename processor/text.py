"""Text sanitizing, escaping and line folding for calendar output."""
import html
import re
from typing import Optional


MAX_LINE_OCTETS = 75
CRLF = "\r\n"

_LINE_BREAK_TAGS = re.compile(r"<br\s*/?>|</p>|</div>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_FOLD_CONTINUATION = re.compile(r"\r?\n[ \t]")


def strip_html(text: Optional[str]) -> str:
    """
    Convert event description markup to plain text.

    Line-breaking tags become newlines, remaining tags are removed and
    HTML5 named/numeric entities are decoded.

    Args:
        text: Raw markup, may be None

    Returns:
        Plain text with at most one blank line between paragraphs
    """
    if not text:
        return ""

    text = _LINE_BREAK_TAGS.sub("\n", text)
    text = _ANY_TAG.sub("", text)
    text = html.unescape(text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def escape_ics_text(text: Optional[str]) -> str:
    """
    Escape a TEXT value per RFC 5545.

    Args:
        text: Unescaped value

    Returns:
        Value with backslash, semicolon and comma escaped and newlines
        written as a literal backslash-n
    """
    if not text:
        return ""
    # Backslashes first so later escapes are not doubled
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
        .replace("\r", "")
    )


def fold_line(line: str) -> str:
    """
    Fold one logical content line to 75 octets per physical line.

    The first physical line carries up to 75 octets, continuation lines a
    leading space plus up to 74. Multi-byte characters are never split.

    Args:
        line: Logical line without terminator

    Returns:
        Folded line terminated with CRLF
    """
    encoded = line.encode("utf-8")
    if len(encoded) <= MAX_LINE_OCTETS:
        return line + CRLF

    chunks = []
    current = []
    current_size = 0
    limit = MAX_LINE_OCTETS

    for char in line:
        size = len(char.encode("utf-8"))
        if current_size + size > limit:
            chunks.append("".join(current))
            current = []
            current_size = 0
            limit = MAX_LINE_OCTETS - 1
        current.append(char)
        current_size += size

    if current:
        chunks.append("".join(current))

    return (CRLF + " ").join(chunks) + CRLF


def unfold_lines(text: str) -> str:
    """Undo line folding: drop every line break followed by a space or tab."""
    return _FOLD_CONTINUATION.sub("", text)
