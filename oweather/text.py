"""Chat text renderers.

The chat client understands a small tag markup: ``<highlight>``/``<end>`` for
emphasis, ``<black>`` for invisible padding, ``<br>``/``<tab>`` for layout and
``text://``/``chatcmd://`` links for expandable blobs and clickable commands.
:class:`MarkupText` emits that markup, :class:`PlainText` renders the same
content for a terminal.
"""
from __future__ import annotations

from typing import Protocol


class TextRenderer(Protocol):
    """Outbound message renderer used by the formatter and the controller."""

    newline: str
    tab: str

    def highlight(self, text: str) -> str:
        ...

    def filler(self, text: str) -> str:
        """Return padding that occupies the width of ``text`` without being seen."""
        ...

    def header(self, text: str) -> str:
        ...

    def make_blob(self, title: str, body: str) -> str:
        """Wrap ``body`` into an expandable detail view labelled ``title``."""
        ...

    def make_chatcmd(self, label: str, command: str) -> str:
        """Return a clickable link that runs ``command``."""
        ...


class MarkupText:
    newline = "<br>"
    tab = "<tab>"

    def highlight(self, text: str) -> str:
        return f"<highlight>{text}<end>"

    def filler(self, text: str) -> str:
        return f"<black>{text}<end>"

    def header(self, text: str) -> str:
        return f"<header2>{text}<end>"

    def make_blob(self, title: str, body: str) -> str:
        body = body.replace('"', "&quot;")
        return f'<a href="text://{body}">{title}</a>'

    def make_chatcmd(self, label: str, command: str) -> str:
        command = command.replace("'", "&#39;")
        return f"<a href='chatcmd://{command}'>{label}</a>"


class PlainText:
    newline = "\n"
    tab = "    "

    def highlight(self, text: str) -> str:
        return text

    def filler(self, text: str) -> str:
        return " " * len(text)

    def header(self, text: str) -> str:
        return text

    def make_blob(self, title: str, body: str) -> str:
        return f"{title}\n{'=' * len(title)}\n{body}"

    def make_chatcmd(self, label: str, command: str) -> str:
        return f"{label} ({command})"


__all__ = ["TextRenderer", "MarkupText", "PlainText"]
