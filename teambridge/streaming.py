"""Live rendering of an agent reply while it streams in."""

from __future__ import annotations

import threading
from typing import Iterable, List

TOOL_RUNNING_ICON = "🔧"
TOOL_DONE_ICON = "✅"
TOOL_FAILED_ICON = "❌"
NO_RESPONSE = "_(no response)_"
CANCELLED_ONLY = "🛑 _已取消_"
CANCELLED_SUFFIX = "\n\n🛑 _— 已取消_"
AGENT_ERROR_PREFIX = "⚠️ **Agent error**\n"

_TRAILING_SPACE = " \t\n"


def compose_display(tool_lines: Iterable[str], text: str) -> str:
    """Render tool status lines above the reply text, trailing whitespace trimmed."""
    lines = list(tool_lines)
    head = "".join(f"{line}\n" for line in lines) + "\n" if lines else ""
    return head + text.rstrip(_TRAILING_SPACE)


class StreamView:
    """Accumulates streamed text and tool progress; safe to read from another thread."""

    def __init__(self, notice: str = "") -> None:
        self._lock = threading.Lock()
        self._text: List[str] = [notice] if notice else []
        self._tool_lines: List[str] = []

    @property
    def text(self) -> str:
        """The reply text received so far."""
        with self._lock:
            return "".join(self._text)

    @property
    def tool_lines(self) -> List[str]:
        with self._lock:
            return list(self._tool_lines)

    def append_text(self, text: str) -> None:
        """Add a chunk of agent text."""
        with self._lock:
            self._text.append(text)

    def tool_started(self, label: str) -> None:
        """Show a tool as running; empty labels are ignored."""
        if not label:
            return
        with self._lock:
            self._tool_lines.append(f"{TOOL_RUNNING_ICON} `{label}`...")

    def tool_finished(self, label: str, status: str) -> None:
        """Mark the latest line mentioning ``label`` as done or failed.

        An empty label is ignored, since it would match every line.
        """
        if not label:
            return
        icon = TOOL_DONE_ICON if status == "completed" else TOOL_FAILED_ICON
        with self._lock:
            for index in range(len(self._tool_lines) - 1, -1, -1):
                if label in self._tool_lines[index]:
                    self._tool_lines[index] = f"{icon} `{label}`"
                    break

    def display(self) -> str:
        """The current rendering of tools and text."""
        with self._lock:
            return compose_display(self._tool_lines, "".join(self._text))

    def restart(self, notice: str = "") -> None:
        """Drop everything shown so far and start over with ``notice``."""
        with self._lock:
            self._text = [notice] if notice else []
            self._tool_lines = []

    def final_content(
        self, cancelled: bool = False, agent_errored: bool = False, footer: str = ""
    ) -> str:
        """The finished reply, with cancel marker, error banner or footer applied."""
        content = self.display()
        if not content:
            content = CANCELLED_ONLY if cancelled else NO_RESPONSE
        elif cancelled:
            content = content.rstrip(_TRAILING_SPACE) + CANCELLED_SUFFIX
        if agent_errored:
            return AGENT_ERROR_PREFIX + content
        return content + footer