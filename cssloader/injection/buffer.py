"""Output-buffer injection before the closing head tag."""

from __future__ import annotations

import re
from typing import Sequence

from ..logging import get_logger
from .base import InjectionStrategy


class BufferInjectionStrategy(InjectionStrategy):
    """Splices a marked block of tags in front of the first ``</head>``."""

    COMMENT_START = "<!-- Custom CSS Loader Plugin -->"
    COMMENT_END = "<!-- /Custom CSS Loader Plugin -->"
    CLOSING_HEAD = re.compile(r"</head>", re.IGNORECASE)
    INDENT = "    "

    def __init__(self) -> None:
        self.logger = get_logger("injection")

    def inject(self, buffer: str, tags: Sequence[str]) -> str:
        if not tags:
            return buffer

        # Only the first match is used so malformed pages get one block.
        match = self.CLOSING_HEAD.search(buffer)
        if match is None:
            return buffer
        position = match.start()

        for tag in tags:
            self.logger.debug("Injecting %s", tag)
        return buffer[:position] + self.build_block(tags) + buffer[position:]

    def build_block(self, tags: Sequence[str]) -> str:
        """Wrap tags with marker comments, one indented tag per line."""
        lines = ["", f"{self.INDENT}{self.COMMENT_START}"]
        lines.extend(f"{self.INDENT}{tag}" for tag in tags)
        lines.append(f"{self.INDENT}{self.COMMENT_END}")
        lines.append(self.INDENT)
        return "\n".join(lines)
