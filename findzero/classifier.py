"""Blank-note heuristics.

A note is "blank" when nothing follows its title line, when every line after
the title is whitespace, or when the whole note is an untouched copy of the
configured journal template.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class NoteAnalysis:
    title: str
    content_length: int
    non_blank_lines: int


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to one space and trim."""
    return _WS_RE.sub(" ", text).strip()


def matches_template(content: str, template: str | None, *, debug: bool = False) -> bool:
    """Return True if `content` equals `template` modulo whitespace layout.

    An empty or whitespace-only template never matches.
    """
    if not template or not template.strip():
        return False

    normalized_content = normalize_whitespace(content)
    normalized_template = normalize_whitespace(template)

    if debug:
        logger.debug("Comparing content: %s", normalized_content)
        logger.debug("With template: %s", normalized_template)

    return normalized_content == normalized_template


def analyze(content: str, fallback_title: str = "") -> NoteAnalysis:
    """Split a note into its title line and body statistics."""
    lines = content.split("\n")

    title = lines[0].strip() if lines else ""
    body_lines = lines[1:]
    body = "\n".join(body_lines).strip()
    non_blank = sum(1 for line in body_lines if line.strip())

    return NoteAnalysis(
        title=title or fallback_title,
        content_length=len(body),
        non_blank_lines=non_blank,
    )


def is_blank_analysis(
    analysis: NoteAnalysis,
    content: str,
    template: str | None,
    *,
    debug: bool = False,
) -> bool:
    if analysis.content_length == 0 or analysis.non_blank_lines == 0:
        return True
    return matches_template(content, template, debug=debug)


def is_blank(content: str, template: str | None = None, *, debug: bool = False) -> bool:
    """Return True if the note should be offered for deletion."""
    return is_blank_analysis(analyze(content), content, template, debug=debug)
