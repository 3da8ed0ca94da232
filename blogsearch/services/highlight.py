"""Highlight search term matches with <mark> tags.

Plain-text fields (title, excerpt) are highlighted everywhere. Rendered HTML
is split into markup (tags and entities such as ``&amp;``) and text first, so
markers only ever land in text.
"""

import logging
import re

logger = logging.getLogger(__name__)

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"

# Tags and character references are never split by a marker
_MARKUP_RE = re.compile(r"(<[^<>]*>|&(?:[a-zA-Z][a-zA-Z0-9]*|#[0-9]+|#[xX][0-9a-fA-F]+);)")


def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(re.escape(term), re.IGNORECASE)


def _wrap(pattern: re.Pattern[str], text: str) -> str:
    return pattern.sub(lambda m: f"{MARK_OPEN}{m.group(0)}{MARK_CLOSE}", text)


def highlight_text(text: str, term: str) -> str:
    """Wrap every case-insensitive occurrence of ``term`` in ``text``.

    Returns ``text`` unchanged when ``term`` is empty or the pattern cannot
    be built.
    """
    if not term or not text:
        return text
    try:
        pattern = _term_pattern(term)
    except re.error as e:
        logger.warning("Skipping highlight for %r: %s", term, e)
        return text
    return _wrap(pattern, text)


def highlight_html(html: str, term: str) -> str:
    """Like ``highlight_text`` but leaves markup tags untouched.

    ``<a href=cat>cat</a>`` with term ``cat`` becomes
    ``<a href=cat><mark>cat</mark></a>``, and ``Q&amp;A`` is left alone for
    term ``amp``. An unclosed ``<`` is treated as text.
    """
    if not term or not html:
        return html
    try:
        pattern = _term_pattern(term)
    except re.error as e:
        logger.warning("Skipping highlight for %r: %s", term, e)
        return html

    # re.split with a capture group alternates text, markup, text, markup, ...
    tokens = _MARKUP_RE.split(html)
    for i in range(0, len(tokens), 2):
        if tokens[i]:
            tokens[i] = _wrap(pattern, tokens[i])
    return "".join(tokens)
