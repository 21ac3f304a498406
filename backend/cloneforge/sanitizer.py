"""Cleanup for the static HTML/CSS/JS target. No AI, plain regex passes."""

import re

_SCRIPT_BLOCK_RE = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_HTML_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
# Skip "//" preceded by ":" so URLs like https://cdn... survive
_LINE_COMMENT_RE = re.compile(r"(?<!:)//.*$", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def cleanup_html(html: str) -> str:
    """Drop <script> blocks and comments, normalize whitespace."""
    html = _SCRIPT_BLOCK_RE.sub("", html)
    html = _HTML_COMMENT_RE.sub("", html)
    return _collapse(html)


def cleanup_css(css: str) -> str:
    return _collapse(_BLOCK_COMMENT_RE.sub("", css))


def cleanup_javascript(js: str) -> str:
    js = _BLOCK_COMMENT_RE.sub("", js)
    js = _LINE_COMMENT_RE.sub("", js)
    return _collapse(js)
