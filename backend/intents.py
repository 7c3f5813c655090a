"""Lightweight message helpers: URL detection and query normalization."""

import re
import string
from typing import Optional

# Absolute http(s) URL that starts a token. The authority must end at a path/query/
# fragment delimiter, whitespace, a quote, trailing punctuation or end of text so that
# partial domains ("https://example.com:80x") never match.
URL_PATTERN = re.compile(
    r"(?:^|(?<=[\s\"'(<\[]))"
    r"https?://(?:www\.)?(?:[-a-z0-9]{1,63}\.)+[a-z]{2,63}(?::\d{2,5})?"
    r"(?=[/?#\s\"']|[.,;:!?)\]>]+(?:[\s\"']|$)|$)"
    r"(?:[/?#][^\s\"']*)?",
    re.IGNORECASE,
)

BOILERPLATE_PREFIXES = (
    "give me a summary of this site:",
    "summarize this website:",
    "summarize this site:",
    "summarize this page:",
    "tell me about this site:",
    "what is this site about:",
    "analyze this website:",
    "review this website:",
)
_PREFIX_RE = re.compile(
    r"^\s*(?:" + "|".join(re.escape(p) for p in BOILERPLATE_PREFIXES) + r")",
    re.IGNORECASE,
)
_SITE_REFERENCE_RE = re.compile(r"\bthis\s+(?:website|site|page|url)\b", re.IGNORECASE)

FALLBACK_QUERY = "provide a comprehensive summary and analysis of this website"


def find_first_url(text: str) -> Optional[str]:
    """Return the leftmost absolute http(s) URL in ``text``, or None."""
    m = URL_PATTERN.search(text or "")
    return m.group(0) if m else None


def _is_blank(text: str) -> bool:
    return not text.strip(string.punctuation + string.whitespace)


def normalize_query(message: str, url: Optional[str] = None) -> str:
    """Recover the user's question from a message that may wrap a URL in boilerplate.

    Without a URL the message is only trimmed. With one, the first occurrence of the
    URL is removed, a known lead-in such as "summarize this site:" is stripped and
    references to "this site/website/page/url" become "it". A remainder made only of
    punctuation falls back to a generic summary request.
    """
    text = (message or "").strip()
    if not url:
        return text

    query = text.replace(url, "", 1).strip()
    query = _PREFIX_RE.sub("", query, count=1)
    query = _SITE_REFERENCE_RE.sub("it", query).strip()
    if _is_blank(query):
        return FALLBACK_QUERY
    return query
