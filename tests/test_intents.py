import pytest

from intents import FALLBACK_QUERY, find_first_url, normalize_query


@pytest.mark.parametrize(
    "text, expected",
    [
        ("https://example.com", "https://example.com"),
        ("please read https://www.example.com/docs?page=2#intro and explain", "https://www.example.com/docs?page=2#intro"),
        ("HTTP://Example.ORG/Path", "HTTP://Example.ORG/Path"),
        ("local server at http://sub.domain.io:8080/api", "http://sub.domain.io:8080/api"),
        ("see https://example.com.", "https://example.com"),
        ("(https://example.com) is neat", "https://example.com"),
        ('open "https://example.com/a?b=1" now', "https://example.com/a?b=1"),
    ],
)
def test_find_first_url_matches_full_tokens(text, expected):
    assert find_first_url(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "what is the capital of france?",
        "www.example.com has no scheme",
        "ftp://example.com/file",
        "xhttps://example.com glued to a word",
        "https://example.com:80x bad port",
        "https://localhost/path",
        "https://example.c0m",
    ],
)
def test_find_first_url_rejects_non_urls(text):
    assert find_first_url(text) is None


def test_find_first_url_returns_leftmost():
    text = "compare https://first.com/a with https://second.org/b"
    assert find_first_url(text) == "https://first.com/a"


def test_normalize_without_url_only_trims():
    assert normalize_query("  summarize this site: nothing here  ", None) == "summarize this site: nothing here"


def test_normalize_strips_prefix_and_falls_back():
    msg = "summarize this site: https://example.com"
    assert normalize_query(msg, find_first_url(msg)) == FALLBACK_QUERY


def test_normalize_keeps_question_after_url():
    msg = "https://bad.invalid/x what does this say"
    assert normalize_query(msg, find_first_url(msg)) == "what does this say"


def test_normalize_prefix_is_case_insensitive():
    msg = "Analyze This Website: https://example.com pricing tiers?"
    assert normalize_query(msg, find_first_url(msg)) == "pricing tiers?"


def test_normalize_rewrites_site_references():
    msg = "https://example.com what is this site about? Is this page current?"
    assert normalize_query(msg, find_first_url(msg)) == "what is it about? Is it current?"


def test_normalize_punctuation_only_falls_back():
    msg = "https://example.com ?!."
    assert normalize_query(msg, find_first_url(msg)) == FALLBACK_QUERY


def test_normalize_keeps_second_url_as_text():
    msg = "compare https://a.com with https://b.org"
    query = normalize_query(msg, find_first_url(msg))
    assert "https://a.com" not in query
    assert "https://b.org" in query


@pytest.mark.parametrize(
    "msg",
    [
        "summarize this site: https://example.com",
        "https://example.com what are the opening hours",
        "Tell me a joke",
        "   padded question?   ",
    ],
)
def test_normalize_is_idempotent_on_its_output(msg):
    once = normalize_query(msg, find_first_url(msg))
    assert normalize_query(once, find_first_url(once)) == once
