from models import ExtractionResult
from prompts import compose_prompt


def _ok(body="Example Domain This domain is for examples."):
    return ExtractionResult(source_url="https://example.com", title="Example Domain", body_text=body, extractor_used="beautifulsoup")


def _failed(error="Failed to scrape the URL: name resolution failed."):
    return ExtractionResult(source_url="https://bad.invalid/x", error=error)


def test_grounded_branch_includes_body_and_instructions():
    prompt = compose_prompt("what is this domain for", _ok())
    assert 'User Question: "what is this domain for"' in prompt
    assert "WEBSITE CONTENT:\nExample Domain This domain is for examples." in prompt
    assert "Cite specific information" in prompt
    assert "based on the scraped website data" in prompt
    assert "state this limitation" in prompt


def test_failed_branch_discloses_error():
    prompt = compose_prompt("what does this say", _failed())
    assert 'User Question: "what does this say"' in prompt
    assert "Unable to access webpage content (Error: Failed to scrape the URL: name resolution failed.)" in prompt
    assert "general knowledge" in prompt
    assert "couldn't access the specific webpage" in prompt
    assert "WEBSITE CONTENT" not in prompt


def test_conversation_branch_without_url():
    prompt = compose_prompt("tell me a joke", None)
    assert 'User Message: "tell me a joke"' in prompt
    assert "conversational response" in prompt
    assert "webpage" not in prompt


def test_error_wins_over_stale_body():
    broken = ExtractionResult(source_url="https://example.com", body_text="leftover", error="boom")
    prompt = compose_prompt("q", broken)
    assert "Error: boom" in prompt
    assert "leftover" not in prompt


def test_every_branch_keeps_the_query():
    query = 'compare "plans" & pricing'
    for extraction in (_ok(), _failed(), None):
        assert query in compose_prompt(query, extraction)
