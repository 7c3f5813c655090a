import os

# Keep test runs offline and out of the rotating log directory
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ["GEMINI_API_KEY"] = ""

import pytest  # noqa: E402

from models import ExtractionResult, Headings  # noqa: E402


def make_generator(chunks, calls=None, fail_with=None):
    """Fake generation service honouring both single-result and streaming modes."""

    def generate(messages, stream=True):
        if calls is not None:
            calls.append({"messages": messages, "stream": stream})
        if fail_with is not None:
            raise fail_with
        if stream:
            async def _gen():
                for c in chunks:
                    yield c
            return _gen()

        async def _one():
            return "".join(chunks)
        return _one()

    return generate


def make_scraper(result=None, calls=None):
    async def scrape(url):
        if calls is not None:
            calls.append(url)
        if result is None:
            return ExtractionResult(
                source_url=url,
                title="Example Domain",
                headings=Headings(h1="Example Domain"),
                body_text="Example Domain This domain is for use in illustrative examples in documents.",
                extractor_used="beautifulsoup",
            )
        return result.model_copy(update={"source_url": url})

    return scrape


@pytest.fixture
def fake_generator():
    return make_generator


@pytest.fixture
def fake_scraper():
    return make_scraper
