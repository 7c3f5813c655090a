import re
from typing import Callable, List, Optional, Tuple

import httpx
import trafilatura
from bs4 import BeautifulSoup

from config import Config
from logger import logger
from models import ExtractionResult, Headings

NON_CONTENT_TAGS = ["script", "style", "noscript", "iframe"]
CONTENT_SELECTOR = '[class*="content"], [id*="content"]'

_WS_RE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def _texts(elements) -> str:
    return clean_text(" ".join(el.get_text(" ") for el in elements))


def parse_html(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(NON_CONTENT_TAGS):
        tag.decompose()
    return soup


def _page_fields(soup: BeautifulSoup) -> Tuple[str, str, str, str]:
    title = clean_text(soup.title.get_text(" ")) if soup.title else ""
    meta = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    meta_description = clean_text(meta.get("content", "")) if meta else ""
    h1 = _texts(soup.find_all("h1"))
    h2 = _texts(soup.find_all("h2"))
    return title, meta_description, h1, h2


def soup_body(soup: BeautifulSoup, html: str) -> str:
    """Concatenate page fields in priority order: title, meta, headings, articles,
    *content* containers, paragraphs, list items."""
    title, meta_description, h1, h2 = _page_fields(soup)
    fields = [
        title,
        meta_description,
        h1,
        h2,
        _texts(soup.find_all("article")),
        _texts(soup.select(CONTENT_SELECTOR)),
        _texts(soup.find_all("p")),
        _texts(soup.find_all("li")),
    ]
    return clean_text(" ".join(fields))


def trafilatura_body(soup: BeautifulSoup, html: str) -> str:
    extracted = trafilatura.extract(html, include_comments=False, include_tables=False, favor_recall=True) or ""
    return clean_text(extracted)


# Tried in order; the first strategy with a non-empty body wins
EXTRACTORS: List[Tuple[str, Callable[[BeautifulSoup, str], str]]] = [
    ("beautifulsoup", soup_body),
    ("trafilatura", trafilatura_body),
]


def extract_from_html(html: str, url: str, max_chars: Optional[int] = None) -> ExtractionResult:
    """Reduce an HTML document to a bounded, cleaned summary. Never raises."""
    limit = Config.MAX_CONTENT_CHARS if max_chars is None else max_chars
    soup = parse_html(html)
    title, meta_description, h1, h2 = _page_fields(soup)
    result = ExtractionResult(
        source_url=url,
        title=title,
        headings=Headings(h1=h1, h2=h2),
        meta_description=meta_description,
    )
    for name, strategy in EXTRACTORS:
        try:
            body = strategy(soup, html)
        except Exception as e:
            logger.warning(f"[scraper] {name} failed for {url}: {e}")
            continue
        if body:
            result.body_text = body[:limit]
            result.extractor_used = name
            logger.info(f"[scraper] {url}: {len(result.body_text)} chars via {name}")
            return result
    result.error = "No extractable content found at the URL."
    logger.warning(f"[scraper] no extractable content for {url}")
    return result


async def fetch_html(url: str, client: Optional[httpx.AsyncClient] = None) -> str:
    headers = {"User-Agent": Config.USER_AGENT}
    if client is not None:
        resp = await client.get(url, headers=headers, follow_redirects=True)
    else:
        async with httpx.AsyncClient(follow_redirects=True, timeout=Config.REQUEST_TIMEOUT) as owned:
            resp = await owned.get(url, headers=headers)
    resp.raise_for_status()
    return resp.text[:Config.MAX_CRAWL_SIZE]


async def scrape_url(url: str, client: Optional[httpx.AsyncClient] = None) -> ExtractionResult:
    """Fetch ``url`` once and extract its text. Failures come back on ``error``."""
    try:
        html = await fetch_html(url, client)
    except httpx.HTTPStatusError as e:
        code = e.response.status_code
        logger.warning(f"[scraper] {url} returned HTTP {code}")
        return ExtractionResult(source_url=url, error=f"Failed to scrape the URL (HTTP {code}).")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        reason = (str(e) or type(e).__name__).rstrip(".")
        logger.warning(f"[scraper] fetch failed for {url}: {reason}")
        return ExtractionResult(source_url=url, error=f"Failed to scrape the URL: {reason}.")
    try:
        return extract_from_html(html, url)
    except Exception as e:
        logger.exception(f"[scraper] unexpected parse failure for {url}: {e}")
        return ExtractionResult(source_url=url, error="Failed to parse the page content.")
