"""
Prompts Module
Builds the final user prompt from the normalized question and the page extraction
"""
from typing import Optional

from models import ExtractionResult


def get_website_prompt(query: str, content: str) -> str:
    """Prompt grounded in scraped page content"""
    return f"""User Question: "{query}"

WEBSITE CONTENT:
{content}

Instructions:
- Analyze the website content thoroughly and provide a comprehensive answer
- Cite specific information from the content
- Clearly indicate that your response is based on the scraped website data
- If the content doesn't fully answer the question, state this limitation"""


def get_scrape_failed_prompt(query: str, error: str) -> str:
    """Prompt used when the page could not be fetched or parsed"""
    return f"""User Question: "{query}"

Note: Unable to access webpage content (Error: {error})

Instructions:
- Provide a helpful answer using general knowledge
- Mention that you couldn't access the specific webpage
- Offer alternative suggestions if appropriate"""


def get_conversation_prompt(query: str) -> str:
    """Prompt for plain messages without a link"""
    return f"""User Message: "{query}"

Instructions:
- Provide a helpful, conversational response
- Use your general knowledge to answer the question"""


def compose_prompt(query: str, extraction: Optional[ExtractionResult] = None) -> str:
    if extraction is not None and extraction.ok:
        return get_website_prompt(query, extraction.body_text)
    if extraction is not None:
        return get_scrape_failed_prompt(query, extraction.error or "no content could be extracted")
    return get_conversation_prompt(query)
