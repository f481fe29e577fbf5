"""Configuration management for readerly."""

import re

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_TAGS = frozenset(
    {
        "div", "p", "a", "img", "figure", "br", "span", "strong", "font",
        "h1", "h2", "h3", "h4", "h5", "h6", "embed",
    }
)

DEFAULT_ALLOWED_ATTRS = frozenset({"src", "href"})


class Settings(BaseSettings):
    """Extraction settings loaded from environment and .env file.

    A Settings instance is immutable; build a new one to change a tunable
    before extraction starts.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="READERLY_",
        extra="ignore",
        frozen=True,
    )

    # Scoring
    min_text_length: int = Field(default=25, ge=0)

    # Serialization
    allowed_tags: frozenset[str] = DEFAULT_ALLOWED_TAGS
    allowed_attrs: frozenset[str] = DEFAULT_ALLOWED_ATTRS

    # Candidate classification (matched against class/id values)
    blacklist_pattern: re.Pattern = re.compile(r"popupbody", re.I)
    maybe_candidate_pattern: re.Pattern = re.compile(r"and|article|body|column|main|shadow", re.I)
    unlikely_pattern: re.Pattern = re.compile(
        r"combx|comment|community|hidden|disqus|modal|extra|foot|header|menu|remark|rss|"
        r"shoutbox|sidebar|sponsor|ad-break|agegate|pagination|pager|popup",
        re.I,
    )
    negative_pattern: re.Pattern = re.compile(
        r"combx|comment|com-|foot|footer|footnote|masthead|media|meta|outbrain|promo|related|"
        r"scroll|shoutbox|sidebar|sponsor|shopping|tags|tool|widget",
        re.I,
    )
    positive_pattern: re.Pattern = re.compile(
        r"article|body|content|entry|hentry|main|page|pagination|post|text|blog|story",
        re.I,
    )
    sentence_pattern: re.Pattern = re.compile(r"\.(\s|$)")

    # Fetching
    user_agent: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
    fetch_timeout: float = 30.0
    allow_private_hosts: bool = False


def get_settings() -> Settings:
    """Get extraction settings."""
    return Settings()
