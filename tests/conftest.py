"""Shared pytest fixtures for readerly tests."""

import os

import pytest
from bs4 import BeautifulSoup

from readerly.config import Settings

LOREM = (
    "Readability is the ease with which a reader can understand a written text, "
    "and it depends on content, vocabulary, syntax and presentation."
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep READERLY_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("READERLY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> Settings:
    """Default extraction settings."""
    return Settings(_env_file=None)


@pytest.fixture
def make_soup():
    """Build a BeautifulSoup tree the way the library parses documents."""

    def _make(markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, "lxml")

    return _make


@pytest.fixture
def lorem() -> str:
    """A sentence long enough to count as a paragraph."""
    return LOREM


@pytest.fixture
def sample_html() -> str:
    """A typical article page with navigation, sidebar and footer."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>How Readers Read | Example Site</title>
        <script>var tracking = true;</script>
        <style>body {{ color: red; }}</style>
    </head>
    <body>
        <div id="menu"><a href="/">Home</a> <a href="/about">About</a></div>
        <div class="article-content">
            <h2>Getting started</h2>
            <p>{LOREM} It also depends on the reader, their motivation and prior knowledge.</p>
            <p>{LOREM} Good typography, short sentences, and clear structure all help.</p>
            <p>Read the <a href="/guide.html">full guide</a> for more, or see <img src="images/chart.png"> the chart.</p>
            <form><input type="text" name="q"><button>Search</button></form>
        </div>
        <div class="sidebar">
            <p>Related stories you might enjoy, picked for you by our editors today.</p>
        </div>
        <div id="footer">Copyright, all rights reserved, and so on, and so forth.</div>
    </body>
    </html>
    """
