"""Tests for readerly.engine.scoring module."""

import pytest

from readerly.config import Settings
from readerly.engine.scoring import (
    CandidateMap,
    base_score,
    class_weight,
    content_increment,
    count_commas,
    link_density,
    score_candidates,
)


class TestClassWeight:
    """Tests for class_weight function."""

    @pytest.mark.parametrize(
        "attrs, expected",
        [
            ('class="sidebar-widget"', -25),
            ('class="article-content"', 25),
            ('class="article-content sidebar-widget"', 0),
            ('class="content" id="main-article"', 50),
            ('class="comment" id="footer"', -50),
            ('class="plain"', 0),
            ("", 0),
        ],
    )
    def test_weights(self, make_soup, settings, attrs, expected):
        soup = make_soup(f"<div {attrs}>x</div>")

        assert class_weight(soup.find("div"), settings) == expected


class TestLinkDensity:
    """Tests for link_density function."""

    def test_partial_links(self, make_soup):
        soup = make_soup("<p>Some text <a href='/x'>link</a></p>")

        assert link_density(soup.find("p")) == pytest.approx(4 / 14)

    def test_all_links(self, make_soup):
        soup = make_soup("<p><a href='/x'>only a link</a></p>")

        assert link_density(soup.find("p")) == 1.0

    def test_placeholder_anchors_ignored(self, make_soup):
        """Test that anchors without a real href do not count."""
        soup = make_soup("<p>text <a href='#'>top</a> <a>name</a> <a href=''>empty</a></p>")

        assert link_density(soup.find("p")) == 0.0

    def test_empty_text(self, make_soup):
        soup = make_soup("<div><a href='/x'></a><img src='a.png'></div>")

        assert link_density(soup.find("div")) == 0.0

    def test_bounded(self, make_soup):
        soup = make_soup("<div>a<a href='/1'>bb</a><p><a href='/2'>ccc</a></p></div>")

        assert 0.0 <= link_density(soup.find("div")) <= 1.0


class TestBaseScore:
    """Tests for base_score function."""

    @pytest.mark.parametrize(
        "markup, tag, expected",
        [
            ("<article>x</article>", "article", 10),
            ("<section>x</section>", "section", 8),
            ("<div>x</div>", "div", 5),
            ("<blockquote>x</blockquote>", "blockquote", 3),
            ("<ul><li>x</li></ul>", "li", -3),
            ("<form>x</form>", "form", -3),
            ("<h2>x</h2>", "h2", -5),
            ("<span>x</span>", "span", 0),
            ('<div class="post">x</div>', "div", 30),
            ("<article itemscope itemtype='https://schema.org/Article'>x</article>", "article", 45),
        ],
    )
    def test_tag_and_attribute_bonuses(self, make_soup, settings, markup, tag, expected):
        soup = make_soup(markup)

        assert base_score(soup.find(tag), settings) == expected


class TestContentIncrement:
    """Tests for paragraph increments."""

    def test_counts_both_comma_kinds(self):
        assert count_commas("a,b，c, d") == 3
        assert content_increment("a,b，c") == 3.0

    def test_length_bonus_capped(self):
        assert content_increment("x" * 99) == 1.0
        assert content_increment("x" * 250) == 3.0
        assert content_increment("x" * 1000) == 4.0


class TestCandidateMap:
    """Tests for CandidateMap class."""

    def test_keyed_by_identity(self, make_soup, settings):
        """Test that structurally equal nodes get separate candidates."""
        soup = make_soup("<div>same</div><div>same</div>")
        first, second = soup.find_all("div")
        candidates = CandidateMap(settings)

        candidates.ensure(first).score += 1
        candidates.ensure(second)

        assert len(candidates) == 2
        assert candidates.get(first).score == 6.0
        assert candidates.get(second).score == 5.0
        assert candidates.ensure(first) is candidates.get(first)

    def test_missing_node(self, make_soup, settings):
        soup = make_soup("<div>x</div>")
        candidates = CandidateMap(settings)

        assert candidates.get(soup.find("div")) is None
        assert soup.find("div") not in candidates


class TestScoreCandidates:
    """Tests for score_candidates function."""

    def test_parent_and_grandparent(self, make_soup, settings, lorem):
        """Test full increment to the parent, half to the grandparent."""
        soup = make_soup(f"<body><div id='x'><p>{lorem}</p></div></body>")

        candidates = score_candidates(soup, settings)

        assert len(candidates) == 2
        assert candidates.get(soup.find("div")).score == 10.0
        assert candidates.get(soup.body).score == 2.5
        assert candidates.get(soup.html) is None

    def test_short_paragraphs_ignored(self, make_soup, settings):
        soup = make_soup("<body><div><p>too short</p></div></body>")

        assert len(score_candidates(soup, settings)) == 0

    def test_table_cells_count(self, make_soup, settings, lorem):
        soup = make_soup(f"<table><tr><td>{lorem}</td></tr></table>")

        candidates = score_candidates(soup, settings)

        assert candidates.get(soup.find("tr")) is not None
        assert candidates.get(soup.find("tr")).score == 5.0

    def test_scores_accumulate(self, make_soup, settings, lorem):
        soup = make_soup(f"<body><div><p>{lorem}</p><p>{lorem}</p></div><div><p>{lorem}</p></div></body>")

        candidates = score_candidates(soup, settings)
        first, second = soup.find_all("div")

        assert len(candidates) == 3
        assert candidates.get(first).score == 15.0
        assert candidates.get(second).score == 10.0
        assert candidates.get(soup.body).score == 7.5

    def test_link_density_scaling(self, make_soup, settings, lorem):
        soup = make_soup(f"<body><div><p><a href='/x'>{lorem}</a></p></div></body>")

        candidates = score_candidates(soup, settings)

        assert candidates.get(soup.find("div")).score == 0.0

    def test_min_text_length_setting(self, make_soup, lorem):
        soup = make_soup(f"<body><div><p>{lorem}</p></div></body>")

        candidates = score_candidates(soup, Settings(_env_file=None, min_text_length=200))

        assert len(candidates) == 0
