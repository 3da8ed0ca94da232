"""Tests for result annotation: links and highlighting."""

from datetime import datetime, timezone

import pytest

from blogsearch.errors import InvalidConfiguration
from blogsearch.models.blog import BlogCategory
from blogsearch.models.search import ResultPage, SearchPost
from blogsearch.services.annotator import annotate_results
from blogsearch.services.links import PageRoutes

ROUTES = PageRoutes(
    {
        "blog/post": "/blog/post/:slug",
        "blog/archive": "/blog/:year/:month/:day/:slug",
        "blog/category": "/blog/category/:slug",
        "blog/category-by-id": "/blog/category/:id/:slug?",
    }
)


def _make_page(title="Cats and Dogs", excerpt="A cat story", content_html="<a href=cat>cat</a>"):
    post = SearchPost(
        id="p1",
        title=title,
        slug="cats-and-dogs",
        excerpt=excerpt,
        content_html=content_html,
        published_at=datetime(2026, 3, 7, 12, 0, tzinfo=timezone.utc),
        categories=[BlogCategory(id="c1", name="Pets", slug="pets")],
    )
    return ResultPage(posts=[post], current_page=1, last_page=1, per_page=10, total=1)


class TestLinks:
    def test_post_and_category_urls(self):
        result = annotate_results(
            _make_page(), ROUTES, "blog/post", "blog/category", False, "cat"
        )
        post = result.posts[0]
        assert post.url == "/blog/post/cats-and-dogs"
        assert post.categories[0].url == "/blog/category/pets"

    def test_date_route_parameters(self):
        result = annotate_results(
            _make_page(), ROUTES, "blog/archive", "blog/category-by-id", False, ""
        )
        assert result.posts[0].url == "/blog/2026/03/07/cats-and-dogs"
        assert result.posts[0].categories[0].url == "/blog/category/c1/pets"

    def test_optional_parameter_missing(self):
        routes = PageRoutes({"p": "/tag/:id/:page?"})
        assert routes.url("p", {"id": "7"}) == "/tag/7"

    def test_unknown_link_target(self):
        with pytest.raises(InvalidConfiguration):
            annotate_results(_make_page(), ROUTES, "blog/missing", "blog/category", False, "")


class TestHighlighting:
    def test_highlight_enabled(self):
        result = annotate_results(
            _make_page(), ROUTES, "blog/post", "blog/category", True, "cat"
        )
        post = result.posts[0]
        assert post.title == "<mark>Cat</mark>s and Dogs"
        assert post.excerpt == "A <mark>cat</mark> story"
        assert post.content_html == "<a href=cat><mark>cat</mark></a>"

    def test_highlight_disabled(self):
        result = annotate_results(
            _make_page(), ROUTES, "blog/post", "blog/category", False, "cat"
        )
        assert result.posts[0].title == "Cats and Dogs"

    def test_empty_term_is_noop(self):
        result = annotate_results(
            _make_page(), ROUTES, "blog/post", "blog/category", True, ""
        )
        assert result.posts[0].title == "Cats and Dogs"
        assert result.posts[0].content_html == "<a href=cat>cat</a>"


def test_annotate_leaves_input_untouched_and_is_repeatable():
    page = _make_page()
    first = annotate_results(page, ROUTES, "blog/post", "blog/category", True, "cat")
    second = annotate_results(page, ROUTES, "blog/post", "blog/category", True, "cat")

    assert first == second
    assert page.posts[0].title == "Cats and Dogs"
    assert page.posts[0].url is None
    assert page.posts[0].categories[0].url is None
