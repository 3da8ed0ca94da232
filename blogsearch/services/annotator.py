"""Decorate a result page with links and highlighted matches."""

from blogsearch.models.search import ResultPage
from blogsearch.services.highlight import highlight_html, highlight_text
from blogsearch.services.links import PageRoutes, category_url, post_url


def annotate_results(
    page: ResultPage,
    routes: PageRoutes,
    post_page: str,
    category_page: str,
    highlight: bool,
    term: str,
) -> ResultPage:
    """Return a copy of ``page`` with URLs set and, optionally, matches marked.

    The input page is left untouched so the same fetched page can be
    annotated more than once with identical results.
    """
    annotated = page.model_copy(deep=True)
    mark = highlight and bool(term)

    for post in annotated.posts:
        post.url = post_url(routes, post_page, post)
        for category in post.categories:
            category.url = category_url(routes, category_page, category)

        if mark:
            post.title = highlight_text(post.title, term)
            post.excerpt = highlight_text(post.excerpt, term)
            post.content_html = highlight_html(post.content_html, term)

    return annotated
