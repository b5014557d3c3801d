from __future__ import annotations

import pytest
import requests

import page_fetcher
from page_fetcher import (
    FetchError,
    InsufficientContentError,
    extract_page_text,
    fetch_page_text,
)

DESCRIPTION = (
    "We are hiring a backend engineer to build Python services on AWS. "
    "You will design APIs, write tests, review code and mentor teammates. "
    "Experience with Docker, Kubernetes and PostgreSQL is a strong plus for this role."
)


class _StubResponse:
    def __init__(self, text: str, status: int = 200) -> None:
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class _StubSession:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _page(body: str) -> str:
    return f"<html><head><style>.x {{color: red}}</style></head><body>{body}</body></html>"


def test_prefers_job_description_container() -> None:
    html = _page(
        "<nav>Home Jobs About Careers Sign in</nav>"
        f'<div class="job-description">{DESCRIPTION}</div>'
        "<footer>Copyright footer text</footer>"
    )
    text = extract_page_text(html)
    assert text == DESCRIPTION
    assert "Sign in" not in text


def test_falls_back_to_body_when_containers_are_short() -> None:
    html = _page(f'<div class="content">Short blurb</div><p>{DESCRIPTION}</p>')
    text = extract_page_text(html)
    assert "Short blurb" in text
    assert DESCRIPTION in text


def test_strips_scripts_and_styles_and_collapses_whitespace() -> None:
    html = _page(f"<script>var tracking = 1;</script><main>\n\n  {DESCRIPTION}\n\t</main>")
    text = extract_page_text(html)
    assert "tracking" not in text
    assert "color" not in text
    assert text == DESCRIPTION


def test_fetch_sends_browser_user_agent_and_timeout() -> None:
    session = _StubSession(_StubResponse(_page(f"<article>{DESCRIPTION}</article>")))

    text = fetch_page_text("https://jobs.example.com/1", timeout=3, session=session)

    assert text == DESCRIPTION
    url, kwargs = session.calls[0]
    assert url == "https://jobs.example.com/1"
    assert kwargs["timeout"] == 3
    assert kwargs["headers"]["User-Agent"].startswith("Mozilla/5.0")


def test_non_success_status_is_fetch_error() -> None:
    session = _StubSession(_StubResponse("Not found", status=404))
    with pytest.raises(FetchError) as exc:
        fetch_page_text("https://jobs.example.com/missing", session=session)
    assert not isinstance(exc.value, InsufficientContentError)


def test_network_error_is_fetch_error() -> None:
    session = _StubSession(error=requests.ConnectionError("connection refused"))
    with pytest.raises(FetchError):
        fetch_page_text("https://unreachable.invalid", session=session)


def test_malformed_url_is_fetch_error() -> None:
    with pytest.raises(FetchError):
        fetch_page_text("not a url")


def test_short_page_is_insufficient_content() -> None:
    session = _StubSession(_StubResponse(_page("<p>Apply now!</p>")))
    with pytest.raises(InsufficientContentError):
        fetch_page_text("https://jobs.example.com/empty", session=session)


def test_minimum_content_threshold() -> None:
    assert page_fetcher.MIN_CONTENT_CHARS == 100
    body = "x" * page_fetcher.MIN_CONTENT_CHARS
    session = _StubSession(_StubResponse(_page(f"<p>{body}</p>")))
    assert fetch_page_text("https://jobs.example.com/edge", session=session) == body


def test_meta_charset_is_honoured_without_header_charset() -> None:
    html = (
        '<html><head><meta charset="utf-8"></head><body><main>'
        "We don’t need a rockstar — just a careful engineer. "
        "You’ll build Python services on AWS, review code with the team "
        "and keep our deployment pipeline healthy every single day."
        "</main></body></html>"
    )
    resp = requests.Response()
    resp.status_code = 200
    resp.headers["Content-Type"] = "text/html"
    resp._content = html.encode("utf-8")
    session = _StubSession(resp)

    text = fetch_page_text("https://jobs.example.com/utf8", session=session)

    assert "don’t" in text
    assert "You’ll" in text
    assert "â" not in text
