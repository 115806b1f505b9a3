"""Shared fixtures: fake WordPress responses served through a mocked session."""

import json
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from cfblog.client import WordPressClient
from cfblog.config import Profile

API_URL = "https://blog.test"
WP_V2_PATH = "/wp-json/wp/v2"


def make_response(
    data: Any = None,
    status: int = 200,
    headers: Optional[Dict[str, str]] = None,
    reason: str = "OK",
    body: Optional[str] = None,
) -> requests.Response:
    """Build a real requests.Response carrying JSON (or a raw body)."""
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.url = API_URL
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {})
    content = body if body is not None else json.dumps(data)
    response._content = content.encode("utf-8")
    return response


def raw_post(post_id: int, slug: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
    post = {
        "id": post_id,
        "slug": slug or f"post-{post_id}",
        "title": {"rendered": f"Post {post_id}"},
        "excerpt": {"rendered": f"<p>Excerpt of post {post_id}</p>"},
        "content": {"rendered": f"<p>Body of post {post_id}</p>"},
        "date": "2024-01-02T03:04:05",
        "modified": "2024-01-03T03:04:05",
        "author": 1,
        "categories": [],
        "tags": [],
    }
    post.update(overrides)
    return post


def posts_page(posts: List[Dict[str, Any]], total: int, total_pages: int) -> requests.Response:
    return make_response(posts, headers={"X-WP-Total": str(total), "X-WP-TotalPages": str(total_pages)})


def route(session: Mock, handler: Callable[[str, Dict[str, str]], requests.Response]) -> None:
    """Dispatch session.get calls to handler(path, query params)."""
    def get(url: str, **kwargs: Any) -> requests.Response:
        parts = urlsplit(url)
        return handler(parts.path, dict(parse_qsl(parts.query)))

    session.get.side_effect = get


def requested_params(session: Mock, index: int = 0) -> Dict[str, str]:
    url = session.get.call_args_list[index].args[0]
    return dict(parse_qsl(urlsplit(url).query))


@pytest.fixture
def profile():
    """Profile pointing at a fake WordPress site."""
    return Profile(name="test", api_url=API_URL, site_url="https://frontend.test")


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(profile, session):
    """WordPressClient wired to the mocked session."""
    return WordPressClient(profile=profile, session=session)
