"""
Token cache tests: expiry handling, failure reset and single-flight refresh.
"""

import threading
import time
from unittest.mock import MagicMock

import pytest
import requests

from conftest import CLIENT_ID, CLIENT_SECRET, token_body
from payu.endpoints import SANDBOX_ENDPOINT
from payu.errors import AuthenticationError
from payu.oauth import OAuth


@pytest.fixture
def oauth(session, clock):
    return OAuth(session, SANDBOX_ENDPOINT, CLIENT_ID, CLIENT_SECRET, clock=clock)


def test_fresh_cache_starts_expired(oauth, clock):
    assert oauth.access_token == ""
    assert oauth.expiry < clock()


def test_first_call_fetches_once(oauth, session):
    token = oauth.get_access_token()

    assert token == "test_access_token"
    assert session.post.call_count == 1


def test_token_request_shape(oauth, session):
    oauth.get_access_token()

    args, kwargs = session.post.call_args
    assert args[0] == f"{SANDBOX_ENDPOINT}/pl/standard/user/oauth/authorize"
    assert kwargs["data"] == {
        "grant_type": "client_credentials",
        "client_id": str(CLIENT_ID),
        "client_secret": CLIENT_SECRET,
    }
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


def test_cached_token_reused_until_expiry(oauth, session, clock, make_response):
    session.post.return_value = make_response(200, token_body(expires_in=300))
    oauth.get_access_token()

    clock.advance(299)
    assert oauth.get_access_token() == "test_access_token"
    assert session.post.call_count == 1

    session.post.return_value = make_response(200, token_body("second_token", 300))
    clock.advance(2)  # now + 301s
    assert oauth.get_access_token() == "second_token"
    assert session.post.call_count == 2


def test_token_valid_for_server_ttl(oauth, session, clock, make_response):
    session.post.return_value = make_response(200, token_body("abc", 60))

    assert oauth.get_access_token() == "abc"
    for _ in range(59):
        clock.advance(1)
        assert oauth.get_access_token() == "abc"

    assert session.post.call_count == 1


def test_expiry_is_now_plus_ttl(oauth, session, clock, make_response):
    session.post.return_value = make_response(200, token_body("abc", 60))
    start = clock()

    oauth.get_access_token()

    assert (oauth.expiry - start).total_seconds() == 60


def test_expired_exactly_at_ttl(oauth, session, clock, make_response):
    session.post.return_value = make_response(200, token_body("abc", 60))
    oauth.get_access_token()

    clock.advance(60)
    oauth.get_access_token()

    assert session.post.call_count == 2


def test_auth_error_carries_remote_fields(oauth, session, clock, make_response):
    session.post.return_value = make_response(
        401, {"error": "invalid_client", "error_description": "bad secret"}
    )

    with pytest.raises(AuthenticationError) as exc_info:
        oauth.get_access_token()

    assert exc_info.value.error == "invalid_client"
    assert exc_info.value.error_description == "bad secret"
    assert oauth.access_token == ""
    assert oauth.expiry < clock()


def test_failure_resets_previously_cached_token(oauth, session, clock, make_response):
    session.post.return_value = make_response(200, token_body("abc", 60))
    oauth.get_access_token()

    clock.advance(61)
    session.post.return_value = make_response(
        400, {"error": "invalid_request", "error_description": "nope"}
    )
    with pytest.raises(AuthenticationError):
        oauth.get_access_token()

    assert oauth.access_token == ""
    assert oauth.expiry < clock()


def test_next_call_after_failure_retries(oauth, session, make_response):
    session.post.side_effect = [
        make_response(401, {"error": "invalid_client", "error_description": "x"}),
        make_response(200, token_body("recovered")),
    ]

    with pytest.raises(AuthenticationError):
        oauth.get_access_token()
    assert oauth.get_access_token() == "recovered"
    assert session.post.call_count == 2


def test_non_json_error_body_propagates_http_error(oauth, session, make_response):
    session.post.return_value = make_response(503, text="<html>down</html>")

    with pytest.raises(requests.HTTPError):
        oauth.get_access_token()
    assert oauth.access_token == ""


def test_transport_error_propagates_unchanged(oauth, session, clock):
    error = requests.ConnectionError("connection refused")
    session.post.side_effect = error

    with pytest.raises(requests.ConnectionError) as exc_info:
        oauth.get_access_token()

    assert exc_info.value is error
    assert oauth.access_token == ""
    assert oauth.expiry < clock()


def test_concurrent_callers_share_one_fetch(make_response, clock):
    session = MagicMock(spec=requests.Session)

    def slow_post(*args, **kwargs):
        time.sleep(0.2)
        return make_response(200, token_body("shared_token", 3600))

    session.post.side_effect = slow_post
    oauth = OAuth(session, SANDBOX_ENDPOINT, CLIENT_ID, CLIENT_SECRET, clock=clock)

    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(oauth.get_access_token())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert results == ["shared_token"] * 8
    assert session.post.call_count == 1
