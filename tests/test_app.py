"""End-to-end tests for the relayed routes and the health check."""

import httpx
import pytest

from core.routes import ROUTE_FAMILY

REGISTER_OPTIONS = "/api/user/passkeys/register-options"
UNAVAILABLE = {"error": "Service unavailable"}


def _json(status, body):
    return lambda request: httpx.Response(status, json=body)


def _raise(exc_type, message):
    def handler(request):
        raise exc_type(message, request=request)

    return handler


def test_register_options_passes_through(make_client):
    client, backend = make_client(_json(200, {"challenge": "abc"}))

    response = client.post(REGISTER_OPTIONS, json={})

    assert response.status_code == 200
    assert response.json() == {"challenge": "abc"}
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"
    assert len(backend.requests) == 1
    assert backend.requests[0].url.path == REGISTER_OPTIONS
    assert backend.requests[0].method == "POST"


@pytest.mark.parametrize(
    "status, body",
    [
        (200, {"verified": True}),
        (400, {"error": "Missing credential or challenge"}),
        (401, {"error": "Unauthorized"}),
        (409, {"error": "Category already exists"}),
    ],
)
def test_backend_status_and_body_unchanged(make_client, status, body):
    client, _ = make_client(_json(status, body))

    response = client.post(REGISTER_OPTIONS, json={})

    assert response.status_code == status
    assert response.json() == body


def test_connection_refused_returns_503(make_client, logger):
    client, _ = make_client(_raise(httpx.ConnectError, "Connection refused"))

    response = client.post(REGISTER_OPTIONS, json={})

    assert response.status_code == 503
    assert response.json() == UNAVAILABLE
    assert response.headers["access-control-allow-origin"] == "*"
    assert logger.errors[0][0] == "passkey-register-options"
    assert "Connection refused" in logger.errors[0][2]


@pytest.mark.parametrize(
    "handler",
    [
        pytest.param(_raise(httpx.ReadTimeout, "slow"), id="timeout"),
        pytest.param(_raise(httpx.ConnectError, "Name or service not known"), id="dns"),
        pytest.param(lambda r: httpx.Response(200, text="not json"), id="malformed"),
        pytest.param(lambda r: httpx.Response(500, text=""), id="empty"),
    ],
)
def test_every_transport_failure_has_the_same_shape(make_client, handler):
    client, _ = make_client(handler)

    response = client.post(REGISTER_OPTIONS, json={})

    assert response.status_code == 503
    assert response.json() == UNAVAILABLE


def test_host_not_forwarded_and_cookies_kept(make_client):
    client, backend = make_client(_json(200, {"ok": True}))

    client.post(
        REGISTER_OPTIONS,
        json={},
        headers=[
            ("cookie", "authjs.session-token=abc"),
            ("cookie", "theme=dark"),
            ("x-trace", "1"),
        ],
    )

    sent = backend.requests[0]
    assert sent.headers["host"] == "localhost:3001"
    assert sent.headers.get_list("cookie") == ["authjs.session-token=abc", "theme=dark"]
    assert sent.headers["x-trace"] == "1"


def test_body_forwarded_verbatim(make_client):
    client, backend = make_client(_json(200, {"verified": True}))
    payload = b'{"credential": {"id": "cred-1"}, "expectedChallenge": "abc"}'

    client.post(
        "/api/user/passkeys/register-verify",
        content=payload,
        headers={"content-type": "application/json"},
    )

    assert backend.requests[0].content == payload


def test_repeated_requests_forwarded_independently(make_client, logger):
    client, backend = make_client(_json(200, {"challenge": "abc"}))

    first = client.post(REGISTER_OPTIONS, json={})
    second = client.post(REGISTER_OPTIONS, json={})

    assert first.json() == second.json() == {"challenge": "abc"}
    assert len(backend.requests) == 2
    assert len(logger.forwards) == 2


def test_set_cookie_relayed_to_browser(make_client):
    def handler(request):
        return httpx.Response(
            200,
            json={"verified": True},
            headers={"set-cookie": "authjs.session-token=new; Path=/; HttpOnly"},
        )

    client, _ = make_client(handler)

    response = client.post("/api/user/passkeys/auth-verify", json={})

    assert response.headers["set-cookie"] == "authjs.session-token=new; Path=/; HttpOnly"


def test_credentials_not_forwarded_when_disabled(make_client):
    def handler(request):
        return httpx.Response(
            200, json={"user": {}}, headers={"set-cookie": "authjs.session-token=new"}
        )

    client, backend = make_client(handler, forward_credentials=False)

    response = client.get("/api/user/profile", headers={"cookie": "authjs.session-token=abc"})

    assert "cookie" not in backend.requests[0].headers
    assert "set-cookie" not in response.headers


def test_query_string_forwarded(make_client):
    client, backend = make_client(_json(200, {"passkeys": []}))

    client.get("/api/user/passkeys?include=name")

    assert backend.requests[0].url.params["include"] == "name"


def test_query_string_forwarded_verbatim(make_client):
    client, backend = make_client(_json(200, {"passkeys": []}))

    client.get("/api/user/passkeys?flag&q=a+b")

    assert backend.requests[0].url.query == b"flag&q=a+b"


def test_utf8_cookie_forwarded(make_client):
    client, backend = make_client(_json(200, {"challenge": "abc"}))

    response = client.post(REGISTER_OPTIONS, headers={"cookie": "name=José".encode()})

    assert response.status_code == 200
    assert (b"cookie", b"name=Jos\xc3\xa9") in backend.requests[0].headers.raw


def test_nan_body_returns_503(make_client):
    client, _ = make_client(
        lambda request: httpx.Response(
            200,
            content=b'{"amount": NaN}',
            headers={"content-type": "application/json"},
        )
    )

    response = client.post(REGISTER_OPTIONS, json={})

    assert response.status_code == 503
    assert response.json() == UNAVAILABLE


def test_passkey_signin_relays_session_cookie(make_client):
    def handler(request):
        return httpx.Response(
            200,
            json={"ok": True},
            headers={"set-cookie": "authjs.session-token=fresh; Path=/; HttpOnly"},
        )

    client, backend = make_client(handler)

    response = client.post("/api/auth/passkey-signin", json={"credential": {"id": "cred-1"}})

    assert response.status_code == 200
    assert response.headers["set-cookie"] == "authjs.session-token=fresh; Path=/; HttpOnly"
    assert backend.requests[0].url.path == "/api/auth/passkey-signin"


def test_debug_logs_headers_with_credentials_masked(make_client, config):
    client, _ = make_client(_json(200, {}), debug=True)

    client.post(
        "/api/user/change-password",
        json={},
        headers={"cookie": "authjs.session-token=secret-value-1234", "x-trace": "7"},
    )

    log = config.logging.log_file.read_text()
    assert "DEBUG: POST /api/user/change-password" in log
    assert "secret-value" not in log
    assert "authjs...1234" in log
    assert "'x-trace': '7'" in log


@pytest.mark.parametrize("route", ROUTE_FAMILY, ids=lambda r: r.name)
def test_every_route_forwards_to_its_backend_path(make_client, logger, route):
    client, backend = make_client(_json(200, {"route": route.name}))

    response = client.request(route.method, route.path)

    assert response.status_code == 200
    assert response.json() == {"route": route.name}
    assert backend.requests[0].method == route.method
    assert backend.requests[0].url.path == route.path
    assert logger.forwards == [(route.name, route.method, route.path, 200)]


def test_wrong_method_is_rejected_locally(make_client):
    client, backend = make_client(_json(200, {}))

    response = client.get(REGISTER_OPTIONS)

    assert response.status_code == 405
    assert backend.requests == []


def test_health_check_never_contacts_backend(make_client):
    client, backend = make_client(_json(500, {"error": "should not be called"}))

    response = client.get("/api/tests")

    assert response.status_code == 200
    assert response.json() == {"message": "Test backend"}
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"
    assert backend.requests == []
