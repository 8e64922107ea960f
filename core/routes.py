"""Route family: the backend operations relayed by the proxy."""

from dataclasses import dataclass

HEALTH_PATH = "/api/tests"


@dataclass(frozen=True)
class RouteSpec:
    """A relayed operation. The frontend path equals the backend path."""

    name: str
    method: str
    path: str


PASSKEY_ROUTES: tuple[RouteSpec, ...] = (
    RouteSpec("passkey-register-options", "POST", "/api/user/passkeys/register-options"),
    RouteSpec("passkey-register-verify", "POST", "/api/user/passkeys/register-verify"),
    RouteSpec("passkey-auth-options", "POST", "/api/user/passkeys/auth-options"),
    RouteSpec("passkey-auth-verify", "POST", "/api/user/passkeys/auth-verify"),
    RouteSpec("passkeys-list", "GET", "/api/user/passkeys"),
    RouteSpec("passkeys-delete", "DELETE", "/api/user/passkeys"),
)

USER_ROUTES: tuple[RouteSpec, ...] = (
    RouteSpec("profile-get", "GET", "/api/user/profile"),
    RouteSpec("profile-update", "PATCH", "/api/user/profile"),
    RouteSpec("account-delete", "DELETE", "/api/user/delete-account"),
    RouteSpec("password-change", "POST", "/api/user/change-password"),
)

AUTH_ROUTES: tuple[RouteSpec, ...] = (
    RouteSpec("auth-passkey-signin", "POST", "/api/auth/passkey-signin"),
    RouteSpec("auth-register", "POST", "/api/auth/register"),
    RouteSpec("auth-forgot-password", "POST", "/api/auth/forgot-password"),
    RouteSpec("auth-reset-password", "POST", "/api/auth/reset-password"),
)

ROUTE_FAMILY: tuple[RouteSpec, ...] = PASSKEY_ROUTES + USER_ROUTES + AUTH_ROUTES
