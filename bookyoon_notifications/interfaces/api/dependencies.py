"""FastAPI dependency utilities."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookyoon_notifications.application.ports import CurrentUserProvider
from bookyoon_notifications.infrastructure.security import login_from_token

bearer_scheme = HTTPBearer(auto_error=False)

_UNRESOLVED = object()


class BearerTokenUserProvider:
    """Resolve the current login lazily from the request's bearer token."""

    def __init__(self, token: str | None) -> None:
        self._token = token
        self._login: object = _UNRESOLVED

    def __call__(self) -> str | None:
        if self._login is _UNRESOLVED:
            self._login = login_from_token(self._token)
        return self._login  # type: ignore[return-value]


def get_current_user_provider(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CurrentUserProvider:
    """Return the provider used by self-service endpoints to find the acting user.

    Requests without credentials are not rejected: the provider then resolves
    to ``None`` and the use cases degrade to a no-op.
    """

    token = credentials.credentials if credentials is not None else None
    return BearerTokenUserProvider(token)
