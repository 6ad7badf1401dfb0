"""HTTP client for the push API.

Mirrors the web client's push call: the locale defaults to the 'xx'
placeholder, which the API treats as "all locales".
"""

from typing import Any, Optional

import httpx

from .errors import (
    AuthzError,
    NotFoundError,
    PushError,
    SinkError,
    UnsupportedFormatError,
    ValidationError,
)

_ERRORS_BY_CODE: dict[str, type[PushError]] = {
    ValidationError.error_code: ValidationError,
    NotFoundError.error_code: NotFoundError,
    AuthzError.error_code: AuthzError,
    UnsupportedFormatError.error_code: UnsupportedFormatError,
    SinkError.error_code: SinkError,
}


class PushClient:
    """
    Thin wrapper over httpx for the push and export endpoints.

    Args:
        base_url: API root including the version prefix, e.g.
            "https://translations.example.com/api/v1"
        token: Bearer token sent with every request
        transport: Optional httpx transport (tests use MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 30.0,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            transport=transport,
            timeout=timeout,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PushClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def push(
        self,
        project_id: str,
        format: str,
        untranslated: bool = False,
        fallback_locale: Optional[str] = None,
        locale_code: Optional[str] = None,
    ) -> dict[str, Any]:
        """Trigger a push and return the decoded summary."""
        params = {
            "locale": locale_code or "xx",
            "format": format,
            "untranslated": "true" if untranslated else "false",
        }
        if fallback_locale:
            params["fallbackLocale"] = fallback_locale

        response = self._http.get(f"/projects/{project_id}/push", params=params)
        self._raise_for_error(response)
        return response.json()

    def export(
        self,
        project_id: str,
        locale_code: str,
        format: str,
        untranslated: bool = False,
        fallback_locale: Optional[str] = None,
    ) -> bytes:
        """Download one locale's exported file."""
        params = {
            "locale": locale_code,
            "format": format,
            "untranslated": "true" if untranslated else "false",
        }
        if fallback_locale:
            params["fallbackLocale"] = fallback_locale

        response = self._http.get(f"/projects/{project_id}/exports", params=params)
        self._raise_for_error(response)
        return response.content

    def _raise_for_error(self, response: httpx.Response) -> None:
        if response.is_success:
            return

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or response.text or response.reason_phrase
        error_class = _ERRORS_BY_CODE.get(body.get("error_code"))

        if error_class is ValidationError:
            raise ValidationError(message, field=body.get("details", {}).get("field"))
        if error_class is NotFoundError:
            details = body.get("details", {})
            raise NotFoundError(details.get("resource", "Resource"), details.get("id"))
        if error_class is UnsupportedFormatError:
            raise UnsupportedFormatError(body.get("details", {}).get("format", ""))
        if error_class is not None:
            raise error_class(message)
        raise PushError(f"HTTP {response.status_code}: {message}")
