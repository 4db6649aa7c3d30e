"""HTTP client for the geumbok backend.

Wraps ``httpx.Client``. Every call raises :class:`ApiError` on transport
failure or a non-2xx status, except the welfare read endpoints, which fall
back to the bundled catalog so the assistant can still answer offline.
"""

from __future__ import annotations

from typing import Any

import httpx

from geumbok.core.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TIMEOUT,
    DEFAULT_PAGE_LIMIT,
)
from geumbok.core.env import LOGGER
from geumbok.ledger import Expense
from geumbok.welfare import (
    DEFAULT_CATALOG,
    WelfareService,
    find_service,
    peer_statistics,
    search_services,
)


class ApiError(Exception):
    """A backend call failed.

    ``status`` is the HTTP status code, or None for transport errors.
    ``payload`` holds the decoded error body when the server sent JSON.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload or {}


def describe_error(exc: BaseException, default: str = "오류가 발생했습니다.") -> str:
    """Map an error to a short Korean message suitable for speaking aloud."""
    if not isinstance(exc, ApiError):
        return default
    status = exc.status
    if status is None:
        return "네트워크 연결을 확인해주세요."
    if status == 401:
        return "인증이 필요합니다. 다시 로그인해주세요."
    if status == 403:
        return "권한이 없습니다."
    if status == 404:
        return "요청한 정보를 찾을 수 없습니다."
    if status >= 500:
        return "서버 오류가 발생했습니다. 잠시 후 다시 시도해주세요."
    message = exc.payload.get("message")
    return str(message) if message else default


def _paginate(items: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "total": len(items),
        "page": 1,
        "limit": DEFAULT_PAGE_LIMIT,
        "pages": 1,
    }


class GeumbokClient:
    """Synchronous client for the backend REST API.

    Use as a context manager, or call :meth:`close` when done.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_API_TIMEOUT,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.token = token
        self._http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "GeumbokClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # ── transport ────────────────────────────────────────────────────

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self._http.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code == 401 and self.token:
            LOGGER.warning("Session expired; dropping API token")
            self.token = None

        if resp.is_error:
            try:
                payload = resp.json()
            except ValueError:
                payload = {}
            if not isinstance(payload, dict):
                payload = {}
            raise ApiError(
                f"{method} {path} returned {resp.status_code}",
                status=resp.status_code,
                payload=payload,
            )
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(
                f"{method} {path} returned invalid JSON",
                status=resp.status_code,
            ) from exc

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def _post(self, path: str, json: Any = None) -> Any:
        return self._request("POST", path, json=json)

    def _put(self, path: str, json: Any = None) -> Any:
        return self._request("PUT", path, json=json)

    def _delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def _get_envelope(
        self, path: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """GET a JSON object; any other document is an ApiError."""
        body = self._get(path, params=params)
        if not isinstance(body, dict):
            raise ApiError(f"GET {path} returned a non-object body")
        return body

    # ── expenses ─────────────────────────────────────────────────────

    def list_expenses(self, **params: Any) -> Any:
        return self._get("/expenses", params=params or None)

    def add_expense(self, expense: Expense | dict[str, Any]) -> Any:
        body = expense.to_payload() if isinstance(expense, Expense) else expense
        return self._post("/expenses", json=body)

    def update_expense(self, expense_id: int | str, data: dict[str, Any]) -> Any:
        return self._put(f"/expenses/{expense_id}", json=data)

    def delete_expense(self, expense_id: int | str) -> Any:
        return self._delete(f"/expenses/{expense_id}")

    def monthly_stats(self, year: int, month: int) -> Any:
        return self._get(f"/expenses/stats/{year}/{month}")

    def category_stats(self, **params: Any) -> Any:
        return self._get("/expenses/stats/category", params=params or None)

    # ── welfare (offline fallback) ───────────────────────────────────

    def list_welfare_services(self, **params: Any) -> dict[str, Any]:
        try:
            return self._get_envelope("/welfare/services", params=params or None)
        except ApiError as exc:
            LOGGER.error("Welfare service listing failed: %s", exc)
            data = [s.to_api() for s in DEFAULT_CATALOG]
            return {"success": True, "data": data, "pagination": _paginate(data)}

    def get_welfare_service(self, service_id: str) -> dict[str, Any]:
        try:
            return self._get_envelope(f"/welfare/services/{service_id}")
        except ApiError as exc:
            LOGGER.error("Welfare service lookup failed: %s", exc)
            service = find_service(service_id)
            return {
                "success": service is not None,
                "data": service.to_api() if service else None,
            }

    def search_welfare_services(self, keyword: str, **params: Any) -> dict[str, Any]:
        try:
            return self._get_envelope(
                "/welfare/search", params={"keyword": keyword, **params}
            )
        except ApiError as exc:
            LOGGER.error("Welfare search failed: %s", exc)
            data = [s.to_api() for s in search_services(keyword)]
            return {"success": True, "data": data, "pagination": _paginate(data)}

    def peer_statistics(self, age: int, gender: str | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"age": age}
        if gender:
            params["gender"] = gender
        try:
            return self._get_envelope("/welfare/statistics", params=params)
        except ApiError as exc:
            LOGGER.error("Peer statistics lookup failed: %s", exc)
            return {"success": True, "data": peer_statistics(age, gender).to_api()}

    def sync_welfare_services(self) -> Any:
        return self._post("/welfare/sync")

    # ── chatbot ──────────────────────────────────────────────────────

    def send_chat_message(
        self, message: str, conversation_id: str | None = None
    ) -> Any:
        return self._post(
            "/chatbot/message",
            json={"message": message, "conversationId": conversation_id},
        )

    def process_voice_command(self, voice_text: str, command_type: str = "OTHER") -> Any:
        return self._post(
            "/chatbot/voice",
            json={"voiceText": voice_text, "commandType": command_type},
        )

    def conversation_history(self, conversation_id: str) -> Any:
        return self._get(f"/chatbot/conversations/{conversation_id}")

    # ── notifications ────────────────────────────────────────────────

    def list_notifications(self, **params: Any) -> Any:
        return self._get("/notifications", params=params or None)

    def mark_notification_read(self, notification_id: int | str) -> Any:
        return self._put(f"/notifications/{notification_id}/read")

    def update_notification_settings(self, settings: dict[str, Any]) -> Any:
        return self._put("/notifications/settings", json=settings)

    # ── health ───────────────────────────────────────────────────────

    def check_health(self) -> bool:
        try:
            resp = self._http.get("/health")
        except httpx.HTTPError:
            return False
        return resp.status_code == 200


def welfare_services_from(envelope: dict[str, Any]) -> list[WelfareService]:
    """Decode the ``data`` list of a welfare listing/search envelope."""
    data = envelope.get("data") or []
    if isinstance(data, dict):
        data = [data]
    return [WelfareService.from_api(raw) for raw in data if isinstance(raw, dict)]
