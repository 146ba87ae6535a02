"""HTTP client for the EcoScan backend."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ecoscan.config import settings


class ApiError(RuntimeError):
    """The backend answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Retrying {retry_state.fn.__name__} after attempt {retry_state.attempt_number}: {exc}"
    )


_retry_reads = retry(
    retry=retry_if_exception_type(httpx.TransportError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    before_sleep=_log_retry,
    reraise=True,
)


class EcoScanClient:
    """Thin wrapper over every backend endpoint.

    Reads are retried on transport failures; writes are sent once. Any error
    status is raised as :class:`ApiError` carrying the server's ``error`` text.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http: Optional[httpx.Client] = None,
        prefix: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._owns_http = http is None
        self.http = http or httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.API_TIMEOUT_SECONDS,
        )
        self.prefix = settings.API_V1_STR if prefix is None else prefix

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "EcoScanClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    @staticmethod
    def _unwrap(response: httpx.Response) -> Any:
        if response.status_code >= 400:
            try:
                message = response.json().get("error") or response.text
            except ValueError:
                message = response.text
            logger.debug(f"Backend returned {response.status_code} for {response.url}: {message}")
            raise ApiError(response.status_code, message)
        return response.json()

    @_retry_reads
    def _get(self, path: str, **params: Any) -> Any:
        query = {key: value for key, value in params.items() if value is not None}
        return self._unwrap(self.http.get(self._url(path), params=query))

    def _post(self, path: str, **kwargs: Any) -> Any:
        return self._unwrap(self.http.post(self._url(path), **kwargs))

    # ------------------------------------------------------------------
    def classify(self, username: str, image: bytes, filename: str = "upload.jpg") -> Dict[str, Any]:
        return self._post(
            "/classify",
            data={"username": username},
            files={"image": (filename, image, "application/octet-stream")},
        )

    def update_user(self, username: str, points: int) -> Dict[str, Any]:
        return self._post("/user", json={"username": username, "points": points})

    def leaderboard(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._get("/leaderboard", limit=limit)

    def rank(self, username: str) -> Dict[str, Any]:
        return self._get("/leaderboard/rank", username=username)

    def submit_score(self, username: str, points: int) -> Dict[str, Any]:
        return self._post("/leaderboard", json={"username": username, "points": points})

    def guide(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._get("/guide", search=search)

    def challenges(self, username: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._get("/challenges", username=username)

    def complete_challenge(self, challenge_id: int, username: str) -> Dict[str, Any]:
        return self._post("/challenges", json={"challengeId": challenge_id, "username": username})

    def history(self, username: str) -> List[Dict[str, Any]]:
        return self._get("/history", username=username)

    def achievements(self, username: str) -> Dict[str, Any]:
        return self._get("/achievements", username=username)

    def daily(self, username: str) -> Dict[str, Any]:
        return self._get("/daily", username=username)

    def profile(self, username: str) -> Dict[str, Any]:
        return self._get("/profile", username=username)

    def feedback(self, text: str, username: Optional[str] = None) -> Dict[str, Any]:
        return self._post("/feedback", json={"feedback": text, "username": username})

    @_retry_reads
    def health(self) -> Dict[str, Any]:
        return self._unwrap(self.http.get("/healthz"))


__all__ = ["ApiError", "EcoScanClient"]
