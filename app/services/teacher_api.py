"""
Client for the remote teachers service.

The only boundary between the views and the server. Every operation maps to
one remote call and returns a ``Result``; nothing here raises for transport,
HTTP or decoding failures. Successful create/update/delete calls re-fetch the
full list into the store.
"""
import time
from typing import Any, Callable

import httpx
from pydantic import TypeAdapter

from app.core.config import settings
from app.core.logging_config import RequestLogger, get_logger
from app.schemas.teacher import (
    ExportFile,
    FilterCriteria,
    Teacher,
    TeacherCreate,
    TeacherStatistics,
)
from app.services.result import Err, Ok, Result
from app.services.teacher_store import TeacherStore

logger = get_logger(__name__)
request_logger = RequestLogger(get_logger("teachers.api"))

PDF_MEDIA_TYPE = "application/pdf"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
HEALTH_PATH = "/api/test"

_teacher_list = TypeAdapter(list[Teacher])


class TeacherApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = (base_url or settings.teachers_api_url).rstrip("/")
        self.store = TeacherStore()
        self._http = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "TeacherApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Plumbing ────────────────────────────────────────────────

    async def _request(self, method: str, path: str = "", **kwargs) -> Result:
        return await self._send(method, f"{self.api_url}{path}", **kwargs)

    async def _send(self, method: str, url: str, **kwargs) -> Result:
        start_time = time.time()
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            duration_ms = (time.time() - start_time) * 1000
            request_logger.log_request(method, url, 0, duration_ms)
            return Err(f"{method} {url} failed: {e.__class__.__name__}: {e}")

        duration_ms = (time.time() - start_time) * 1000
        request_logger.log_request(method, url, response.status_code, duration_ms)
        if response.is_error:
            return Err(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        return Ok(response)

    async def _fetch(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], Any],
        **kwargs,
    ) -> Result:
        result = await self._request(method, path, **kwargs)
        if not result.ok:
            return result
        response = result.value
        try:
            return Ok(parse(response.json()))
        except ValueError as e:
            # Covers both malformed JSON and pydantic validation errors
            logger.error(f"Unexpected response body from {method} {path or '/'}: {e}")
            return Err(f"Malformed response from {method} {path or '/'}", response.status_code)

    async def _export(self, path: str, filename: str, media_type: str) -> Result:
        result = await self._request("GET", path)
        if not result.ok:
            return result
        response = result.value
        return Ok(ExportFile(
            filename=filename,
            media_type=response.headers.get("content-type", media_type),
            content=response.content,
        ))

    # ── Cached list ─────────────────────────────────────────────

    async def load_teachers(self) -> Result:
        """Refresh the cached list, toggling the loading flag around the call."""
        self.store.set_loading(True)
        result = await self.get_all_teachers()
        if result.ok:
            self.store.set_teachers(result.value)
        else:
            logger.error(f"Error loading teachers: {result.reason}")
        self.store.set_loading(False)
        return result

    # ── Remote operations ───────────────────────────────────────

    async def get_all_teachers(self) -> Result:
        return await self._fetch("GET", "", _teacher_list.validate_python)

    async def get_teacher(self, teacher_id: int) -> Result:
        return await self._fetch("GET", f"/{teacher_id}", Teacher.model_validate)

    async def create_teacher(self, teacher: TeacherCreate) -> Result:
        result = await self._fetch("POST", "", Teacher.model_validate, json=teacher.to_payload())
        if result.ok:
            logger.info(f"Created teacher id={result.value.id}")
            await self.load_teachers()
        return result

    async def update_teacher(self, teacher_id: int, teacher: TeacherCreate) -> Result:
        result = await self._fetch(
            "PUT", f"/{teacher_id}", Teacher.model_validate, json=teacher.to_payload()
        )
        if result.ok:
            logger.info(f"Updated teacher id={teacher_id}")
            await self.load_teachers()
        return result

    async def delete_teacher(self, teacher_id: int) -> Result:
        result = await self._request("DELETE", f"/{teacher_id}")
        if not result.ok:
            return result
        logger.info(f"Deleted teacher id={teacher_id}")
        await self.load_teachers()
        return Ok(None)

    async def search_teachers(self, query: str) -> Result:
        return await self._fetch(
            "GET", "/search", _teacher_list.validate_python, params={"query": query}
        )

    async def filter_teachers(self, criteria: FilterCriteria) -> Result:
        return await self._fetch(
            "POST", "/filter", _teacher_list.validate_python, json=criteria.to_payload()
        )

    async def get_teachers_by_age(self, min_age: int, max_age: int) -> Result:
        return await self._fetch(
            "GET",
            "/filter/age",
            _teacher_list.validate_python,
            params={"minAge": str(min_age), "maxAge": str(max_age)},
        )

    async def get_teachers_by_classes(self, min_classes: int, max_classes: int) -> Result:
        return await self._fetch(
            "GET",
            "/filter/classes",
            _teacher_list.validate_python,
            params={"minClasses": str(min_classes), "maxClasses": str(max_classes)},
        )

    async def get_statistics(self) -> Result:
        return await self._fetch("GET", "/statistics", TeacherStatistics.model_validate)

    async def export_pdf(self) -> Result:
        return await self._export("/export/pdf", "teachers.pdf", PDF_MEDIA_TYPE)

    async def export_excel(self) -> Result:
        return await self._export("/export/excel", "teachers.xlsx", EXCEL_MEDIA_TYPE)

    async def ping(self) -> Result:
        """Probe the service's plain-text test endpoint, which sits at the service root."""
        result = await self._send("GET", str(httpx.URL(self.api_url).join(HEALTH_PATH)))
        if not result.ok:
            return result
        return Ok(result.value.text)
