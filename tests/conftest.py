import json
import os
from datetime import date

os.environ.setdefault("LOG_TO_FILE", "false")

import httpx
import pytest
from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.testclient import TestClient

REMOTE_URL = "http://remote.test/api/teachers"


def _age(born: date, today: date) -> int:
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


class RecordedRequest:
    def __init__(self, method: str, path: str, query: dict, body: bytes):
        self.method = method
        self.path = path
        self.query = query
        self.body = body

    def json(self):
        return json.loads(self.body) if self.body else None

    def __repr__(self):
        return f"<{self.method} {self.path}>"


class FakeTeachersService:
    """In-process stand-in for the remote teachers API."""

    def __init__(self):
        self.teachers: dict[int, dict] = {}
        self.next_id = 1
        self.requests: list[RecordedRequest] = []
        self.failing: set[str] = set()  # "METHOD /path" entries answered with 500
        self.app = self._build_app()

    # ── Helpers for tests ───────────────────────────────────────

    def add(self, full_name: str, date_of_birth: str, number_of_classes: int) -> dict:
        teacher = {
            "id": self.next_id,
            "fullName": full_name,
            "dateOfBirth": date_of_birth,
            "numberOfClasses": number_of_classes,
        }
        self.teachers[self.next_id] = teacher
        self.next_id += 1
        return teacher

    def fail(self, method: str, path: str) -> None:
        self.failing.add(f"{method} {path}")

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.path) for r in self.requests]

    def reset_log(self) -> None:
        self.requests.clear()

    def _out(self, teacher: dict) -> dict:
        born = date.fromisoformat(teacher["dateOfBirth"])
        return {**teacher, "age": _age(born, date.today())}

    def _all(self) -> list[dict]:
        return [self._out(t) for t in self.teachers.values()]

    # ── Fake API ────────────────────────────────────────────────

    def _build_app(self) -> FastAPI:
        service = self

        async def record(request: Request):
            body = await request.body()
            service.requests.append(RecordedRequest(
                request.method, request.url.path, dict(request.query_params), body,
            ))
            if f"{request.method} {request.url.path}" in service.failing:
                raise HTTPException(status_code=500, detail="Injected failure")

        router = APIRouter(prefix="/api/teachers", dependencies=[Depends(record)])

        @router.get("")
        def list_teachers():
            return service._all()

        @router.get("/search")
        def search(query: str):
            term = query.lower()
            return [t for t in service._all() if term in t["fullName"].lower()]

        @router.post("/filter")
        def filter_teachers(criteria: dict = Body(...)):
            matches = service._all()
            term = criteria.get("searchTerm")
            if term:
                matches = [t for t in matches if term.lower() in t["fullName"].lower()]
            if criteria.get("minAge") is not None:
                matches = [t for t in matches if t["age"] >= criteria["minAge"]]
            if criteria.get("maxAge") is not None:
                matches = [t for t in matches if t["age"] <= criteria["maxAge"]]
            if criteria.get("minClasses") is not None:
                matches = [t for t in matches if t["numberOfClasses"] >= criteria["minClasses"]]
            if criteria.get("maxClasses") is not None:
                matches = [t for t in matches if t["numberOfClasses"] <= criteria["maxClasses"]]
            return matches

        @router.get("/filter/age")
        def by_age(minAge: int, maxAge: int):
            return [t for t in service._all() if minAge <= t["age"] <= maxAge]

        @router.get("/filter/classes")
        def by_classes(minClasses: int, maxClasses: int):
            return [t for t in service._all() if minClasses <= t["numberOfClasses"] <= maxClasses]

        @router.get("/statistics")
        def statistics():
            teachers = service._all()
            average = sum(t["numberOfClasses"] for t in teachers) / len(teachers) if teachers else 0.0
            return {"totalTeachers": len(teachers), "averageClasses": round(average, 2)}

        @router.get("/export/pdf")
        def export_pdf():
            return Response(
                content=b"%PDF-1.4 fake",
                media_type="application/pdf",
                headers={"Content-Disposition": 'attachment; filename="teachers.pdf"'},
            )

        @router.get("/export/excel")
        def export_excel():
            return Response(
                content=b"PK fake-xlsx",
                media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )

        @router.get("/{teacher_id}")
        def get_teacher(teacher_id: int):
            if teacher_id not in service.teachers:
                raise HTTPException(status_code=404)
            return service._out(service.teachers[teacher_id])

        @router.post("", status_code=201)
        def create(body: dict = Body(...)):
            teacher = service.add(body["fullName"], body["dateOfBirth"], body["numberOfClasses"])
            return service._out(teacher)

        @router.put("/{teacher_id}")
        def update(teacher_id: int, body: dict = Body(...)):
            if teacher_id not in service.teachers:
                raise HTTPException(status_code=404)
            service.teachers[teacher_id].update({
                "fullName": body["fullName"],
                "dateOfBirth": body["dateOfBirth"],
                "numberOfClasses": body["numberOfClasses"],
            })
            return service._out(service.teachers[teacher_id])

        @router.delete("/{teacher_id}", status_code=204)
        def delete(teacher_id: int):
            if service.teachers.pop(teacher_id, None) is None:
                raise HTTPException(status_code=404)
            return Response(status_code=204)

        health = APIRouter(prefix="/api/test", dependencies=[Depends(record)])

        @health.get("", response_class=PlainTextResponse)
        def test_endpoint():
            return "Backend is working!"

        app = FastAPI()
        app.include_router(router)
        app.include_router(health)
        return app


@pytest.fixture()
def remote():
    return FakeTeachersService()


@pytest.fixture()
def seeded(remote):
    """Three teachers, two of them named Doe."""
    remote.add("Jane Doe", "1990-01-01", 5)
    remote.add("John Doe", "1982-09-17", 12)
    remote.add("Sarah Chen", "1985-03-14", 6)
    return remote


def make_client(remote):
    from app.services.teacher_api import TeacherApiClient
    return TeacherApiClient(base_url=REMOTE_URL, transport=httpx.ASGITransport(app=remote.app))


@pytest.fixture()
async def api(remote):
    client = make_client(remote)
    yield client
    await client.aclose()


@pytest.fixture()
def notifier():
    from app.services.notifications import Notifier
    return Notifier()


@pytest.fixture()
def navigator():
    from app.views.navigation import Navigator
    return Navigator()


@pytest.fixture()
def client(remote):
    """TestClient for the console with the remote API swapped for the fake."""
    import main
    from app.api.deps import get_api_client

    api_client = make_client(remote)
    main.app.dependency_overrides[get_api_client] = lambda: api_client
    try:
        with TestClient(main.app, follow_redirects=False) as test_client:
            yield test_client
    finally:
        main.app.dependency_overrides.clear()


@pytest.fixture()
def other_client(client):
    """A second browser on the same console, with its own cookies."""
    import main

    with TestClient(main.app, follow_redirects=False) as test_client:
        yield test_client
