"""
Server-rendered pages for the teacher records console.

Each route drives a view model for a single request and renders it, or turns
the view's navigation request into a redirect.
"""
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from app.api.deps import get_form_view, get_home_view, get_list_view
from app.core.logging_config import get_logger
from app.schemas.teacher import ExportFile
from app.services.notifications import flash, take_flashed
from app.views import navigation
from app.views.base import View
from app.views.home import HomeView
from app.views.teacher_form import TeacherFormView
from app.views.teacher_list import DELETE_CONFIRMATION, TeacherListView

logger = get_logger(__name__)
router = APIRouter(tags=["Pages"])

TEMPLATE_DIR = Path(__file__).resolve().parents[3] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def _render(request: Request, template: str, view: View, **context) -> HTMLResponse:
    notifications = take_flashed(request.session, request.url.path) + view.notifier.drain()
    return templates.TemplateResponse(
        request,
        template,
        {"view": view, "notifications": notifications, **context},
    )


def _redirect(request: Request, path: str, view: View) -> RedirectResponse:
    """Redirect, holding this request's notifications for the page being sent to."""
    flash(request.session, path, view.notifier.drain())
    return RedirectResponse(path, status_code=status.HTTP_303_SEE_OTHER)


def _download(export: ExportFile, view: View) -> Response:
    # A file response has nowhere to show notifications
    view.notifier.drain()
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


def _optional_int(value: str | None) -> int | None:
    """Blank or non-numeric query values leave the bound unset."""
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


# ── Landing page ────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse)
@router.get("/home", response_class=HTMLResponse)
async def home_page(request: Request, view: HomeView = Depends(get_home_view)):
    await view.load_statistics()
    return _render(request, "home.html", view)


@router.get("/home/export/{export_format}")
async def home_export(request: Request, export_format: str, view: HomeView = Depends(get_home_view)):
    if export_format == "pdf":
        export = await view.export_pdf()
    elif export_format == "excel":
        export = await view.export_excel()
    else:
        export = None
    if export is None:
        return _redirect(request, navigation.HOME, view)
    return _download(export, view)


# ── Teacher list ────────────────────────────────────────────

@router.get("/teachers", response_class=HTMLResponse)
async def teacher_list_page(
    request: Request,
    action: str | None = None,
    search: str = "",
    min_age: str | None = None,
    max_age: str | None = None,
    min_classes: str | None = None,
    max_classes: str | None = None,
    view: TeacherListView = Depends(get_list_view),
):
    view.search_term = search
    view.min_age = _optional_int(min_age)
    view.max_age = _optional_int(max_age)
    view.min_classes = _optional_int(min_classes)
    view.max_classes = _optional_int(max_classes)

    await view.load()
    if action == "search":
        await view.search()
    elif action == "filter":
        await view.apply_filters()
    elif action == "clear":
        view.clear_filters()
    return _render(request, "teachers.html", view)


@router.get("/teachers/export/{export_format}")
async def teacher_list_export(
    request: Request,
    export_format: str,
    view: TeacherListView = Depends(get_list_view),
):
    if export_format == "pdf":
        export = await view.export_pdf()
    elif export_format == "excel":
        export = await view.export_excel()
    else:
        export = None
    if export is None:
        return _redirect(request, navigation.TEACHERS, view)
    return _download(export, view)


@router.get("/teachers/{teacher_id}/delete", response_class=HTMLResponse)
async def confirm_delete_page(
    request: Request,
    teacher_id: int,
    view: TeacherListView = Depends(get_list_view),
):
    return _render(
        request,
        "delete_confirm.html",
        view,
        teacher_id=teacher_id,
        message=DELETE_CONFIRMATION,
    )


@router.post("/teachers/{teacher_id}/delete")
async def delete_teacher(
    request: Request,
    teacher_id: int,
    confirmed: str = Form(""),
    view: TeacherListView = Depends(get_list_view),
):
    await view.delete_teacher(teacher_id, confirm=lambda _message: confirmed == "yes")
    return _redirect(request, navigation.TEACHERS, view)


# ── Add / edit form ─────────────────────────────────────────

async def _form_page(request: Request, view: TeacherFormView, teacher_id: int | None):
    await view.init(teacher_id)
    if view.navigator.target:
        return _redirect(request, view.navigator.target, view)
    return _render(request, "teacher_form.html", view)


async def _form_post(
    request: Request,
    view: TeacherFormView,
    teacher_id: int | None,
    action: str,
    values: dict,
):
    view.set_mode(teacher_id)
    if action == "cancel":
        view.cancel()
    elif action == "reset":
        view.reset()
    else:
        view.update(values)
        await view.submit()

    if view.navigator.target:
        return _redirect(request, view.navigator.target, view)
    return _render(request, "teacher_form.html", view)


@router.get("/add-teacher", response_class=HTMLResponse)
async def add_teacher_page(request: Request, view: TeacherFormView = Depends(get_form_view)):
    return await _form_page(request, view, None)


@router.post("/add-teacher", response_class=HTMLResponse)
async def add_teacher_submit(
    request: Request,
    full_name: str = Form(""),
    date_of_birth: str = Form(""),
    number_of_classes: str = Form(""),
    action: str = Form("submit"),
    view: TeacherFormView = Depends(get_form_view),
):
    values = {
        "full_name": full_name,
        "date_of_birth": date_of_birth,
        "number_of_classes": number_of_classes,
    }
    return await _form_post(request, view, None, action, values)


@router.get("/edit-teacher/{teacher_id}", response_class=HTMLResponse)
async def edit_teacher_page(
    request: Request,
    teacher_id: int,
    view: TeacherFormView = Depends(get_form_view),
):
    return await _form_page(request, view, teacher_id)


@router.post("/edit-teacher/{teacher_id}", response_class=HTMLResponse)
async def edit_teacher_submit(
    request: Request,
    teacher_id: int,
    full_name: str = Form(""),
    date_of_birth: str = Form(""),
    number_of_classes: str = Form(""),
    action: str = Form("submit"),
    view: TeacherFormView = Depends(get_form_view),
):
    values = {
        "full_name": full_name,
        "date_of_birth": date_of_birth,
        "number_of_classes": number_of_classes,
    }
    return await _form_post(request, view, teacher_id, action, values)
