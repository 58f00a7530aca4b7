from fastapi import Depends, Request

from app.services.notifications import Notifier
from app.services.teacher_api import TeacherApiClient
from app.views.home import HomeView
from app.views.navigation import Navigator
from app.views.teacher_form import TeacherFormView
from app.views.teacher_list import TeacherListView


def get_api_client(request: Request) -> TeacherApiClient:
    return request.app.state.teacher_api


def get_notifier() -> Notifier:
    """One queue per request. Anything left for a later page goes through the session."""
    return Notifier()


def get_home_view(
    client: TeacherApiClient = Depends(get_api_client),
    notifier: Notifier = Depends(get_notifier),
):
    view = HomeView(client, notifier, Navigator())
    try:
        yield view
    finally:
        view.close()


def get_list_view(
    client: TeacherApiClient = Depends(get_api_client),
    notifier: Notifier = Depends(get_notifier),
):
    """List view for one request; its store subscription is released afterwards."""
    view = TeacherListView(client, notifier, Navigator())
    try:
        yield view
    finally:
        view.close()


def get_form_view(
    client: TeacherApiClient = Depends(get_api_client),
    notifier: Notifier = Depends(get_notifier),
):
    view = TeacherFormView(client, notifier, Navigator())
    try:
        yield view
    finally:
        view.close()
