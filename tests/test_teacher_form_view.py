from datetime import date

import pytest

from app.services.notifications import NotificationKind
from app.views.teacher_form import TeacherFormView

TODAY = date(2024, 6, 15)


@pytest.fixture()
def form(api, notifier, navigator):
    view = TeacherFormView(api, notifier, navigator, today=TODAY)
    yield view
    view.close()


def _messages(notifier):
    return [(n.kind, n.message) for n in notifier.drain()]


def _fill(form, name="Jane Doe", born="1990-01-01", classes="5"):
    form.update({"full_name": name, "date_of_birth": born, "number_of_classes": classes})


class TestAdd:
    async def test_starts_empty_in_add_mode(self, form, remote):
        await form.init()
        assert form.is_edit_mode is False
        assert form.values == {"full_name": "", "date_of_birth": "", "number_of_classes": ""}
        assert not form.valid
        assert remote.calls() == []

    async def test_valid_submit_creates_and_navigates(self, form, remote, notifier, navigator):
        await form.init()
        _fill(form)
        assert await form.submit() is True

        assert remote.calls() == [("POST", "/api/teachers"), ("GET", "/api/teachers")]
        assert remote.requests[0].json() == {
            "fullName": "Jane Doe",
            "dateOfBirth": "1990-01-01",
            "numberOfClasses": 5,
        }
        assert navigator.target == "/teachers"
        notes = notifier.drain()
        assert [(n.kind, n.message) for n in notes] == [
            (NotificationKind.SUCCESS, "Teacher added successfully!"),
        ]
        assert notes[0].duration_ms == 4000

    async def test_name_is_trimmed(self, form, remote):
        _fill(form, name="  Jane Doe ")
        await form.submit()
        assert remote.requests[0].json()["fullName"] == "Jane Doe"

    async def test_invalid_submit_sends_nothing(self, form, remote, notifier, navigator):
        _fill(form, name="Jane Doe2", born="2030-01-01", classes="51")
        assert await form.submit() is False
        assert remote.calls() == []
        assert navigator.target is None
        assert form.touched == {"full_name", "date_of_birth", "number_of_classes"}
        assert form.get_error_message("full_name") == "Full name can only contain letters and spaces"
        assert form.get_error_message("date_of_birth") == "Date of birth must be in the past"
        assert form.get_error_message("number_of_classes") == "Number of Classes cannot exceed 50"
        assert _messages(notifier) == [
            (NotificationKind.ERROR, "Please correct the errors in the form"),
        ]

    async def test_server_failure_stays_on_form(self, form, remote, notifier, navigator):
        remote.fail("POST", "/api/teachers")
        _fill(form)
        assert await form.submit() is False
        assert navigator.target is None
        assert form.values["full_name"] == "Jane Doe"
        assert _messages(notifier) == [(NotificationKind.ERROR, "Error creating teacher")]


class TestEdit:
    async def test_init_prefills_from_server(self, form, seeded):
        await form.init(2)
        assert form.is_edit_mode is True
        assert form.teacher_id == 2
        assert form.values == {
            "full_name": "John Doe",
            "date_of_birth": date(1982, 9, 17),
            "number_of_classes": 12,
        }
        assert form.valid
        assert seeded.calls() == [("GET", "/api/teachers/2")]

    async def test_submit_updates_and_navigates(self, form, seeded, notifier, navigator):
        await form.init(2)
        form.set_value("number_of_classes", "14")
        seeded.reset_log()

        assert await form.submit() is True
        assert seeded.calls() == [("PUT", "/api/teachers/2"), ("GET", "/api/teachers")]
        assert seeded.requests[0].json() == {
            "fullName": "John Doe",
            "dateOfBirth": "1982-09-17",
            "numberOfClasses": 14,
        }
        assert navigator.target == "/teachers"
        assert _messages(notifier) == [(NotificationKind.SUCCESS, "Teacher updated successfully!")]

    async def test_update_failure(self, form, seeded, notifier, navigator):
        await form.init(1)
        seeded.fail("PUT", "/api/teachers/1")
        assert await form.submit() is False
        assert navigator.target is None
        assert _messages(notifier) == [(NotificationKind.ERROR, "Error updating teacher")]

    async def test_missing_teacher_returns_to_list(self, form, seeded, notifier, navigator):
        await form.init(99)
        assert navigator.target == "/teachers"
        assert form.values["full_name"] == ""
        assert _messages(notifier) == [(NotificationKind.ERROR, "Error loading teacher data")]


class TestFieldState:
    async def test_errors_hidden_until_touched_or_dirty(self, form):
        assert form.has_error("full_name") is False
        form.set_value("full_name", "J")
        assert form.has_error("full_name") is True
        assert form.get_error_message("full_name") == "Full Name must be at least 2 characters"

    async def test_unknown_field_is_rejected(self, form):
        with pytest.raises(KeyError):
            form.set_value("email", "x@example.com")

    async def test_reset_clears_values_and_marks_touched(self, form):
        _fill(form)
        form.reset()
        assert form.values == {"full_name": "", "date_of_birth": "", "number_of_classes": ""}
        assert form.dirty == set()
        assert form.has_error("full_name")
        assert form.get_error_message("full_name") == "Full Name is required"

    async def test_cancel_navigates_without_calls(self, form, remote):
        _fill(form)
        form.cancel()
        assert form.navigator.target == "/teachers"
        assert remote.calls() == []

    async def test_max_date_is_today(self, form):
        assert form.max_date == TODAY
