"""Client-visible routes and the navigator views use to move between them."""

HOME = "/home"
TEACHERS = "/teachers"
ADD_TEACHER = "/add-teacher"


def edit_teacher(teacher_id: int) -> str:
    return f"/edit-teacher/{teacher_id}"


class Navigator:
    """Records where a view asked to go. The page layer turns it into a redirect."""

    def __init__(self):
        self.target: str | None = None

    def navigate(self, path: str) -> None:
        self.target = path
