import pytest

from src.core.context import Actor
from src.database.models import Feedback, User
from src.modules.feedback import permissions


def make_user(user_id: int, admin: bool = False) -> User:
    return User(id=user_id, username=f"user{user_id}", admin=admin)


AUTHOR = make_user(1)
RECIPIENT = make_user(2)
STRANGER = make_user(3)
ADMIN = make_user(4, admin=True)


def make_feedback(disputed: bool = False, was_disputed: bool = False) -> Feedback:
    return Feedback(
        id=10,
        author_id=AUTHOR.id,
        recipient_id=RECIPIENT.id,
        rating=2,
        ticket_number="DL-1",
        disputed=disputed,
        was_disputed=was_disputed,
    )


@pytest.mark.parametrize(
    "user, disputed, was_disputed, expected",
    [
        (RECIPIENT, False, False, True),
        (RECIPIENT, True, False, False),
        (RECIPIENT, False, True, False),
        (AUTHOR, False, False, False),
        (STRANGER, False, False, False),
        (ADMIN, False, False, False),
        (None, False, False, False),
    ],
)
def test_can_dispute(user, disputed, was_disputed, expected):
    feedback = make_feedback(disputed=disputed, was_disputed=was_disputed)
    assert permissions.can_dispute(Actor(user), feedback) is expected


@pytest.mark.parametrize(
    "user, expected",
    [
        (AUTHOR, True),
        (ADMIN, True),
        (RECIPIENT, False),
        (STRANGER, False),
        (None, False),
    ],
)
def test_can_edit_and_delete(user, expected):
    feedback = make_feedback()
    actor = Actor(user)
    assert permissions.can_edit(actor, feedback) is expected
    assert permissions.can_delete(actor, feedback) is expected


def test_can_leave_feedback():
    assert permissions.can_leave_feedback(Actor(AUTHOR), RECIPIENT) is True
    assert permissions.can_leave_feedback(Actor(AUTHOR), AUTHOR) is False
    assert permissions.can_leave_feedback(Actor(AUTHOR), ADMIN) is False
    assert permissions.can_leave_feedback(Actor.anonymous(), RECIPIENT) is False


def test_can_resolve_requires_admin():
    assert permissions.can_resolve(Actor(ADMIN)) is True
    assert permissions.can_resolve(Actor(AUTHOR)) is False
    assert permissions.can_resolve(Actor.anonymous()) is False


def test_anonymous_actor():
    actor = Actor.anonymous()
    assert actor.is_authenticated is False
    assert actor.id is None
    assert actor.is_admin is False
