"""Authorization predicates for feedback operations.

Each predicate is a pure function of the acting identity and the target, so
the same rules drive both request authorization and the ``can_*`` flags in
serialized payloads.
"""

from src.core.context import Actor
from src.database.models import Feedback, User


def can_leave_feedback(actor: Actor, recipient: User) -> bool:
    if not actor.is_authenticated:
        return False
    if actor.id == recipient.id:
        return False
    if recipient.admin:
        return False
    return True


def can_edit(actor: Actor, feedback: Feedback) -> bool:
    if actor.is_admin:
        return True
    if not actor.is_authenticated:
        return False
    return feedback.author_id == actor.id


def can_delete(actor: Actor, feedback: Feedback) -> bool:
    if actor.is_admin:
        return True
    if not actor.is_authenticated:
        return False
    return feedback.author_id == actor.id


def can_dispute(actor: Actor, feedback: Feedback) -> bool:
    if not actor.is_authenticated:
        return False
    if feedback.disputed:
        return False
    if feedback.was_disputed:
        return False
    return feedback.recipient_id == actor.id


def can_resolve(actor: Actor) -> bool:
    return actor.is_admin
