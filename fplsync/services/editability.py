"""Whether a team may be edited right now.

``can_edit`` is the single yes/no decision: admin bypass, otherwise
approved payment and a deadline that has not passed. The reason helpers
below re-test the two predicates in order (payment first, then deadline)
for user-facing messages; they never change the decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from fplsync.api.models import Gameweek, PaymentProof, PaymentStatus, Team
from fplsync.services.deadline import as_utc


class EditBlockReason(str, Enum):
    TEAM_LOCKED = "team_locked"
    GAMEWEEK_COMPLETED = "gameweek_completed"
    PAYMENT_NOT_APPROVED = "payment_not_approved"
    DEADLINE_PASSED = "deadline_passed"


MESSAGES: dict[EditBlockReason | None, str] = {
    None: "Team modifications allowed",
    EditBlockReason.TEAM_LOCKED: "Cannot update locked team",
    EditBlockReason.GAMEWEEK_COMPLETED: "Gameweek is completed - team modifications disabled",
    EditBlockReason.PAYMENT_NOT_APPROVED: "Payment for this team has not been approved",
    EditBlockReason.DEADLINE_PASSED: "Deadline has passed - team modifications disabled until gameweek ends",
}


def payment_blocks(payment_status: PaymentStatus | str | None) -> bool:
    return payment_status != PaymentStatus.APPROVED


def deadline_blocks(now: datetime, deadline: datetime) -> bool:
    return as_utc(now) > as_utc(deadline)


def can_edit(
    now: datetime,
    deadline: datetime,
    payment_status: PaymentStatus | str | None,
    is_admin: bool,
) -> bool:
    if is_admin:
        return True
    return not payment_blocks(payment_status) and not deadline_blocks(now, deadline)


def edit_block_reason(
    now: datetime,
    deadline: datetime,
    payment_status: PaymentStatus | str | None,
    is_admin: bool,
) -> EditBlockReason | None:
    if can_edit(now, deadline, payment_status, is_admin):
        return None
    if payment_blocks(payment_status):
        return EditBlockReason.PAYMENT_NOT_APPROVED
    return EditBlockReason.DEADLINE_PASSED


@dataclass(frozen=True)
class EditDecision:
    allowed: bool
    reason: EditBlockReason | None = None

    @property
    def message(self) -> str:
        return MESSAGES[self.reason]


def evaluate_team_edit(
    team: Team,
    gameweek: Gameweek,
    payment: PaymentProof | None,
    is_admin: bool = False,
    now: datetime | None = None,
) -> EditDecision:
    """Compose lock state, gameweek completion and ``can_edit``.

    A locked team stays blocked even for admins.
    """
    if team.is_locked:
        return EditDecision(False, EditBlockReason.TEAM_LOCKED)
    if gameweek.is_completed and not is_admin:
        return EditDecision(False, EditBlockReason.GAMEWEEK_COMPLETED)

    now = now or datetime.now(timezone.utc)
    status = payment.status if payment is not None else None
    reason = edit_block_reason(now, gameweek.deadline, status, is_admin)
    return EditDecision(reason is None, reason)
