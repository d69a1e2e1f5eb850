"""Group payouts (read-only; creating payouts is out of scope)."""

from __future__ import annotations

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, DataWrapper, MinimalGroupUser


class PayoutRestrictions(ApiModel):
    can_use_recurring_payout: bool
    can_use_one_time_payout: bool


class RecurringPayout(ApiModel):
    user: MinimalGroupUser
    percentage: float


def payout_restrictions(jar: RequestJar, group_id: int) -> PayoutRestrictions:
    """Gets the payout restrictions for a group.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 9: You don't have permission to view this group's payouts.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/payout-restriction")
    return jar.get_json(url, PayoutRestrictions)


def recurring_payouts(jar: RequestJar, group_id: int) -> list[RecurringPayout]:
    """Gets the recurring payouts configured for a group.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 9: You don't have permission to view this group's payouts.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/payouts")
    return jar.get_json(url, DataWrapper[list[RecurringPayout]]).data
