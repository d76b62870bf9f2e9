"""Turn bulk-edit form values into a sparse change set.

Blank form controls mean "no change" and are dropped. Picking a
"Decommissioned - ..." status without a date fills in today's date.
"""
from datetime import date

from app.core.exceptions import ValidationError
from app.models.asset import is_decommissioned


def suggest_decommission_date(status: str | None, current: str = "", today: date | None = None) -> str:
    """Date to show in the form after the status control changes."""
    if is_decommissioned(status):
        return (today or date.today()).isoformat()
    return current


def build_change_set(
    *,
    status: str = "",
    condition: str = "",
    category_id: str = "",
    location_id: str = "",
    decommission_date: str = "",
    comments: str = "",
    today: date | None = None,
) -> dict[str, str]:
    """Return the ``fields`` payload for ``POST /assets/bulk-update`` (camelCase keys)."""
    if is_decommissioned(status) and not decommission_date:
        decommission_date = (today or date.today()).isoformat()

    fields: dict[str, str] = {}
    if status:
        fields["status"] = status
    if condition:
        fields["condition"] = condition
    if category_id:
        fields["categoryId"] = category_id
    if location_id:
        fields["locationId"] = location_id
    if decommission_date:
        fields["decommissionDate"] = decommission_date
    if comments.strip():
        fields["comments"] = comments

    if not fields:
        raise ValidationError("Please fill in at least one field")
    return fields
