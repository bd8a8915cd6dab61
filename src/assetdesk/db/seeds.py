"""Rows seeded into every newly registered company.

Registration, asset-group rules and tests all refer to these names,
so they live in one place.
"""

# Fallback group: cannot be renamed or deleted, and receives the assets
# of any group that is deleted.
MISCELLANEOUS_ASSET_GROUP = "miscellaneous"

DEFAULT_STATUSES = (
    "Disposed",
    "Expired",
    "In Repair",
    "In Store",
    "In Use",
)
