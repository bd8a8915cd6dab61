"""assetdesk: multi-tenant asset management backend.

Companies register, admins manage their users, and members track assets,
asset groups, vendors and statuses. Every row belongs to one company.
"""

__version__ = "0.1.0"
