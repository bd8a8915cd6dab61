"""Authorization policies: composable guards over an access context.

Each policy is a small object whose check() either returns or raises.
They know nothing about HTTP: an AccessContext is just the resolved
identity plus the company / user ids named by the request, so policies
can be unit-tested directly.

Ordering rule (tie-break): unauthenticated > wrong company > wrong role.
A caller from another company always gets 401, never 403 or 404, so the
existence of another tenant's resources is never revealed.

Usage in a router:

    @router.get("/companies/{company_id}/users")
    async def list_users(identity: Identity = Depends(guard(*SAME_COMPANY))):
        ...
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from assetdesk.auth.dependencies import Identity, resolve_identity
from assetdesk.errors import NOT_ALLOWED, ForbiddenError, UnauthorizedError
from assetdesk.ids import parse_id


@dataclass(frozen=True)
class AccessContext:
    identity: Optional[Identity]
    company_id: Optional[int] = None  # from the path; None if absent or malformed
    user_id: Optional[int] = None

    @classmethod
    def from_path(cls, identity: Optional[Identity], path_params: dict) -> "AccessContext":
        return cls(
            identity=identity,
            company_id=parse_id(path_params.get("company_id")),
            user_id=parse_id(path_params.get("user_id")),
        )


class Policy:
    """A single guard. Subclasses raise from check() to deny."""

    def check(self, ctx: AccessContext) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return type(self).__name__


class RequireAuthenticated(Policy):
    def check(self, ctx: AccessContext) -> None:
        if ctx.identity is None:
            raise UnauthorizedError()


class RequireSameCompany(Policy):
    def check(self, ctx: AccessContext) -> None:
        if ctx.identity is None:
            raise UnauthorizedError()
        if ctx.company_id is None or ctx.identity.company_id != ctx.company_id:
            raise UnauthorizedError()


class RequireCompanyAdmin(RequireSameCompany):
    def check(self, ctx: AccessContext) -> None:
        super().check(ctx)
        if not ctx.identity.is_admin:
            raise ForbiddenError(NOT_ALLOWED)


class RequireSelfOrAdmin(RequireSameCompany):
    def check(self, ctx: AccessContext) -> None:
        super().check(ctx)
        is_self = ctx.user_id is not None and ctx.identity.user_id == ctx.user_id
        if not (is_self or ctx.identity.is_admin):
            raise ForbiddenError(NOT_ALLOWED)


def authorize(ctx: AccessContext, *policies: Policy) -> None:
    """Run policies in declared order; the first failure wins."""
    for policy in policies:
        policy.check(ctx)


def guard(*policies: Policy):
    """Build a FastAPI dependency that enforces policies and yields the identity."""

    async def dependency(
        request: Request,
        identity: Optional[Identity] = Depends(resolve_identity),
    ) -> Identity:
        ctx = AccessContext.from_path(identity, request.path_params)
        authorize(ctx, *policies)
        return identity

    dependency.__name__ = "guard_" + "_".join(repr(p) for p in policies)
    return dependency


# Prebuilt chains. Every chain starts with RequireAuthenticated.
LOGGED_IN = (RequireAuthenticated(),)
SAME_COMPANY = (RequireAuthenticated(), RequireSameCompany())
COMPANY_ADMIN = (RequireAuthenticated(), RequireCompanyAdmin())
SELF_OR_ADMIN = (RequireAuthenticated(), RequireSelfOrAdmin())
