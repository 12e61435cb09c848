"""Authorization capabilities.

Signature and identity verification belong to the host. What reaches
this package is a capability that answers one question: may the current
caller act for *principal*?
"""

from __future__ import annotations

from typing import Protocol

from leasectl.domain.agreement import Principal


class Authorizer(Protocol):
    def authorize(self, principal: Principal) -> bool:
        """Return True if the verified caller may act for *principal*."""
        ...


class HostAuthorizer:
    """Trusts the host runtime to have checked every signature already."""

    def authorize(self, principal: Principal) -> bool:
        return True


class CallerAuthorizer:
    """Authorizes exactly one verified caller."""

    def __init__(self, caller: Principal) -> None:
        self._caller = caller

    @property
    def caller(self) -> Principal:
        return self._caller

    def authorize(self, principal: Principal) -> bool:
        return principal == self._caller
