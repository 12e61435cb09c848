"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``leasectl.toml`` only holds overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LedgerConfig(BaseModel):
    """[ledger] section."""

    model_config = {"frozen": True}

    db_name: str = "ledger.db"


class EventsConfig(BaseModel):
    """[events] section."""

    model_config = {"frozen": True}

    max_retries: int = Field(default=3, ge=1)
    max_workers: int = Field(default=2, ge=1)
    audit_log: bool = True


class AuthConfig(BaseModel):
    """[auth] section.

    ``caller`` is the principal already verified by the host. When unset,
    the host is trusted to have checked every signature.
    """

    model_config = {"frozen": True}

    caller: str | None = None


class ListingConfig(BaseModel):
    """[listing] section."""

    model_config = {"frozen": True}

    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=100, ge=1)
