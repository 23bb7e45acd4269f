"""Component metadata and install result schema.

Metadata is a read-only view built from the knowledge store during one install
call. Results replace the old "empty plan" sentinel with an explicit status so
callers can tell "nothing to do" from "everything failed".
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class FailureReason(StrEnum):
    """Why a requested component was not installed."""

    NOT_FOUND = "not_found"
    NOT_REUSABLE = "not_reusable"
    ADDRESS_MISSING = "address_missing"
    INSTALLATION_METHOD_MISSING = "installation_method_missing"
    STORE_QUERY_FAILED = "store_query_failed"
    DEPENDENCY_FAILED = "dependency_failed"
    CYCLIC_DEPENDENCY = "cyclic_dependency"
    FETCH_FAILED = "fetch_failed"
    LOAD_FAILED = "load_failed"
    INSTALL_FAILED = "install_failed"


class InstallStatus(StrEnum):
    """Overall outcome of one install request."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    NOT_IMPLEMENTED = "not_implemented"


class ComponentMetadata(BaseModel):
    """
    Installable component metadata read from the knowledge store.

    Only built for components that passed validation, so the reusable tag is
    implied and not stored.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    address: str
    installation_method: Any


class ComponentFailure(BaseModel):
    """A requested component that failed to install."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    reason: FailureReason
    message: str = ""


class InstallResult(BaseModel):
    """
    Outcome of ComponentInstaller.execute().

    plan lists installed dependency identifiers, dependencies before dependents.
    installed lists the requested identifiers that completed.
    """

    model_config = ConfigDict(frozen=True)

    status: InstallStatus
    plan: list[str] = Field(default_factory=list)
    installed: list[str] = Field(default_factory=list)
    failures: list[ComponentFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check if every requested component was installed."""
        return self.status == InstallStatus.SUCCESS

    def failure_for(self, identifier: str) -> ComponentFailure | None:
        """Get the failure recorded for a requested identifier."""
        for failure in self.failures:
            if failure.identifier == identifier:
                return failure
        return None
