"""Pydantic models for the webhook envelope."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from access.application.services import PullUpdateResult
from access.domain.status import Outcome
from access.domain.value_objects import Event, Resource


class ResourceModel(BaseModel):
    """Wire representation of a resource (also used for event actors).

    Senders may null out any field; nulls are read as absent.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    id: str | None = Field(default=None, description="Directory-native identifier")
    kind: str | None = Field(default=None, description="Resource kind tag")
    display_name: str | None = Field(
        default=None, alias="displayName", description="Human readable name"
    )
    labels: dict[str, str | None] | None = Field(
        default=None, description="Provider specific attributes"
    )

    def to_domain(self) -> Resource:
        """Convert to the domain Resource value object.

        Null labels are dropped so lookups treat them as missing.
        """
        return Resource(
            id=self.id or "",
            kind=self.kind or "",
            display_name=self.display_name or "",
            labels={k: v for k, v in (self.labels or {}).items() if v is not None},
        )

    @classmethod
    def from_domain(cls, resource: Resource) -> ResourceModel:
        """Convert a domain Resource to its wire model."""
        return cls(
            id=resource.id,
            kind=resource.kind,
            display_name=resource.display_name,
            labels={str(k): v for k, v in resource.labels.items()},
        )


class EventModel(BaseModel):
    """Wire representation of an access event."""

    model_config = ConfigDict(extra="ignore")

    event: str = Field(..., description="Dotted action name, e.g. access/grant")
    actor: ResourceModel | None = Field(default=None, description="Event actor")
    resources: list[ResourceModel] | None = Field(
        default=None, description="Resources the event refers to"
    )

    def to_domain(self) -> Event:
        """Convert to the domain Event value object."""
        return Event(
            event=self.event,
            actor=self.actor.to_domain() if self.actor else None,
            resources=tuple(r.to_domain() for r in self.resources or ()),
        )


class WebhookRequest(BaseModel):
    """Inbound webhook envelope.

    Exactly one of ``kinds`` (pull-update) or ``events`` (apply-update) is
    expected; ``kinds`` wins when both are present.
    """

    model_config = ConfigDict(extra="ignore")

    kinds: list[str] | None = Field(default=None, description="Kinds to enumerate")
    events: list[EventModel] | None = Field(default=None, description="Events to apply")


class PullUpdateResponse(BaseModel):
    """Response to a pull-update request."""

    resources: list[ResourceModel] | None = None

    @classmethod
    def from_domain(cls, result: PullUpdateResult) -> PullUpdateResponse:
        """Convert an enumeration result to its wire model."""
        if result.resources is None:
            return cls()
        return cls(resources=[ResourceModel.from_domain(r) for r in result.resources])


class StatusDetailsModel(BaseModel):
    """Failure details of a status."""

    model_config = ConfigDict(populate_by_name=True)

    error_data: str = Field(..., alias="errorData")


class StatusModel(BaseModel):
    """Wire representation of an Outcome."""

    code: int | None = None
    details: StatusDetailsModel | None = None

    @classmethod
    def from_domain(cls, outcome: Outcome) -> StatusModel:
        """Convert an Outcome to its wire model."""
        if outcome.is_success:
            return cls()
        return cls(
            code=int(outcome.code),
            details=StatusDetailsModel(error_data=outcome.error_data or ""),
        )


class ApplyUpdateResponse(BaseModel):
    """Response to an apply-update request."""

    status: StatusModel = Field(default_factory=StatusModel)

    @classmethod
    def from_domain(cls, outcome: Outcome) -> ApplyUpdateResponse:
        """Wrap an Outcome in the response envelope."""
        return cls(status=StatusModel.from_domain(outcome))
