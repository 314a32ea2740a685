"""Data models shared across the catalog index and policy expander."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class ActionModel(BaseModel):
    """Single grantable IAM permission as published in the action catalog."""

    qualified_name: str = Field(..., alias="action", description="Namespaced identifier, e.g. s3:GetObject")
    category: str = Field("", alias="type", description="Access level such as Read, Write or List")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }

    @property
    def namespace(self) -> str:
        return self.qualified_name.split(":", 1)[0]


class ServiceModel(BaseModel):
    """AWS service record and the actions it exposes."""

    display_name: str = Field(..., alias="service", description="Full service name")
    namespace: str = Field(..., alias="servicePrefix", description="Prefix used in action names, e.g. s3")
    actions: tuple[ActionModel, ...] = Field(default_factory=tuple)

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }


class PolicyStatement(BaseModel):
    """IAM policy statement; only Action and NotAction are ever rewritten."""

    sid: Optional[str] = Field(default=None, alias="Sid")
    effect: Optional[str] = Field(default=None, alias="Effect")
    principal: Any = Field(default=None, alias="Principal")
    not_principal: Any = Field(default=None, alias="NotPrincipal")
    action: Any = Field(default=None, alias="Action")
    not_action: Any = Field(default=None, alias="NotAction")
    resource: Any = Field(default=None, alias="Resource")
    not_resource: Any = Field(default=None, alias="NotResource")
    condition: Any = Field(default=None, alias="Condition")

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
    }


class PolicyDocument(BaseModel):
    """IAM policy document made of ordered statements."""

    version: str = Field(default="2012-10-17", alias="Version")
    id: Optional[str] = Field(default=None, alias="Id")
    statements: list[PolicyStatement] = Field(default_factory=list, alias="Statement")

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
    }

    @field_validator("statements", mode="before")
    @classmethod
    def _wrap_single_statement(cls, value: Any) -> Any:
        # IAM accepts a lone statement object in place of a list.
        if isinstance(value, dict):
            return [value]
        return value

    def to_json(self) -> dict[str, Any]:
        """Serialize with IAM field names; fields absent from the input stay absent."""
        return self.model_dump(by_alias=True, exclude_unset=True)


@dataclass(frozen=True, slots=True)
class ServiceCatalog:
    """Service records grouped by namespace.

    Several records may share one namespace; their actions all belong to it.
    """

    services: Mapping[str, tuple[ServiceModel, ...]] = field(default_factory=dict)

    @classmethod
    def from_services(cls, records: Iterable[ServiceModel]) -> "ServiceCatalog":
        grouped: dict[str, list[ServiceModel]] = {}
        for record in records:
            grouped.setdefault(record.namespace, []).append(record)
        return cls(services=MappingProxyType({key: tuple(value) for key, value in grouped.items()}))

    def namespaces(self) -> list[str]:
        return sorted(self.services)

    def qualified_names(self) -> Iterator[str]:
        """Yield every qualified action name, duplicates included."""
        for records in self.services.values():
            for record in records:
                for action in record.actions:
                    yield action.qualified_name

    def __contains__(self, namespace: object) -> bool:
        return namespace in self.services

    def __len__(self) -> int:
        return len(self.services)


__all__ = ["ActionModel", "ServiceModel", "PolicyStatement", "PolicyDocument", "ServiceCatalog"]
