"""Lifecycle event / response models (CloudFormation custom resource)."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


RequestType = Literal["Create", "Update", "Delete"]


class ResourceProperties(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # Required for Create/Update only; Delete must succeed without it.
    project_name: Optional[str] = Field(default=None, alias="ProjectName")
    # Changes when the changelog changes; only CloudFormation looks at it.
    trigger: Optional[str] = Field(default=None, alias="Trigger")


class LifecycleEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    request_type: RequestType = Field(..., alias="RequestType")
    logical_resource_id: str = Field(..., alias="LogicalResourceId")
    physical_resource_id: Optional[str] = Field(default=None, alias="PhysicalResourceId")
    request_id: Optional[str] = Field(default=None, alias="RequestId")
    stack_id: Optional[str] = Field(default=None, alias="StackId")
    resource_properties: ResourceProperties = Field(..., alias="ResourceProperties")


class LifecycleResponse(BaseModel):
    physical_resource_id: str
    success: bool
    data: Dict[str, Any] = Field(default_factory=dict)
    reason: Optional[str] = None

    def to_provider_dict(self) -> Dict[str, Any]:
        """Response shape expected by the custom resource provider."""
        body: Dict[str, Any] = {
            "PhysicalResourceId": self.physical_resource_id,
            "Status": "SUCCESS" if self.success else "FAILED",
            "Data": dict(self.data),
        }
        if self.reason:
            body["Reason"] = self.reason
        return body
