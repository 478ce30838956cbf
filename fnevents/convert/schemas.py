from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional, Union


class _Envelope(BaseModel):
    # Unknown attributes (CloudEvent extensions, extra legacy context keys) pass through.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LegacyResource(_Envelope):
    type: Optional[str] = Field(default=None, description="e.g. storage#object")
    service: str = Field(..., description="e.g. storage.googleapis.com")
    name: str


class LegacyContext(_Envelope):
    event_id: Optional[str] = Field(default=None, alias="eventId")
    timestamp: Optional[str] = None
    event_type: Optional[str] = Field(default=None, alias="eventType")
    resource: Optional[Union[str, LegacyResource]] = Field(
        default=None, description="raw path or structured {service, name}"
    )


class LegacyEvent(_Envelope):
    context: LegacyContext
    data: Any = None


class CloudEvent(_Envelope):
    id: Optional[str] = None
    specversion: str = "1.0"
    time: Optional[str] = None
    type: Optional[str] = None
    source: Optional[str] = Field(default=None, description="//{service}/{name}")
    contenttype: Optional[str] = None
    data: Any = None
