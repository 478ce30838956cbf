import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from fastapi.datastructures import Headers

from fnevents.convert.errors import MalformedInput
from fnevents.convert.schemas import CloudEvent
from fnevents.shared.config import settings

BINARY_HEADER_PREFIX = "ce-"
REQUIRED_BINARY_HEADERS = ("ce-id", "ce-source", "ce-type", "ce-specversion")
STRUCTURED_CONTENT_TYPE = "application/cloudevents+json"
JSON_CONTENT_TYPE = "application/json"


class EncodingMode(str, Enum):
    BINARY = "binary"
    STRUCTURED = "structured"
    LEGACY = "legacy"


@dataclass(frozen=True)
class EventRequest:
    """
    An inbound delivery, already read off the wire by the caller.
    body may be a parsed JSON value or the raw bytes/str payload.
    """
    headers: Headers
    body: Any = None

    @classmethod
    def of(cls, headers: Optional[Mapping[str, str]] = None, body: Any = None) -> "EventRequest":
        return cls(headers=Headers(headers=dict(headers or {})), body=body)


def is_binary_encoded(request: EventRequest) -> bool:
    return all(request.headers.get(name) for name in REQUIRED_BINARY_HEADERS)


def is_structured_encoded(request: EventRequest) -> bool:
    return STRUCTURED_CONTENT_TYPE in request.headers.get("content-type", "")


def classify(request: EventRequest) -> EncodingMode:
    if is_binary_encoded(request):
        return EncodingMode.BINARY
    if is_structured_encoded(request):
        return EncodingMode.STRUCTURED
    return EncodingMode.LEGACY


def decode_binary_headers(request: EventRequest) -> Dict[str, str]:
    # Headers keys are already lower-cased.
    return {
        name[len(BINARY_HEADER_PREFIX):]: value
        for name, value in request.headers.items()
        if name.startswith(BINARY_HEADER_PREFIX) and name != BINARY_HEADER_PREFIX + "data"
    }


def decode_body(request: EventRequest, require_json: bool = False) -> Any:
    """
    Raw payloads are JSON-decoded when the caller needs an object (structured
    and legacy bodies) or when the content-type says JSON. Parsed bodies pass through.
    """
    body = request.body
    if not isinstance(body, (bytes, bytearray, str)):
        return body
    if not require_json and "json" not in request.headers.get("content-type", ""):
        return body
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError as e:
        raise MalformedInput(f"Body is not valid JSON: {e}")


def trace_id_for(request: EventRequest) -> str:
    # X-Cloud-Trace-Context: TRACE_ID/SPAN_ID;o=1
    value = request.headers.get(settings.trace_header)
    if not value:
        return "-"
    return value.split("/", 1)[0]


def encode_binary(event: CloudEvent) -> Tuple[Dict[str, str], Any]:
    attrs = event.to_wire()
    data = attrs.pop("data", None)
    headers = {f"{BINARY_HEADER_PREFIX}{name}": str(value) for name, value in attrs.items()}
    if data is not None and not isinstance(data, (bytes, bytearray, str)):
        headers["content-type"] = JSON_CONTENT_TYPE
        data = json.dumps(data, ensure_ascii=False)
    return headers, data


def encode_structured(event: CloudEvent) -> Tuple[Dict[str, str], str]:
    body = json.dumps(event.to_wire(), ensure_ascii=False, default=str)
    return {"content-type": STRUCTURED_CONTENT_TYPE}, body
