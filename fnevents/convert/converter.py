import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from fnevents.convert.errors import (
    ConversionError,
    MalformedInput,
    MissingField,
    UnresolvedService,
    UnresolvedType,
)
from fnevents.convert.schemas import CloudEvent, LegacyContext, LegacyEvent, LegacyResource
from fnevents.convert.tables import (
    legacy_prefix_for_source,
    legacy_type_for,
    standard_service_for_prefix,
    standard_type_for,
)
from fnevents.convert.wire import (
    EncodingMode,
    EventRequest,
    classify,
    decode_binary_headers,
    decode_body,
    trace_id_for,
)
from fnevents.shared.logging import TraceAdapter

log = logging.getLogger("fnevents.convert")

# contenttype stamped on CloudEvents built from background events
CONVERTED_CONTENT_TYPE = "application/json"


def legacy_event_from_body(body: Any) -> LegacyEvent:
    if not isinstance(body, Mapping):
        raise MalformedInput("Background event body must be a JSON object")

    data = body.get("data")
    context = body.get("context")
    if context is None:
        # Older events carry context properties at the top level:
        # the context is everything but data. The caller's body is left intact.
        context = {k: v for k, v in body.items() if k != "data"}

    try:
        return LegacyEvent(context=context, data=data)
    except ValidationError as e:
        raise MalformedInput(f"Invalid background event context: {e}")


def cloud_event_from_legacy(event: LegacyEvent) -> CloudEvent:
    """
    Background event -> CloudEvent.
    An unmapped eventType is not fatal (type stays unset); an absent one is.
    """
    context = event.context
    cloudevent = CloudEvent(
        contenttype=CONVERTED_CONTENT_TYPE,
        id=context.event_id,
        specversion="1.0",
        time=context.timestamp,
        data=event.data,
    )

    if context.event_type is None:
        raise MissingField("eventType")
    cloudevent.type = standard_type_for(context.event_type)

    resource = context.resource
    if resource is None:
        raise MissingField("resource")

    if isinstance(resource, str):
        # Raw path: the service is derived from the event type, not the resource.
        match = standard_service_for_prefix(context.event_type)
        if match is None:
            raise UnresolvedService(f"Unable to find background event service for {context.event_type!r}")
        service, _ = match
        cloudevent.source = f"//{service}/{resource}"
    else:
        cloudevent.source = f"//{resource.service}/{resource.name}"

    return cloudevent


def _resource_type_tag(data: Any) -> Optional[str]:
    if not isinstance(data, Mapping):
        return None
    if "@type" in data:
        tag = data["@type"]
    elif "kind" in data:
        tag = data["kind"]
    else:
        return None
    if isinstance(tag, str) and tag:
        return tag
    return None


def legacy_event_from_cloud_event(cloudevent: CloudEvent) -> LegacyEvent:
    context = LegacyContext(event_id=cloudevent.id, timestamp=cloudevent.time)

    if cloudevent.type is None:
        raise MissingField("type")
    event_type = legacy_type_for(cloudevent.type)
    if event_type is None:
        raise UnresolvedType(f"Unable to find background event type for {cloudevent.type!r}")
    context.event_type = event_type

    if cloudevent.source is None:
        raise MissingField("source")
    match = legacy_prefix_for_source(cloudevent.source)
    if match is None:
        raise UnresolvedService(f"Unable to find background event resource for {cloudevent.source!r}")
    _, service = match
    name = cloudevent.source.replace(f"//{service}/", "", 1)

    resource_type = _resource_type_tag(cloudevent.data)
    if resource_type is not None:
        # Prefer structured data for the resource field.
        context.resource = LegacyResource(type=resource_type, service=service, name=name)
    else:
        context.resource = name

    return LegacyEvent(context=context, data=cloudevent.data)


def _validate_cloud_event(attrs: Mapping[str, Any]) -> CloudEvent:
    try:
        return CloudEvent.model_validate(dict(attrs))
    except ValidationError as e:
        raise MalformedInput(f"Invalid CloudEvent: {e}")


def _decode_cloud_event(request: EventRequest, mode: EncodingMode) -> CloudEvent:
    if mode is EncodingMode.BINARY:
        attrs = decode_binary_headers(request)
        attrs["data"] = decode_body(request)
        return _validate_cloud_event(attrs)

    body = decode_body(request, require_json=True)
    if not isinstance(body, Mapping):
        raise MalformedInput("Structured CloudEvent body must be a JSON object")
    return _validate_cloud_event(body)


def to_cloud_event(request: EventRequest) -> Optional[CloudEvent]:
    """
    Returns the request as a CloudEvent, or None when it cannot be converted.
    CloudEvents (binary or structured) are decoded as-is; background events
    go through the type/service tables.
    """
    tlog = TraceAdapter(log, {"trace_id": trace_id_for(request)})
    mode = classify(request)
    try:
        if mode is not EncodingMode.LEGACY:
            return _decode_cloud_event(request, mode)

        tlog.info("Converting from background event to CloudEvent")
        legacy = legacy_event_from_body(decode_body(request, require_json=True))
        return cloud_event_from_legacy(legacy)
    except ConversionError as e:
        tlog.error("Unable to convert %s request to CloudEvent: %s", mode.value, e)
        return None


def to_legacy_event(request: EventRequest) -> Optional[LegacyEvent]:
    """
    Returns the request as a background event, or None when it cannot be converted.
    """
    tlog = TraceAdapter(log, {"trace_id": trace_id_for(request)})
    mode = classify(request)
    try:
        if mode is EncodingMode.LEGACY:
            return legacy_event_from_body(decode_body(request, require_json=True))

        tlog.info("Converting from CloudEvent to background event")
        cloudevent = _decode_cloud_event(request, mode)
        return legacy_event_from_cloud_event(cloudevent)
    except ConversionError as e:
        tlog.error("Unable to convert %s request to background event: %s", mode.value, e)
        return None
