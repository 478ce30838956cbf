# tests/test_wire.py
import pytest

from fnevents.convert.errors import MalformedInput
from fnevents.convert.schemas import CloudEvent
from fnevents.convert.wire import (
    EncodingMode,
    EventRequest,
    classify,
    decode_binary_headers,
    decode_body,
    encode_binary,
    encode_structured,
    is_binary_encoded,
    is_structured_encoded,
    trace_id_for,
)

BINARY_HEADERS = {
    "Ce-Id": "e1",
    "Ce-Source": "//pubsub.googleapis.com/projects/p/topics/t",
    "Ce-Type": "google.cloud.pubsub.topic.v1.messagePublished",
    "Ce-Specversion": "1.0",
}


def test_binary_needs_all_four_headers():
    assert is_binary_encoded(EventRequest.of(BINARY_HEADERS))
    partial = {k: v for k, v in BINARY_HEADERS.items() if k != "Ce-Source"}
    assert not is_binary_encoded(EventRequest.of(partial))


def test_structured_detected_from_content_type():
    req = EventRequest.of({"Content-Type": "application/cloudevents+json; charset=utf-8"}, body={})
    assert is_structured_encoded(req)
    assert not is_structured_encoded(EventRequest.of({"content-type": "application/json"}))


def test_classify_prefers_binary():
    headers = dict(BINARY_HEADERS, **{"content-type": "application/cloudevents+json"})
    assert classify(EventRequest.of(headers)) is EncodingMode.BINARY
    assert classify(EventRequest.of({"content-type": "application/cloudevents+json"})) is EncodingMode.STRUCTURED
    assert classify(EventRequest.of({"content-type": "application/json"})) is EncodingMode.LEGACY
    assert classify(EventRequest.of()) is EncodingMode.LEGACY


def test_decode_binary_headers_strips_prefix():
    headers = dict(BINARY_HEADERS, **{"Ce-Subject": "objects/o", "Content-Type": "text/plain"})
    attrs = decode_binary_headers(EventRequest.of(headers))
    assert attrs == {
        "id": "e1",
        "source": "//pubsub.googleapis.com/projects/p/topics/t",
        "type": "google.cloud.pubsub.topic.v1.messagePublished",
        "specversion": "1.0",
        "subject": "objects/o",
    }


def test_decode_body_parses_json_payloads():
    req = EventRequest.of({"content-type": "application/json"}, body=b'{"a": 1}')
    assert decode_body(req) == {"a": 1}
    assert decode_body(EventRequest.of(body='{"a": 1}'), require_json=True) == {"a": 1}


def test_decode_body_leaves_opaque_payloads():
    req = EventRequest.of({"content-type": "text/plain"}, body=b"hello")
    assert decode_body(req) == b"hello"
    assert decode_body(EventRequest.of(body={"a": 1})) == {"a": 1}


def test_decode_body_rejects_bad_json():
    with pytest.raises(MalformedInput):
        decode_body(EventRequest.of(body="{not json"), require_json=True)


def test_trace_id_from_cloud_trace_header():
    req = EventRequest.of({"X-Cloud-Trace-Context": "105445aa7843bc8bf206b12000100000/1;o=1"})
    assert trace_id_for(req) == "105445aa7843bc8bf206b12000100000"
    assert trace_id_for(EventRequest.of()) == "-"


def test_encoders_produce_decodable_requests():
    event = CloudEvent(
        id="e1",
        time="t1",
        type="google.cloud.storage.object.v1.finalized",
        source="//storage.googleapis.com/bucket/obj",
        data={"size": "10"},
    )

    headers, body = encode_binary(event)
    req = EventRequest.of(headers, body)
    assert classify(req) is EncodingMode.BINARY
    assert decode_binary_headers(req)["source"] == "//storage.googleapis.com/bucket/obj"
    assert decode_body(req) == {"size": "10"}

    headers, body = encode_structured(event)
    req = EventRequest.of(headers, body)
    assert classify(req) is EncodingMode.STRUCTURED
    assert decode_body(req, require_json=True)["data"] == {"size": "10"}
