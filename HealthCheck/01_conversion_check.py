"""
Conversion Health Check - fnevents
Purpose:
- Prove background event -> CloudEvent conversion
- Prove CloudEvent (binary + structured) -> background event conversion
- Prove unconvertible input yields None, not an exception
NO pytest. NO mocks.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import json
from fnevents.shared.logging import setup_logging
from fnevents.convert.converter import to_cloud_event, to_legacy_event
from fnevents.convert.wire import EventRequest, encode_binary, encode_structured


def main():
    setup_logging()
    print("=== fnevents Conversion Health Check ===")

    fixture = {
        "context": {
            "eventId": "e1",
            "timestamp": "2020-09-29T11:32:00.000Z",
            "eventType": "google.storage.object.finalize",
            "resource": "bucket/obj",
        },
        "data": {},
    }

    # 1. Background event -> CloudEvent
    print("\n[Background -> CloudEvent]")
    cloudevent = to_cloud_event(EventRequest.of({"content-type": "application/json"}, fixture))
    assert cloudevent is not None, "conversion failed"
    print(json.dumps(cloudevent.to_wire(), indent=2))

    # 2. CloudEvent -> background event, both encodings
    for label, encode in (("binary", encode_binary), ("structured", encode_structured)):
        print(f"\n[CloudEvent ({label}) -> Background]")
        headers, body = encode(cloudevent)
        legacy = to_legacy_event(EventRequest.of(headers, body))
        assert legacy is not None and legacy.to_wire() == fixture, f"{label} round trip mismatch"
        print(json.dumps(legacy.to_wire(), indent=2))

    # 3. Missing resource -> None
    print("\n[Unconvertible input]")
    broken = {"context": {k: v for k, v in fixture["context"].items() if k != "resource"}, "data": {}}
    result = to_cloud_event(EventRequest.of({"content-type": "application/json"}, broken))
    print("Result:", result)
    assert result is None

    print("\n✅ CONVERSION HEALTH CHECK PASSED")


if __name__ == "__main__":
    main()
