# tests/test_tables.py
import pytest

from fnevents.convert.tables import (
    SERVICE_TABLE,
    TYPE_TABLE,
    legacy_prefix_for_source,
    legacy_type_for,
    standard_service_for_prefix,
    standard_type_for,
)


@pytest.mark.parametrize("legacy_type,standard_type", TYPE_TABLE)
def test_type_lookups_agree_both_ways(legacy_type, standard_type):
    assert standard_type_for(legacy_type) == standard_type
    back = legacy_type_for(standard_type)
    assert standard_type_for(back) == standard_type


def test_reverse_type_lookup_takes_first_entry():
    assert legacy_type_for("google.cloud.pubsub.topic.v1.messagePublished") == "google.pubsub.topic.publish"
    assert legacy_type_for("google.cloud.storage.object.v1.finalized") == "google.storage.object.finalize"


def test_unknown_types_are_not_found():
    assert standard_type_for("google.unknown.thing") is None
    assert legacy_type_for("com.example.unknown") is None


def test_service_for_prefix_matches_event_type_prefix():
    assert standard_service_for_prefix("providers/cloud.firestore/eventTypes/document.write") == (
        "firestore.googleapis.com",
        "providers/cloud.firestore/",
    )
    assert standard_service_for_prefix("google.pubsub.topic.publish") == ("pubsub.googleapis.com", "google.pubsub")
    assert standard_service_for_prefix("com.example.thing") is None


def test_prefix_for_source_takes_first_matching_service():
    # analytics, auth and database all share the firebase host; analytics comes first
    assert legacy_prefix_for_source("//firebase.googleapis.com/projects/p") == (
        "providers/google.firebase.analytics/",
        "firebase.googleapis.com",
    )
    assert legacy_prefix_for_source("//storage.googleapis.com/b/o") == (
        "providers/cloud.storage/",
        "storage.googleapis.com",
    )
    assert legacy_prefix_for_source("//example.com/x") is None


def test_tables_are_immutable():
    assert isinstance(TYPE_TABLE, tuple)
    assert isinstance(SERVICE_TABLE, tuple)
