from typing import Optional, Tuple

# (background event type, CloudEvent type)
# Order matters: reverse lookups take the first entry whose CloudEvent type matches.
TYPE_TABLE: Tuple[Tuple[str, str], ...] = (
    ("google.pubsub.topic.publish",                              "google.cloud.pubsub.topic.v1.messagePublished"),
    ("providers/cloud.pubsub/eventTypes/topic.publish",          "google.cloud.pubsub.topic.v1.messagePublished"),
    ("google.storage.object.finalize",                           "google.cloud.storage.object.v1.finalized"),
    ("google.storage.object.delete",                             "google.cloud.storage.object.v1.deleted"),
    ("google.storage.object.archive",                            "google.cloud.storage.object.v1.archived"),
    ("google.storage.object.metadataUpdate",                     "google.cloud.storage.object.v1.metadataUpdated"),
    ("providers/cloud.firestore/eventTypes/document.write",      "google.cloud.firestore.document.v1.written"),
    ("providers/cloud.firestore/eventTypes/document.create",     "google.cloud.firestore.document.v1.created"),
    ("providers/cloud.firestore/eventTypes/document.update",     "google.cloud.firestore.document.v1.updated"),
    ("providers/cloud.firestore/eventTypes/document.delete",     "google.cloud.firestore.document.v1.deleted"),
    ("providers/firebase.auth/eventTypes/user.create",           "google.firebase.auth.user.v1.created"),
    ("providers/firebase.auth/eventTypes/user.delete",           "google.firebase.auth.user.v1.deleted"),
    ("providers/google.firebase.analytics/eventTypes/event.log", "google.firebase.analytics.log.v1.written"),
    ("providers/google.firebase.database/eventTypes/ref.create", "google.firebase.database.document.v1.created"),
    ("providers/google.firebase.database/eventTypes/ref.write",  "google.firebase.database.document.v1.written"),
    ("providers/google.firebase.database/eventTypes/ref.update", "google.firebase.database.document.v1.updated"),
    ("providers/google.firebase.database/eventTypes/ref.delete", "google.firebase.database.document.v1.deleted"),
    ("providers/cloud.storage/eventTypes/object.change",         "google.cloud.storage.object.v1.finalized"),
)

# (background event type prefix, CloudEvent service hostname)
SERVICE_TABLE: Tuple[Tuple[str, str], ...] = (
    ("providers/cloud.firestore/",           "firestore.googleapis.com"),
    ("providers/google.firebase.analytics/", "firebase.googleapis.com"),
    ("providers/firebase.auth/",             "firebase.googleapis.com"),
    ("providers/google.firebase.database/",  "firebase.googleapis.com"),
    ("providers/cloud.pubsub/",              "pubsub.googleapis.com"),
    ("providers/cloud.storage/",             "storage.googleapis.com"),
    ("google.pubsub",                        "pubsub.googleapis.com"),
    ("google.storage",                       "storage.googleapis.com"),
)


def standard_type_for(legacy_type: str) -> Optional[str]:
    for b_type, ce_type in TYPE_TABLE:
        if b_type == legacy_type:
            return ce_type
    return None


def legacy_type_for(standard_type: str) -> Optional[str]:
    """
    Reverse type lookup. Several background types share one CloudEvent type
    (e.g. both Pub/Sub publish variants); the earliest table entry wins.
    """
    for b_type, ce_type in TYPE_TABLE:
        if ce_type == standard_type:
            return b_type
    return None


def standard_service_for_prefix(legacy_type: str) -> Optional[Tuple[str, str]]:
    """
    Returns (service, prefix) for the first prefix that starts `legacy_type`.
    """
    for prefix, service in SERVICE_TABLE:
        if legacy_type.startswith(prefix):
            return service, prefix
    return None


def legacy_prefix_for_source(source: str) -> Optional[Tuple[str, str]]:
    """
    Returns (prefix, service) for the first service hostname found anywhere in `source`.
    """
    for prefix, service in SERVICE_TABLE:
        if service in source:
            return prefix, service
    return None
