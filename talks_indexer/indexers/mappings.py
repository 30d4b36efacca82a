"""Index definitions for the private and public talk indexes.

The private index carries everything, including program committee
feedback, submitter identity and speaker residence. The public index
only describes what is safe to show on the conference website.
"""

KEYWORD = {"type": "keyword"}
TEXT = {"type": "text"}
UNINDEXED_KEYWORD = {"type": "keyword", "index": False}
DATE = {"type": "date", "format": "strict_date_optional_time||epoch_millis"}
TEXT_WITH_KEYWORD = {
    "type": "text",
    "fields": {"keyword": {"type": "keyword", "ignore_above": 256}},
}

INDEX_SETTINGS = {
    "number_of_shards": 1,
    "number_of_replicas": 1,
    "analysis": {"analyzer": {"default": {"type": "standard"}}},
}

# ===== TALK DATA FIELDS =====

PUBLIC_DATA_FIELDS = {
    "title": TEXT_WITH_KEYWORD,
    "abstract": TEXT,
    "intendedAudience": TEXT,
    "format": KEYWORD,
    "language": KEYWORD,
    "length": KEYWORD,
    "level": KEYWORD,
    "keywords": TEXT_WITH_KEYWORD,
    "suggestedKeywords": TEXT_WITH_KEYWORD,
    "suggestedCategory": KEYWORD,
    "room": KEYWORD,
    "startTime": DATE,
    "endTime": DATE,
    "video": UNINDEXED_KEYWORD,
    "slug": KEYWORD,
    "published": KEYWORD,
    "workshopPrerequisites": TEXT,
    "feedback": {
        "properties": {
            "count": {"type": "integer"},
            "enjoySum": {"type": "integer"},
            "usefulSum": {"type": "integer"},
            "commentList": TEXT,
        }
    },
}

PRIVATE_DATA_FIELDS = {
    **PUBLIC_DATA_FIELDS,
    "outline": TEXT,
    "equipment": TEXT,
    "infoToProgramCommittee": TEXT,
    "participation": TEXT,
    "postedBy": KEYWORD,
    "boardingTime": DATE,
    "communicatedRoom": KEYWORD,
    "communicatedStartTime": DATE,
    "status": KEYWORD,
    "preparations": TEXT,
    "tags": KEYWORD,
    "tagswithauthor": {
        "type": "nested",
        "properties": {"author": KEYWORD, "tag": KEYWORD},
    },
    "pkomfeedbacks": {
        "type": "nested",
        "properties": {
            "id": KEYWORD,
            "talkid": KEYWORD,
            "author": KEYWORD,
            "feedbacktype": KEYWORD,
            "info": TEXT,
            "created": KEYWORD,
        },
    },
}

# ===== SPEAKER DATA FIELDS =====

PUBLIC_SPEAKER_FIELDS = {
    "bio": TEXT,
    "twitter": KEYWORD,
    "linkedin": UNINDEXED_KEYWORD,
    "bluesky": KEYWORD,
    "pictureId": UNINDEXED_KEYWORD,
}

PRIVATE_SPEAKER_FIELDS = {
    **PUBLIC_SPEAKER_FIELDS,
    "email": KEYWORD,
    "residence": KEYWORD,
    "zip-code": KEYWORD,
    "emailAlias": KEYWORD,
    "speakerAlias": KEYWORD,
}


def build_talk_mapping(data_fields: dict, speaker_fields: dict) -> dict:
    """Assemble a full index body (settings + mappings) for talks."""
    return {
        "settings": INDEX_SETTINGS,
        "mappings": {
            "properties": {
                "id": KEYWORD,
                "conferenceId": KEYWORD,
                "conferenceSlug": KEYWORD,
                "conferenceName": TEXT_WITH_KEYWORD,
                "status": KEYWORD,
                "created": DATE,
                "lastUpdated": DATE,
                "data": {"properties": data_fields},
                "speakers": {
                    "type": "nested",
                    "properties": {
                        "id": KEYWORD,
                        "name": TEXT_WITH_KEYWORD,
                        "data": {"properties": speaker_fields},
                    },
                },
            }
        },
    }


TALK_PRIVATE_INDEX_MAPPING = build_talk_mapping(PRIVATE_DATA_FIELDS, PRIVATE_SPEAKER_FIELDS)
TALK_PUBLIC_INDEX_MAPPING = build_talk_mapping(PUBLIC_DATA_FIELDS, PUBLIC_SPEAKER_FIELDS)


# ===== ALGOLIA SETTINGS =====
# Algolia has no mappings; index settings play the same role at creation.

TALK_PUBLIC_INDEX_SETTINGS = {
    "searchableAttributes": [
        "data.title",
        "speakers.name",
        "data.abstract",
        "data.keywords",
        "conferenceName",
    ],
    "attributesForFaceting": [
        "filterOnly(conferenceId)",
        "searchable(conferenceSlug)",
        "data.format",
        "data.language",
        "data.level",
        "data.room",
    ],
    "attributesToHighlight": ["data.title", "data.abstract"],
}

TALK_PRIVATE_INDEX_SETTINGS = {
    **TALK_PUBLIC_INDEX_SETTINGS,
    "searchableAttributes": [
        *TALK_PUBLIC_INDEX_SETTINGS["searchableAttributes"],
        "data.outline",
        "data.infoToProgramCommittee",
        "data.postedBy",
    ],
    "attributesForFaceting": [
        *TALK_PUBLIC_INDEX_SETTINGS["attributesForFaceting"],
        "status",
        "data.suggestedCategory",
        "searchable(data.tags)",
    ],
}
