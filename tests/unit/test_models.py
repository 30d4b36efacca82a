"""Tests for talk projections and status filtering."""

import pytest

from helpers import make_talk
from talks_indexer.models import (
    Talk,
    TalkStatus,
    filter_public_talks,
    is_public_status,
    prepare_private_talks,
    talk_to_document,
)


class TestPublicStatus:
    """Only the approved status is publicly visible."""

    @pytest.mark.parametrize("status,expected", [
        ("APPROVED", True),
        ("SUBMITTED", False),
        ("REJECTED", False),
        ("DRAFT", False),
        ("HISTORIC", False),
        ("approved", False),
        ("Approved", False),
        ("", False),
    ])
    def test_is_public_status(self, status: str, expected: bool):
        assert is_public_status(status) is expected

    def test_enum_value_is_public(self):
        assert is_public_status(TalkStatus.APPROVED.value)


class TestPrivateProjection:
    """Private projection merges private data into data."""

    def test_merges_private_into_data(self, sample_talk: Talk):
        private = sample_talk.to_private()
        assert private.data == {
            "title": "Introduction to Go",
            "abstract": "Goroutines for everyone",
            "postedBy": "speaker@example.com",
            "infoToProgramCommittee": "Please pick me",
        }
        assert private.private_data == {}

    def test_private_wins_on_collision(self):
        talk = make_talk("t", data={"title": "Public title"}, private_data={"title": "Internal title"})
        assert talk.to_private().data["title"] == "Internal title"

    @pytest.mark.parametrize("status", ["APPROVED", "SUBMITTED", "REJECTED", "DRAFT"])
    def test_produced_for_every_status(self, status: str):
        talks = [make_talk("t", status=status)]
        assert [t.id for t in prepare_private_talks(talks)] == ["t"]

    def test_speaker_private_data_merged(self, sample_talk: Talk):
        speaker = sample_talk.to_private().speakers[0]
        assert speaker.data == {"bio": "Expert Go developer", "email": "john@example.com"}
        assert speaker.private_data == {}

    def test_source_talk_unchanged(self, sample_talk: Talk):
        sample_talk.to_private()
        assert "postedBy" not in sample_talk.data
        assert sample_talk.private_data["postedBy"] == "speaker@example.com"


class TestPublicProjection:
    """Public projection drops private data entirely."""

    def test_data_is_public_only(self, sample_talk: Talk):
        public = sample_talk.to_public()
        assert public.data == sample_talk.data
        assert public.private_data is None

    def test_document_has_no_private_keys(self, sample_talk: Talk):
        doc = talk_to_document(sample_talk.to_public())
        assert "privateData" not in doc
        assert "postedBy" not in doc["data"]
        assert "infoToProgramCommittee" not in doc["data"]
        assert "email" not in doc["speakers"][0]["data"]
        assert "privateData" not in doc["speakers"][0]

    def test_filter_keeps_only_approved(self):
        talks = [
            make_talk("a", status="APPROVED"),
            make_talk("b", status="SUBMITTED"),
            make_talk("c", status="APPROVED"),
            make_talk("d", status="REJECTED"),
        ]
        public = filter_public_talks(talks)
        assert [t.id for t in public] == ["a", "c"]
        assert all(t.private_data is None for t in public)


class TestTalkDocument:
    """Search documents use camelCase keys and omit None values."""

    def test_camel_case_keys(self, sample_talk: Talk):
        doc = talk_to_document(sample_talk.to_private())
        assert doc["id"] == "talk-1"
        assert doc["conferenceId"] == "conf-1"
        assert doc["conferenceSlug"] == "javazone2024"
        assert doc["conferenceName"] == "JavaZone 2024"
        assert doc["status"] == "APPROVED"
        assert doc["lastUpdated"].startswith("2024-04-01")
        assert doc["privateData"] == {}

    def test_none_values_omitted(self):
        talk = Talk(id="t", conference_id="c", status="DRAFT")
        doc = talk_to_document(talk)
        assert "created" not in doc
        assert "lastUpdated" not in doc

    def test_parses_camel_case_input(self):
        talk = Talk.model_validate({
            "id": "t",
            "conferenceId": "c",
            "conferenceSlug": "jz",
            "status": "APPROVED",
            "privateData": {"postedBy": "x@example.com"},
        })
        assert talk.conference_id == "c"
        assert talk.private_data == {"postedBy": "x@example.com"}
