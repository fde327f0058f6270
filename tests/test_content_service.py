from datetime import datetime, timedelta

import pytest

from placement_hub.core.errors import NotFoundError, ValidationError
from placement_hub.schemas.schemas import ModerationStatus
from placement_hub.services.content_service import ContentService


@pytest.fixture
def service():
    return ContentService()


def _submit(service, text="What is paging?", topic="OS", **extra):
    return service.submit({"topic": topic, "question_text": text, **extra})


def test_submit_starts_pending_and_hidden(service):
    item = _submit(service)
    assert item["status"] == "pending"
    assert item["content_type"] == "text"
    assert service.list_approved() == []


@pytest.mark.parametrize("data", [
    {"question_text": "No topic"},
    {"topic": "OS"},
    {"topic": "  ", "question_text": "Blank topic"},
    {"topic": "OS", "question_text": "   "},
])
def test_submit_requires_topic_and_text(service, data):
    with pytest.raises(ValidationError):
        service.submit(data)


def test_submit_normalizes_youtube_embed_once(service):
    item = _submit(service, youtube_embed_link='<iframe src="https://www.youtube.com/embed/abc123"></iframe>')
    assert item["youtube_embed_link"] == "abc123"
    assert item["content_type"] == "video"
    stored = service.get(item["id"])
    assert stored["youtube_embed_link"] == "abc123"


def test_publish_official_is_approved_immediately(service):
    item = service.publish_official({"topic": "DSA", "dsa_problem_link": "https://leetcode.com/problems/two-sum/"})
    assert item["status"] == "approved"
    assert [i["id"] for i in service.list_approved()] == [item["id"]]
    assert service.list_pending() == []


def test_publish_official_validation(service):
    with pytest.raises(ValidationError):
        service.publish_official({"explanation": "no topic"})
    with pytest.raises(ValidationError):
        service.publish_official({"topic": "OS", "video_title": "only a title"})
    with pytest.raises(ValidationError):
        service.publish_official({"topic": "OS", "youtube_embed_link": "https://youtu.be/abc123"})


def test_approve_and_reject(service):
    a = _submit(service, "a")
    b = _submit(service, "b")

    assert service.approve(a["id"])["status"] == "approved"
    assert service.reject(b["id"])["status"] == "rejected"

    assert [i["id"] for i in service.list_approved()] == [a["id"]]
    assert service.list_pending() == []


def test_reapproving_is_accepted(service):
    item = _submit(service)
    service.approve(item["id"])
    assert service.approve(item["id"])["status"] == "approved"


@pytest.mark.parametrize("bad_id", ["65f0c0ffee0000000000abcd", "not-an-object-id"])
def test_transitions_on_missing_records_raise_not_found(service, bad_id):
    with pytest.raises(NotFoundError):
        service.approve(bad_id)
    with pytest.raises(NotFoundError):
        service.reject(bad_id)
    with pytest.raises(NotFoundError):
        service.delete(bad_id)
    with pytest.raises(NotFoundError):
        service.edit(bad_id, {"explanation": "x"})


def test_approved_visibility_matches_status(service):
    items = [_submit(service, str(i)) for i in range(6)]
    service.approve(items[0]["id"])
    service.approve(items[2]["id"])
    service.reject(items[3]["id"])
    service.force_set_status(items[4]["id"], ModerationStatus.approved)
    service.force_set_status(items[2]["id"], ModerationStatus.pending)

    approved = {i["id"] for i in service.list_approved()}
    for item in service.list_all():
        assert (item["status"] == "approved") == (item["id"] in approved)
    assert approved == {items[0]["id"], items[4]["id"]}


def test_pending_is_fifo_and_all_is_newest_first(service, mongo_db):
    base = datetime(2024, 1, 1)
    ids = []
    # insert out of chronological order
    for offset in (5, 1, 3):
        item = _submit(service, f"item {offset}")
        mongo_db.contents.update_one(
            {"question_text": f"item {offset}"},
            {"$set": {"created_at": base + timedelta(minutes=offset)}},
        )
        ids.append((offset, item["id"]))

    by_age = [item_id for _, item_id in sorted(ids)]
    assert [i["id"] for i in service.list_pending()] == by_age
    assert [i["id"] for i in service.list_all()] == list(reversed(by_age))


def test_edit_rewrites_allowed_fields_but_not_status(service):
    item = _submit(service)
    edited = service.edit(item["id"], {
        "explanation": "Fixed-size blocks",
        "youtube_embed_link": "https://youtu.be/xyz789",
        "video_title": "Paging explained",
        "status": "approved",
        "submitted_by": "someone-else",
    })
    assert edited["explanation"] == "Fixed-size blocks"
    assert edited["youtube_embed_link"] == "xyz789"
    assert edited["status"] == "pending"
    assert edited["submitted_by"] is None


def test_edit_revalidates_video_fields(service):
    item = service.publish_official({"topic": "OS", "explanation": "x"})

    with pytest.raises(ValidationError):
        service.edit(item["id"], {"youtube_embed_link": "https://youtu.be/zz"})
    assert service.get(item["id"])["content_type"] == "text"

    edited = service.edit(item["id"], {"youtube_embed_link": "https://youtu.be/zz", "video_title": "Paging"})
    assert edited["youtube_embed_link"] == "zz"
    assert edited["content_type"] == "video"

    # the stored title satisfies later embed changes
    assert service.edit(item["id"], {"youtube_embed_link": "https://youtu.be/yy"})["youtube_embed_link"] == "yy"

    edited = service.edit(item["id"], {"pdf_url": "/uploads/pdf/notes.pdf"})
    assert edited["content_type"] == "pdf"


def test_edit_rejects_empty_changes_and_blank_topic(service):
    item = _submit(service)
    with pytest.raises(ValidationError):
        service.edit(item["id"], {})
    with pytest.raises(ValidationError):
        service.edit(item["id"], {"topic": ""})


def test_force_set_status_moves_from_any_state(service):
    item = _submit(service)
    service.reject(item["id"])
    assert service.force_set_status(item["id"], ModerationStatus.pending)["status"] == "pending"
    assert service.force_set_status(item["id"], ModerationStatus.approved)["status"] == "approved"


def test_delete_is_permanent(service):
    item = _submit(service)
    service.delete(item["id"])
    assert service.list_all() == []
    with pytest.raises(NotFoundError):
        service.get(item["id"])


def test_topic_buckets_and_dsa_hub_only_show_approved(service):
    note = service.publish_official({"topic": "DSA", "explanation": "Arrays basics"})
    problem = service.publish_official({
        "topic": "DSA",
        "question_text": "Two Sum",
        "dsa_problem_link": "https://leetcode.com/problems/two-sum/",
    })
    video = service.publish_official({
        "topic": "DSA",
        "video_title": "Binary search",
        "youtube_embed_link": "https://www.youtube.com/watch?v=vid001",
    })
    _submit(service, "pending problem", topic="DSA", dsa_problem_link="https://leetcode.com/problems/3sum/")

    buckets = service.topic_buckets("DSA")
    assert [i["id"] for i in buckets["study"]] == [note["id"]]
    assert [i["id"] for i in buckets["dsa"]] == [problem["id"]]
    assert [i["id"] for i in buckets["videos"]] == [video["id"]]
    assert [i["id"] for i in service.list_dsa()] == [problem["id"]]


def test_grouped_by_topic(service):
    service.publish_official({"topic": "OS", "explanation": "a"})
    service.publish_official({"topic": "CN", "explanation": "b"})
    service.publish_official({"topic": "OS", "explanation": "c"})
    grouped = service.grouped_by_topic()
    assert set(grouped) == {"OS", "CN"}
    assert len(grouped["OS"]) == 2


def test_timed_quiz_sample_hides_explanations(service):
    for i in range(8):
        service.publish_official({"topic": "OS", "question_text": f"q{i}", "explanation": "secret"})
    _submit(service, "pending")

    sample = service.sample_timed_quiz(5)
    assert len(sample) == 5
    assert all("explanation" not in item for item in sample)
    assert all(item["status"] == "approved" for item in sample)
