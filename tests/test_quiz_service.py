import pytest

from placement_hub.core.errors import NotFoundError, ValidationError
from placement_hub.services.quiz_service import QuizService
from placement_hub.services.subject_service import SubjectService


@pytest.fixture
def service():
    return QuizService()


def test_submit_valid_question_is_pending(service, quiz_payload):
    quiz = service.submit(quiz_payload)
    assert quiz["status"] == "pending"
    assert quiz["options"] == ["40", "50", "60", "70"]
    assert service.list_by_topic("Aptitude") == []


def test_official_question_is_approved(service, quiz_payload):
    quiz = service.publish_official(quiz_payload)
    assert quiz["status"] == "approved"
    assert [q["id"] for q in service.list_by_topic("Aptitude")] == [quiz["id"]]


def test_three_options_is_a_validation_error(service, quiz_payload):
    with pytest.raises(ValidationError):
        service.submit({**quiz_payload, "options": ["a", "b", "c"]})


@pytest.mark.parametrize("answer", [5, -1, 4, None, "1", True])
def test_correct_answer_out_of_range(service, quiz_payload, answer):
    with pytest.raises(ValidationError):
        service.submit({**quiz_payload, "correct_answer": answer})


@pytest.mark.parametrize("field, value", [
    ("topic", ""),
    ("topic", "Astrology"),
    ("question_text", "  "),
    ("options", ["a", "", "c", "d"]),
    ("options", None),
    ("options", ["a", "b", "c", "d", "e"]),
])
def test_submit_validation(service, quiz_payload, field, value):
    with pytest.raises(ValidationError):
        service.submit({**quiz_payload, field: value})


def test_subjects_extend_quiz_topics(service, quiz_payload):
    with pytest.raises(ValidationError):
        service.submit({**quiz_payload, "topic": "Java"})
    SubjectService().add("Java")
    assert service.submit({**quiz_payload, "topic": "Java"})["topic"] == "Java"


def test_approve_missing_quiz_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.approve("65f0c0ffee0000000000abcd")


def test_pending_queue_and_transitions(service, quiz_payload):
    first = service.submit(quiz_payload)
    second = service.submit({**quiz_payload, "question_text": "Second?"})
    assert [q["id"] for q in service.list_pending()] == [first["id"], second["id"]]

    service.approve(first["id"])
    service.reject(second["id"])
    assert service.list_pending() == []
    assert [q["id"] for q in service.list_by_topic("Aptitude")] == [first["id"]]
    assert len(service.list_all()) == 2


def test_edit_revalidates_merged_question(service, quiz_payload):
    quiz = service.submit(quiz_payload)

    edited = service.edit(quiz["id"], {"correct_answer": 3, "question_text": "Updated?"})
    assert edited["correct_answer"] == 3
    assert edited["question_text"] == "Updated?"
    assert edited["status"] == "pending"

    with pytest.raises(ValidationError):
        service.edit(quiz["id"], {"options": ["only", "three", "options"]})
    with pytest.raises(ValidationError):
        service.edit(quiz["id"], {"correct_answer": 9})
    with pytest.raises(ValidationError):
        service.edit(quiz["id"], {"status": "approved"})
    assert service.get(quiz["id"])["correct_answer"] == 3


def test_edit_keeps_orphaned_topic_editable(service, quiz_payload):
    subjects = SubjectService()
    java = subjects.add("Java")
    quiz = service.submit({**quiz_payload, "topic": "Java"})
    subjects.delete(java["id"])

    edited = service.edit(quiz["id"], {"question_text": "Still editable"})
    assert edited["topic"] == "Java"


def test_delete(service, quiz_payload):
    quiz = service.submit(quiz_payload)
    service.delete(quiz["id"])
    with pytest.raises(NotFoundError):
        service.delete(quiz["id"])
