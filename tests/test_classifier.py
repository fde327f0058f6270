import pytest

from placement_hub.services.classifier import (
    classify,
    group_by_topic,
    normalize_youtube_id,
    video_progress,
)


@pytest.mark.parametrize("raw", [
    "https://youtu.be/abc123",
    "https://www.youtube.com/watch?v=abc123",
    '<iframe src="https://www.youtube.com/embed/abc123">',
    '<iframe width="560" height="315" src="https://www.youtube.com/embed/abc123?si=xyz" '
    'title="YouTube video player" frameborder="0" allowfullscreen></iframe>',
    "https://www.youtube.com/v/abc123",
    "https://www.youtube.com/watch?v=abc123&feature=player_embedded",
    "https://www.youtube.com/watch?feature=player_embedded&v=abc123",
    "https://www.youtube-nocookie.com/embed/abc123",
])
def test_normalize_youtube_id(raw):
    assert normalize_youtube_id(raw) == "abc123"


@pytest.mark.parametrize("raw", ["abc123", "https://vimeo.com/12345", "not a url", ""])
def test_normalize_returns_unrecognised_input_unchanged(raw):
    assert normalize_youtube_id(raw) == raw


def _item(topic="OS", dsa=None, video=None, id_="x"):
    return {"id": id_, "topic": topic, "dsa_problem_link": dsa, "youtube_embed_link": video}


def test_buckets_follow_link_presence():
    study = _item(id_="study")
    dsa = _item(dsa="https://leetcode.com/problems/two-sum/", id_="dsa")
    video = _item(video="abc123", id_="video")
    both = _item(dsa="https://leetcode.com/problems/lru-cache/", video="def456", id_="both")

    buckets = classify([study, dsa, video, both])

    assert [i["id"] for i in buckets["study"]] == ["study"]
    assert [i["id"] for i in buckets["dsa"]] == ["dsa", "both"]
    assert [i["id"] for i in buckets["videos"]] == ["video", "both"]


def test_empty_strings_do_not_count_as_links():
    item = _item(dsa="", video="")
    buckets = classify([item])
    assert buckets["study"] == [item]
    assert buckets["dsa"] == [] and buckets["videos"] == []


def test_study_never_overlaps_other_buckets():
    items = [
        _item(id_="a"),
        _item(dsa="l", id_="b"),
        _item(video="v", id_="c"),
        _item(dsa="l", video="v", id_="d"),
    ]
    buckets = classify(items)
    study_ids = {i["id"] for i in buckets["study"]}
    assert not study_ids & {i["id"] for i in buckets["dsa"]}
    assert not study_ids & {i["id"] for i in buckets["videos"]}
    # every item lands somewhere
    placed = study_ids | {i["id"] for i in buckets["dsa"]} | {i["id"] for i in buckets["videos"]}
    assert placed == {"a", "b", "c", "d"}


def test_group_by_topic_keeps_fetch_order():
    items = [_item("OS", id_="1"), _item("DBMS", id_="2"), _item("OS", id_="3")]
    grouped = group_by_topic(items)
    assert list(grouped) == ["OS", "DBMS"]
    assert [i["id"] for i in grouped["OS"]] == ["1", "3"]


def test_video_progress_counts_watched_videos_per_topic():
    items = [
        _item("OS", video="a", id_="v1"),
        _item("OS", video="b", id_="v2"),
        _item("OS", id_="note"),
        _item("CN", video="c", id_="v3"),
    ]
    progress = video_progress(items, watched_ids=["v1", "note"], topics=["OS", "CN", "HR"])

    assert progress[0] == {"topic": "OS", "total": 2, "watched": 1, "percentage": 50.0}
    assert progress[1] == {"topic": "CN", "total": 1, "watched": 0, "percentage": 0.0}
    assert progress[2] == {"topic": "HR", "total": 0, "watched": 0, "percentage": 0.0}
