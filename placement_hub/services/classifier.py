"""
Content Classifier - display buckets and topic grouping for approved content.

Buckets are derived from which links a content document carries:
- dsa:    has a DSA problem link
- videos: has a YouTube embed (stored as a bare video id)
- study:  has neither

DSA and video overlap freely; study never overlaps with either.
All functions here are pure: they take documents and return new containers.
"""

import re
from typing import Dict, Iterable, List

IFRAME_SRC_RE = re.compile(r'src="([^"]+)"')
YOUTUBE_ID_RE = re.compile(
    r"(?:youtu\.be/|youtube\.com/(?:embed/|v/|watch\?v=|watch\?feature=player_embedded&v=))"
    r"([^&?/\n]+)"
)
EMBED_PATH_RE = re.compile(r"/embed/([^/?]+)")


def normalize_youtube_id(value: str) -> str:
    """
    Reduce a pasted YouTube reference to its bare video id.

    Accepts an <iframe> snippet (its src is used), a youtu.be link, or a
    youtube.com embed/v/watch URL. Anything unrecognised comes back as is.
    """
    if not value:
        return value
    iframe = IFRAME_SRC_RE.search(value)
    url = iframe.group(1) if iframe else value

    match = YOUTUBE_ID_RE.search(url)
    if match:
        return match.group(1)
    match = EMBED_PATH_RE.search(url)
    if match:
        return match.group(1)
    return value


def is_dsa(item: dict) -> bool:
    return bool(item.get("dsa_problem_link"))


def is_video(item: dict) -> bool:
    return bool(item.get("youtube_embed_link"))


def is_study(item: dict) -> bool:
    return not is_dsa(item) and not is_video(item)


def get_dsa_content(items: Iterable[dict]) -> List[dict]:
    return [item for item in items if is_dsa(item)]


def get_video_resources(items: Iterable[dict]) -> List[dict]:
    return [item for item in items if is_video(item)]


def get_study_material(items: Iterable[dict]) -> List[dict]:
    return [item for item in items if is_study(item)]


def classify(items: Iterable[dict]) -> Dict[str, List[dict]]:
    """Split items into {"study", "videos", "dsa"} keeping their order."""
    items = list(items)
    return {
        "study": get_study_material(items),
        "videos": get_video_resources(items),
        "dsa": get_dsa_content(items),
    }


def group_by_topic(items: Iterable[dict]) -> Dict[str, List[dict]]:
    """topic -> items, topics in first-seen order, items in fetch order."""
    grouped: Dict[str, List[dict]] = {}
    for item in items:
        grouped.setdefault(item.get("topic"), []).append(item)
    return grouped


def video_progress(items: Iterable[dict], watched_ids: Iterable[str], topics: Iterable[str]) -> List[dict]:
    """Per-topic count of video resources and how many of them were watched."""
    watched = set(watched_ids)
    videos_by_topic = group_by_topic(get_video_resources(items))
    progress = []
    for topic in topics:
        videos = videos_by_topic.get(topic, [])
        total = len(videos)
        seen = sum(1 for video in videos if video.get("id") in watched)
        progress.append({
            "topic": topic,
            "total": total,
            "watched": seen,
            "percentage": (seen / total) * 100 if total else 0.0,
        })
    return progress
