#!/usr/bin/env python3
"""
Seed Script

Loads starter subjects, approved aptitude questions and a few official
content items. Existing records with the same text are skipped, so the
script can be re-run safely.

Run: python scripts/seed.py
"""
import sys
sys.path.insert(0, '.')

from placement_hub.core.errors import ConflictError
from placement_hub.db.mongodb import init_mongo_indexes, test_mongo_connection
from placement_hub.services.content_service import ContentService
from placement_hub.services.quiz_service import QuizService
from placement_hub.services.subject_service import SubjectService

SUBJECTS = ["Aptitude", "DSA", "HR", "OS", "DBMS", "CN", "Core CS"]

APTITUDE_QUESTIONS = [
    {
        "question_text": "A tap can fill a tank in 6 hours. Another tap can empty it in 12 hours. "
                         "If both taps are open, how long will it take to fill the tank?",
        "options": ["8 hours", "10 hours", "12 hours", "15 hours"],
        "correct_answer": 2,
    },
    {
        "question_text": "If 20% of a number is 10, what is the number?",
        "options": ["40", "50", "60", "70"],
        "correct_answer": 1,
    },
    {
        "question_text": "What is the sum of the first 10 odd numbers?",
        "options": ["100", "110", "90", "80"],
        "correct_answer": 0,
    },
    {
        "question_text": "A train 120 m long passes a pole in 6 seconds. What is its speed in km/h?",
        "options": ["60", "72", "80", "90"],
        "correct_answer": 1,
    },
    {
        "question_text": "The average of 5 consecutive even numbers is 16. What is the largest?",
        "options": ["18", "20", "22", "24"],
        "correct_answer": 1,
    },
]

OFFICIAL_CONTENT = [
    {
        "topic": "OS",
        "question_text": "What is a deadlock?",
        "explanation": "A set of processes each waiting for a resource held by another process "
                       "in the set. Requires mutual exclusion, hold and wait, no preemption "
                       "and circular wait.",
    },
    {
        "topic": "DSA",
        "question_text": "Two Sum",
        "dsa_problem_link": "https://leetcode.com/problems/two-sum/",
    },
    {
        "topic": "DBMS",
        "question_text": "Normalization explained",
        "video_title": "Database Normalization",
        "youtube_embed_link": "https://www.youtube.com/watch?v=GFQaEYEc8_8",
    },
]


def seed_subjects():
    service = SubjectService()
    for name in SUBJECTS:
        try:
            service.add(name)
            print(f"    ✅ Subject: {name}")
        except ConflictError:
            print(f"    ⏭️  Subject exists: {name}")


def seed_quiz():
    service = QuizService()
    for question in APTITUDE_QUESTIONS:
        if service.collection.find_one({"question_text": question["question_text"]}):
            continue
        quiz = service.publish_official({"topic": "Aptitude", **question})
        print(f"    ✅ Quiz question: {quiz['id']}")


def seed_content():
    service = ContentService()
    for item in OFFICIAL_CONTENT:
        if service.collection.find_one({"question_text": item["question_text"]}):
            continue
        content = service.publish_official(item)
        print(f"    ✅ Content: {content['question_text']} ({content['content_type']})")


def main():
    if not test_mongo_connection():
        print("❌ MongoDB not reachable")
        sys.exit(1)
    init_mongo_indexes()

    print("\n[1] Subjects...")
    seed_subjects()
    print("\n[2] Aptitude quiz...")
    seed_quiz()
    print("\n[3] Official content...")
    seed_content()
    print("\nSeeding complete!")


if __name__ == "__main__":
    main()
