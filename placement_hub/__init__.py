"""
Placement Hub
A placement-preparation portal: moderated study content, quizzes and progress.

Architecture:
- MongoDB: contents, quiz_questions, subjects, users (progress embedded)
- FastAPI: REST API under /api
- JWT: student and moderator roles
"""

__version__ = "1.0.0"
