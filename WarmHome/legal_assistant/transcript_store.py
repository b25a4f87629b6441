import logging
from datetime import datetime, timezone
from typing import List

from .models import ChatSession, Message

logger = logging.getLogger(__name__)


class TranscriptStore:
    """Keeps one document per chat session in Chat_Transcripts."""

    def __init__(self, mongodb_db):
        self.collection = mongodb_db.Chat_Transcripts

    def save(self, session: ChatSession, messages: List[Message]) -> bool:
        """Upsert the full transcript. Failures are logged, never raised."""
        try:
            context = session.user_context
            doc = {
                "session_id": session.id,
                "language": session.language,
                "is_active": session.is_active,
                "volunteer_connected": session.volunteer_connected,
                "started_at": session.start_time,
                "last_activity_at": session.last_activity_time,
                "messages": [self._format_message(m) for m in messages],
                "conversation_metadata": {
                    "total_questions": sum(1 for m in messages if m.type == "user"),
                    "role": context.role,
                    "issue_type": context.issue_type,
                    "urgency": context.urgency,
                    "specific_details": list(context.specific_details),
                    "unhelpful_feedback_count": session.unhelpful_feedback_count,
                },
                "updated_at": datetime.now(timezone.utc),
            }

            self.collection.update_one(
                {"session_id": session.id},
                {"$set": doc, "$setOnInsert": {"created_at": datetime.now(timezone.utc)}},
                upsert=True,
            )
            return True
        except Exception as e:
            logger.error(f"Error saving transcript {session.id}: {e}")
            return False

    @staticmethod
    def _format_message(message: Message) -> dict:
        doc = {
            "message_id": message.id,
            "type": message.type,
            "content": message.content,
            "language": message.language,
            "timestamp": message.timestamp,
        }
        if message.question_id:
            doc["question_id"] = message.question_id
        if message.confidence:
            doc["confidence"] = message.confidence
        if message.is_helpful is not None:
            doc["is_helpful"] = message.is_helpful
        return doc
