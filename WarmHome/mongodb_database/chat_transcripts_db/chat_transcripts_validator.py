# COLLECTION: Chat_Transcripts
# PURPOSE: One document per legal assistant chat session, updated after every exchange

chat_transcripts_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["session_id", "language", "messages"],
        "properties": {
            "_id": {
                "bsonType": "objectId"
            },
            "session_id": {
                "bsonType": "string",
                "description": "Chat session identifier (Unique Key)"
            },
            "language": {
                "enum": ["en", "zh", "vi", "ar", "hi", "id"]
            },
            "is_active": {
                "bsonType": "bool"
            },
            "volunteer_connected": {
                "bsonType": "bool",
                "description": "Conversation was handed to a legal volunteer"
            },
            "messages": {
                "bsonType": "array",
                "description": "Chronological list of all messages in this chat",
                "items": {
                    "bsonType": "object",
                    "required": ["message_id", "type", "content", "timestamp"],
                    "properties": {
                        "message_id": {"bsonType": "string"},
                        "type": {
                            "enum": ["user", "bot", "system", "feedback"],
                            "description": "user = visitor, bot = AI answer, system = notices"
                        },
                        "content": {"bsonType": "string"},
                        "language": {"bsonType": "string"},
                        "timestamp": {"bsonType": "date"},
                        "question_id": {"bsonType": "string"},
                        "confidence": {"enum": ["high", "medium", "low"]},
                        "is_helpful": {"bsonType": "bool"}
                    }
                }
            },
            "conversation_metadata": {
                "bsonType": "object",
                "properties": {
                    "total_questions": {"bsonType": "int"},
                    "role": {"bsonType": "string"},
                    "issue_type": {"bsonType": "string"},
                    "urgency": {"enum": ["low", "medium", "high"]},
                    "specific_details": {"bsonType": "array"},
                    "unhelpful_feedback_count": {"bsonType": "int"}
                }
            },
            "started_at": {"bsonType": "date"},
            "last_activity_at": {"bsonType": "date"},
            "created_at": {"bsonType": "date"},
            "updated_at": {"bsonType": "date"}
        }
    }
}
