import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name, default="false"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev_key")

    # MongoDB
    MONGODB_URI = os.environ.get("MONGODB_URI")
    MONGODB_DB_NAME = os.environ.get("MONGODB_DB_NAME", "warmhome")

    # Language model: "gemini" or "groq"
    LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "gemini")
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
    GROQ_API_KEY = os.environ.get("GROQ_API_KEY")
    GROQ_MODEL = os.environ.get("GROQ_MODEL", "llama-3.3-70b-versatile")

    # Legal assistant chat
    SESSION_TIMEOUT_MINUTES = int(os.environ.get("SESSION_TIMEOUT_MINUTES", "15"))
    # Ended sessions stay answerable as expired for this long before being dropped
    CHAT_RETENTION_MINUTES = int(os.environ.get("CHAT_RETENTION_MINUTES", "60"))
    CHAT_BACKGROUND_TIMER = _flag("CHAT_BACKGROUND_TIMER")
    SAVE_TRANSCRIPTS = _flag("SAVE_TRANSCRIPTS", "true")
    FOLLOW_UP_DELAYS = {
        "urgent_warning": 0.0,
        "off_topic_reminder": 0.5,
        "feedback_prompt": 1.0,
        "volunteer_offer": 1.0,
    }

    ENABLE_SEED_ROUTE = _flag("ENABLE_SEED_ROUTE", "true")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test_key"
    GEMINI_API_KEY = None
    GROQ_API_KEY = None
    CHAT_BACKGROUND_TIMER = False
    SAVE_TRANSCRIPTS = False
    FOLLOW_UP_DELAYS = {
        "urgent_warning": 0.0,
        "off_topic_reminder": 0.0,
        "feedback_prompt": 0.0,
        "volunteer_offer": 0.0,
    }
