import logging
import threading
import uuid
from datetime import timedelta

from flask import session, current_app

from ..legal_assistant.ai_gateway import LegalHousingAI, build_completion_backend
from ..legal_assistant.orchestrator import ConversationOrchestrator
from ..legal_assistant.models import utcnow
from ..legal_assistant.transcript_store import TranscriptStore
from ..mongodb_database.connection import get_database

logger = logging.getLogger(__name__)

# Guards CHAT_ORCHESTRATORS and CHAT_EXPIRED_CLIENTS across request threads.
_registry_lock = threading.Lock()


def get_db():
    """Database handle for this app, created on first use."""
    if 'MONGO_DATABASE' not in current_app.config:
        current_app.config['MONGO_DATABASE'] = get_database(
            current_app.config.get('MONGODB_URI'),
            current_app.config.get('MONGODB_DB_NAME'),
        )
    return current_app.config['MONGO_DATABASE']


def get_legal_ai():
    if 'LEGAL_HOUSING_AI' not in current_app.config:
        current_app.config['LEGAL_HOUSING_AI'] = LegalHousingAI(build_completion_backend(current_app.config))
    return current_app.config['LEGAL_HOUSING_AI']


def _transcript_store():
    if not current_app.config.get('SAVE_TRANSCRIPTS'):
        return None
    try:
        return TranscriptStore(get_db())
    except Exception as e:
        logger.warning(f"Transcripts will not be saved: {e}")
        return None


def _prune_stale(orchestrators, expired_clients, now, keep_for):
    """
    Drop orchestrators whose session ended more than keep_for after the
    last activity; their clients are remembered so the next request still
    sees an expired session rather than a fresh one.
    """
    for client_id, orch in list(orchestrators.items()):
        orch.refresh(now)
        if not orch.is_active and now - orch.session.last_activity_time >= keep_for:
            orchestrators.pop(client_id).close()
            expired_clients.add(client_id)


def get_or_create_orchestrator(language=None):
    """
    Chat orchestrator for the browser session, keyed by a random client id
    kept in the Flask session cookie.
    """
    client_id = session.get('chat_client_id')
    if not client_id:
        client_id = uuid.uuid4().hex
        session['chat_client_id'] = client_id

    config = current_app.config
    clock = config.get('CHAT_CLOCK') or utcnow
    timeout = timedelta(minutes=config.get('SESSION_TIMEOUT_MINUTES', 15))

    with _registry_lock:
        orchestrators = config.setdefault('CHAT_ORCHESTRATORS', {})
        expired_clients = config.setdefault('CHAT_EXPIRED_CLIENTS', set())

        # Access the app config via current_app proxy
        if client_id not in orchestrators:
            keep_for = timeout + timedelta(minutes=config.get('CHAT_RETENTION_MINUTES', 60))
            _prune_stale(orchestrators, expired_clients, clock(), keep_for)

            orchestrator = ConversationOrchestrator(
                ai=get_legal_ai(),
                language=language or 'en',
                clock=clock,
                timeout=timeout,
                follow_up_delays=config.get('FOLLOW_UP_DELAYS'),
                transcript_store=_transcript_store(),
                background_timer=config.get('CHAT_BACKGROUND_TIMER', False),
            )
            orchestrator.start()
            if client_id in expired_clients:
                # Returning after the old session was dropped: report it as expired.
                expired_clients.discard(client_id)
                orchestrator.end_session()
            orchestrators[client_id] = orchestrator
            logger.info(f"Chat session {orchestrator.session.id} started for client {client_id}")
        return orchestrators[client_id]
