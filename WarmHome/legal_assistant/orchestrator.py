import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from .ai_gateway import LegalHousingAI
from .context_classifier import classify
from .models import AIResponse, FollowUp, Message, ScheduledFollowUp, new_id, utcnow
from .session_manager import INACTIVITY_TIMEOUT, SessionLifecycle
from .transcript_store import TranscriptStore
from .translations import issue_label, normalize_language, quick_questions, role_label, translate

logger = logging.getLogger(__name__)

# Unhelpful answers tolerated before a volunteer is offered instead of a retry.
FAILED_ATTEMPTS_BEFORE_VOLUNTEER = 2

DEFAULT_FOLLOW_UP_DELAYS = {
    "urgent_warning": 0.0,
    "off_topic_reminder": 0.5,
    "feedback_prompt": 1.0,
    "volunteer_offer": 1.0,
}


class MessageNotFound(LookupError):
    pass


class ConversationOrchestrator:
    """
    Coordinates one client's chat: session lifecycle, context classification,
    the AI gateway, feedback and volunteer handoff.

    Follow-up messages (feedback prompt, volunteer offer, off-topic reminder,
    urgent warning) are queued with a due time and appended by
    run_due_follow_ups(), so the order is explicit and expiry or a new chat
    cancels whatever is still queued.
    """

    def __init__(self, ai: LegalHousingAI, language: str = "en", clock: Callable[[], datetime] = utcnow,
                 timeout: timedelta = INACTIVITY_TIMEOUT, follow_up_delays: Optional[Dict[str, float]] = None,
                 transcript_store: Optional[TranscriptStore] = None, background_timer: bool = False,
                 timer_factory=threading.Timer):
        self.ai = ai
        self.clock = clock
        self.language = normalize_language(language)
        self.follow_up_delays = dict(DEFAULT_FOLLOW_UP_DELAYS, **(follow_up_delays or {}))
        self.transcript_store = transcript_store
        self.lock = threading.RLock()
        self.lifecycle = SessionLifecycle(
            clock=clock,
            timeout=timeout,
            on_expired=self._on_session_expired,
            background_timer=background_timer,
            lock=self.lock,
            timer_factory=timer_factory,
        )

        self.messages: List[Message] = []
        self.pending_follow_ups: List[ScheduledFollowUp] = []
        self.is_typing = False
        self.volunteer_offer_open = False

    @property
    def session(self):
        return self.lifecycle.session

    @property
    def is_active(self) -> bool:
        return self.lifecycle.is_active

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start(self) -> Message:
        with self.lock:
            welcome = self.lifecycle.start(self.language)
            self.messages = [welcome]
            self.pending_follow_ups = []
            self.is_typing = False
            self.volunteer_offer_open = False
            return welcome

    def new_chat(self) -> Message:
        """Discard the current session and its messages, then start over."""
        with self.lock:
            if self.session is not None:
                self._save_transcript()
            self.lifecycle.close()
            self.messages = []
            return self.start()

    def end_session(self) -> Optional[Message]:
        return self.lifecycle.end()

    def close(self):
        """Tear down: cancel the inactivity timer and drop queued follow-ups."""
        with self.lock:
            self.lifecycle.close()
            self.pending_follow_ups = []

    def refresh(self, now: Optional[datetime] = None) -> List[Message]:
        """Apply a pending expiry and any follow-ups that have come due."""
        with self.lock:
            self.lifecycle.expire_if_idle(now)
            return self.run_due_follow_ups(now)

    def record_activity(self, kind: str = "interaction") -> bool:
        """Typing, focus, scroll, modal open/close: anything the user does."""
        with self.lock:
            self.lifecycle.expire_if_idle()
            active = self.lifecycle.record_activity()
            if active:
                logger.debug(f"Activity '{kind}' on session {self.session.id}")
            return active

    def change_language(self, language: str) -> bool:
        with self.lock:
            self.language = normalize_language(language)
            if not self.record_activity("language_change"):
                return False
            self.session.language = self.language
            return True

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def send_message(self, content: str, question_id: Optional[str] = None) -> Optional[Message]:
        """
        Handle one user question and return the bot reply.

        Returns None without side effects when the session is inactive, the
        content is blank, or a previous reply is still being generated.
        Passing the question_id of an earlier question marks a rephrased attempt.
        """
        with self.lock:
            self.lifecycle.expire_if_idle()
            if not self.is_active or self.is_typing or not content or not content.strip():
                return None

            content = content.strip()
            session = self.session
            self.lifecycle.record_activity()

            session.user_context = classify(content, session.user_context, self.language)

            question_id = question_id or new_id()
            self._append(Message(
                content=content,
                type="user",
                language=self.language,
                timestamp=self.clock(),
                question_id=question_id,
            ))
            session.attempt_counts[question_id] = session.attempt_counts.get(question_id, 0) + 1

            context = session.user_context
            prompt_context = {
                "role": context.role,
                "issue_type": context.issue_type,
                "urgency": context.urgency,
                "conversation_history": list(context.conversation_history),
                "language": self.language,
                "session_started": session.start_time.strftime("%Y-%m-%d %H:%M:%S"),
            }
            self.is_typing = True

        try:
            response = self.ai.get_response(content, prompt_context)
        finally:
            with self.lock:
                self.is_typing = False

        with self.lock:
            if self.session is not session or not session.is_active:
                logger.info(f"Dropping reply for session {session.id}: no longer active")
                return None

            reply = Message(
                content=response.content,
                type="bot",
                language=self.language,
                timestamp=self.clock(),
                question_id=question_id,
                confidence=response.confidence,
                has_actions=bool(response.suggested_actions),
                suggested_actions=list(response.suggested_actions),
            )
            self._append(reply)
            self._schedule(self.plan_follow_up(response, question_id))
            self._save_transcript()
            return reply

    def previous_failed_attempts(self, question_id: Optional[str]) -> int:
        """Unhelpful answers so far: rated unhelpful in this session or re-asked under the same id."""
        session = self.session
        rephrased = session.attempt_counts.get(question_id, 0) - 1 if question_id else 0
        return max(session.unhelpful_feedback_count, rephrased, 0)

    def plan_follow_up(self, response: AIResponse, question_id: str) -> FollowUp:
        if not response.is_housing_related:
            kind = "off_topic_reminder"
        elif response.requires_urgent_action:
            kind = "urgent_warning"
        elif (response.confidence == "low"
              or self.previous_failed_attempts(question_id) >= FAILED_ATTEMPTS_BEFORE_VOLUNTEER):
            kind = "volunteer_offer"
        else:
            kind = "feedback_prompt"
        return FollowUp(kind=kind, delay_seconds=self.follow_up_delays[kind], question_id=question_id)

    def run_due_follow_ups(self, now: Optional[datetime] = None) -> List[Message]:
        now = now or self.clock()
        with self.lock:
            if not self.is_active:
                self.pending_follow_ups = []
                return []

            due = [item for item in self.pending_follow_ups if item.due_at <= now]
            self.pending_follow_ups = [item for item in self.pending_follow_ups if item.due_at > now]

            delivered = []
            for item in due:
                message = self._follow_up_message(item.follow_up, now)
                self._append(message)
                delivered.append(message)
            return delivered

    # ------------------------------------------------------------------
    # Feedback and volunteers
    # ------------------------------------------------------------------

    def submit_feedback(self, message_id: str, helpful: bool) -> Optional[Message]:
        """
        Rate a bot answer (or the feedback prompt attached to it).
        Each answer can be rated once; a second rating returns None.
        """
        with self.lock:
            self.lifecycle.expire_if_idle()
            if not self.is_active:
                return None

            target = self._find_rated_message(message_id)
            self.lifecycle.record_activity()
            if target.is_helpful is not None:
                return None
            target.is_helpful = helpful

            session = self.session
            if helpful:
                reply = Message(content=translate("feedback_thanks", self.language), type="bot",
                                language=self.language, timestamp=self.clock(), question_id=target.question_id)
            elif self.previous_failed_attempts(target.question_id) < FAILED_ATTEMPTS_BEFORE_VOLUNTEER:
                reply = Message(content=translate("ask_more_details", self.language), type="bot",
                                language=self.language, timestamp=self.clock(), question_id=target.question_id)
            else:
                reply = self._volunteer_offer(target.question_id, self.clock())

            if not helpful:
                session.unhelpful_feedback_count += 1

            self._append(reply)
            self._save_transcript()
            return reply

    def connect_volunteer(self) -> Optional[Message]:
        with self.lock:
            self.lifecycle.expire_if_idle()
            if not self.is_active or self.session.volunteer_connected:
                return None

            self.lifecycle.record_activity()
            session = self.session
            session.volunteer_connected = True
            self.volunteer_offer_open = False

            context = session.user_context
            message = Message(
                content=translate(
                    "volunteer_connecting",
                    self.language,
                    role=role_label(context.role, self.language),
                    issue=issue_label(context.issue_type, self.language),
                ),
                type="system",
                language=self.language,
                timestamp=self.clock(),
            )
            self._append(message)
            self._save_transcript()
            logger.info(f"Session {session.id} handed to a volunteer ({context.role}/{context.issue_type})")
            return message

    def dismiss_volunteer_offer(self) -> bool:
        with self.lock:
            self.volunteer_offer_open = False
            return self.record_activity("modal_close")

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict:
        with self.lock:
            session = self.session
            return {
                "session": session.to_dict() if session else None,
                "messages": [m.to_dict() for m in self.messages],
                "time_left_seconds": int(self.lifecycle.time_left().total_seconds()) if session else 0,
                "is_typing": self.is_typing,
                "volunteer_offer_open": self.volunteer_offer_open,
                "volunteer_status": (translate("volunteer_connected", self.language)
                                     if session and session.volunteer_connected else None),
                "pending_follow_ups": len(self.pending_follow_ups),
                "language": self.language,
                "quick_questions": quick_questions(self.language),
                "notice": None if self.is_active else translate("session_ended", self.language),
            }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _append(self, message: Message):
        self.messages.append(message)

    def _schedule(self, follow_up: FollowUp):
        due_at = self.clock() + timedelta(seconds=follow_up.delay_seconds)
        self.pending_follow_ups.append(ScheduledFollowUp(due_at=due_at, follow_up=follow_up))
        self.pending_follow_ups.sort(key=lambda item: item.due_at)

    def _follow_up_message(self, follow_up: FollowUp, now: datetime) -> Message:
        if follow_up.kind == "volunteer_offer":
            return self._volunteer_offer(follow_up.question_id, now)
        if follow_up.kind == "feedback_prompt":
            return Message(content=translate("feedback_prompt", self.language), type="feedback",
                           language=self.language, timestamp=now, question_id=follow_up.question_id,
                           has_actions=True)
        return Message(content=translate(follow_up.kind, self.language), type="system",
                       language=self.language, timestamp=now, question_id=follow_up.question_id)

    def _volunteer_offer(self, question_id: Optional[str], now: datetime) -> Message:
        self.volunteer_offer_open = True
        return Message(content=translate("volunteer_offer", self.language), type="system",
                       language=self.language, timestamp=now, question_id=question_id, has_actions=True)

    def _find_rated_message(self, message_id: str) -> Message:
        target = next((m for m in self.messages if m.id == message_id), None)
        if target is not None and target.type == "feedback":
            # A click on the prompt rates the answer it follows.
            target = next((m for m in reversed(self.messages)
                           if m.type == "bot" and m.question_id == target.question_id), None)
        if target is None or target.type != "bot" or target.question_id is None:
            raise MessageNotFound(f"No answer with id {message_id}")
        return target

    def _on_session_expired(self, message: Message):
        self.messages.append(message)
        self.pending_follow_ups = []
        self.volunteer_offer_open = False
        self._save_transcript()

    def _save_transcript(self):
        if self.transcript_store is not None and self.session is not None:
            self.transcript_store.save(self.session, list(self.messages))
