import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from .models import ChatSession, Message, utcnow
from .translations import normalize_language, translate

logger = logging.getLogger(__name__)

INACTIVITY_TIMEOUT = timedelta(minutes=15)


class InactivityTimer:
    """
    Cancellable one-shot countdown running on a daemon thread.
    Rescheduling cancels the pending countdown first.
    """

    def __init__(self, callback: Callable[[], None], timer_factory=threading.Timer):
        self.callback = callback
        self.timer_factory = timer_factory
        self._timer = None

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def schedule(self, delay_seconds: float):
        self.cancel()
        timer = self.timer_factory(max(0.0, delay_seconds), lambda: self._fire(timer))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def cancel(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, timer):
        # A cancelled countdown can still fire once it has started running.
        if self._timer is timer:
            self._timer = None
        self.callback()


class SessionLifecycle:
    """
    Active/inactive state machine for one client's chat session.

    Expiry is checked lazily on every interaction through expire_if_idle().
    With background_timer enabled an InactivityTimer also fires the check
    when the countdown runs out, so an idle session expires without a request.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow, timeout: timedelta = INACTIVITY_TIMEOUT,
                 on_expired: Optional[Callable[[Message], None]] = None, background_timer: bool = False,
                 lock=None, timer_factory=threading.Timer):
        self.clock = clock
        self.timeout = timeout
        self.on_expired = on_expired
        self.lock = lock or threading.RLock()
        self.session: Optional[ChatSession] = None
        self.timer = InactivityTimer(self._on_timer, timer_factory) if background_timer else None

    @property
    def is_active(self) -> bool:
        return self.session is not None and self.session.is_active

    def start(self, language: str = "en") -> Message:
        """Create a fresh active session and return its welcome message."""
        language = normalize_language(language)
        now = self.clock()
        with self.lock:
            self._cancel_timer()
            self.session = ChatSession(start_time=now, last_activity_time=now, language=language)
            self._schedule_timer(self.timeout)
            logger.info(f"Chat session {self.session.id} started ({language})")
            return Message(content=translate("welcome", language), type="bot", language=language, timestamp=now)

    def record_activity(self, now: Optional[datetime] = None) -> bool:
        """Restart the inactivity countdown. Returns False when there is no active session."""
        now = now or self.clock()
        with self.lock:
            if not self.is_active:
                return False
            if now > self.session.last_activity_time:
                self.session.last_activity_time = now
            self._schedule_timer(self.timeout)
            return True

    def idle_for(self, now: Optional[datetime] = None) -> timedelta:
        now = now or self.clock()
        return now - self.session.last_activity_time

    def time_left(self, now: Optional[datetime] = None) -> timedelta:
        if not self.is_active:
            return timedelta(0)
        return max(timedelta(0), self.timeout - self.idle_for(now))

    def expire_if_idle(self, now: Optional[datetime] = None) -> Optional[Message]:
        """Deactivate the session once it has been idle for the full timeout."""
        now = now or self.clock()
        with self.lock:
            if not self.is_active or self.idle_for(now) < self.timeout:
                return None
            logger.info(f"Chat session {self.session.id} expired after {self.timeout} of inactivity")
            return self._deactivate(now)

    def end(self, now: Optional[datetime] = None) -> Optional[Message]:
        """End the session immediately, with the same effect as an expiry."""
        now = now or self.clock()
        with self.lock:
            if not self.is_active:
                return None
            return self._deactivate(now)

    def close(self):
        """Release the background timer; the session itself is left as is."""
        self._cancel_timer()

    def _deactivate(self, now: datetime) -> Message:
        self.session.is_active = False
        self.session.volunteer_connected = False
        self._cancel_timer()
        message = Message(
            content=translate("session_expired", self.session.language,
                              minutes=int(self.timeout.total_seconds() // 60)),
            type="system",
            language=self.session.language,
            timestamp=now,
        )
        if self.on_expired:
            self.on_expired(message)
        return message

    def _on_timer(self):
        with self.lock:
            if not self.is_active:
                return
            if self.expire_if_idle() is None:
                # Activity slipped in between the countdown and this check.
                self._schedule_timer(self.time_left())

    def _schedule_timer(self, delay: timedelta):
        if self.timer is not None:
            self.timer.schedule(delay.total_seconds())

    def _cancel_timer(self):
        if self.timer is not None:
            self.timer.cancel()
