from datetime import timedelta

from WarmHome.legal_assistant.session_manager import InactivityTimer, SessionLifecycle
from WarmHome.legal_assistant.translations import translate


def test_start_returns_localized_welcome(clock):
    lifecycle = SessionLifecycle(clock=clock)
    welcome = lifecycle.start("id")

    assert lifecycle.is_active
    assert lifecycle.session.language == "id"
    assert lifecycle.session.start_time == clock.now
    assert welcome.type == "bot"
    assert welcome.content == translate("welcome", "id")


def test_expires_at_exactly_fifteen_minutes(clock):
    expired = []
    lifecycle = SessionLifecycle(clock=clock, on_expired=expired.append)
    lifecycle.start()

    clock.advance(minutes=14, seconds=59)
    assert lifecycle.expire_if_idle() is None
    assert lifecycle.is_active

    clock.advance(seconds=1)
    message = lifecycle.expire_if_idle()
    assert message.type == "system"
    assert message.content == translate("session_expired", "en", minutes=15)
    assert not lifecycle.is_active
    assert lifecycle.session.state == "inactive"

    assert lifecycle.expire_if_idle() is None
    assert expired == [message]


def test_activity_restarts_countdown(clock):
    lifecycle = SessionLifecycle(clock=clock)
    lifecycle.start()

    clock.advance(minutes=10)
    assert lifecycle.record_activity()
    clock.advance(minutes=10)

    assert lifecycle.expire_if_idle() is None
    assert lifecycle.time_left() == timedelta(minutes=5)


def test_activity_timestamp_never_moves_backwards(clock):
    lifecycle = SessionLifecycle(clock=clock)
    lifecycle.start()
    clock.advance(minutes=5)
    lifecycle.record_activity()

    assert lifecycle.record_activity(clock.now - timedelta(minutes=3))
    assert lifecycle.session.last_activity_time == clock.now


def test_activity_after_expiry_is_rejected(clock):
    lifecycle = SessionLifecycle(clock=clock)
    lifecycle.start()
    clock.advance(minutes=15)
    lifecycle.expire_if_idle()

    assert not lifecycle.record_activity()
    assert lifecycle.time_left() == timedelta(0)


def test_end_deactivates_once(clock):
    lifecycle = SessionLifecycle(clock=clock)
    lifecycle.start()
    lifecycle.session.volunteer_connected = True

    assert lifecycle.end() is not None
    assert not lifecycle.session.volunteer_connected
    assert lifecycle.end() is None


def test_background_timer_expires_idle_session(clock, timers):
    expired = []
    lifecycle = SessionLifecycle(clock=clock, on_expired=expired.append,
                                 background_timer=True, timer_factory=timers)
    lifecycle.start()

    timer = timers.created[-1]
    assert timer.interval == 15 * 60
    assert timer.started and timer.daemon

    clock.advance(minutes=15)
    timer.function()

    assert not lifecycle.is_active
    assert len(expired) == 1


def test_background_timer_reschedules_after_late_activity(clock, timers):
    lifecycle = SessionLifecycle(clock=clock, background_timer=True, timer_factory=timers)
    lifecycle.start()
    first = timers.created[-1]

    clock.advance(minutes=10)
    lifecycle.record_activity()
    assert first.cancelled

    # The old countdown fires anyway, 15 minutes after the start.
    clock.advance(minutes=5)
    first.function()

    assert lifecycle.is_active
    assert timers.created[-1].interval == 10 * 60


def test_start_cancels_previous_countdown(clock, timers):
    lifecycle = SessionLifecycle(clock=clock, background_timer=True, timer_factory=timers)
    lifecycle.start()
    first = timers.created[-1]
    lifecycle.start()

    assert first.cancelled
    assert len(timers.created) == 2


def test_inactivity_timer_cancel(timers):
    fired = []
    timer = InactivityTimer(lambda: fired.append(True), timer_factory=timers)
    timer.schedule(-5)

    assert timers.created[-1].interval == 0.0
    assert timer.pending
    timer.cancel()
    assert not timer.pending
    assert timers.created[-1].cancelled


def test_expired_message_names_configured_timeout(clock):
    lifecycle = SessionLifecycle(clock=clock, timeout=timedelta(minutes=30))
    lifecycle.start("vi")
    clock.advance(minutes=30)

    message = lifecycle.expire_if_idle()
    assert message.content == translate("session_expired", "vi", minutes=30)
    assert "30 phút" in message.content
