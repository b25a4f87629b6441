from datetime import datetime, timedelta, timezone

import pytest

from WarmHome.legal_assistant.ai_gateway import LegalHousingAI
from WarmHome.legal_assistant.orchestrator import ConversationOrchestrator

START = datetime(2025, 3, 3, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


class FakeCompletion:
    """Returns queued replies in order (the last one repeats); exceptions are raised."""

    def __init__(self, *replies):
        self.replies = list(replies) or ["Your landlord must return the bond within 14 days."]
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


class FakeTimer:
    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True


class RecordingTranscriptStore:
    def __init__(self):
        self.saves = []

    def save(self, session, messages):
        self.saves.append((session.id, [m.type for m in messages]))
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timers():
    created = []

    def factory(interval, function):
        timer = FakeTimer(interval, function)
        created.append(timer)
        return timer

    factory.created = created
    return factory


@pytest.fixture
def make_orchestrator(clock):
    def build(*replies, **kwargs):
        completion = FakeCompletion(*replies)
        orchestrator = ConversationOrchestrator(LegalHousingAI(completion, clock=clock), clock=clock, **kwargs)
        orchestrator.completion = completion
        orchestrator.start()
        return orchestrator
    return build
