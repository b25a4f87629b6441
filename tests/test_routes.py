from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

from WarmHome.app import create_app, services
from WarmHome.app.config import TestingConfig
from WarmHome.legal_assistant.ai_gateway import LegalHousingAI
from WarmHome.legal_assistant.translations import quick_questions, translate
from tests.conftest import FakeCompletion
from tests.fakes import FakeCollection, FakeDatabase

CLEAR = "Your landlord must return the bond within 14 days."


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def app(clock, db):
    app = create_app(TestingConfig)
    app.config.update(
        MONGO_DATABASE=db,
        CHAT_CLOCK=clock,
        LEGAL_HOUSING_AI=LegalHousingAI(FakeCompletion(CLEAR), clock=clock),
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def send(client, message, **extra):
    return client.post('/api/chat/message', json=dict(message=message, **extra))


# ----------------------------------------------------------------------
# Data API
# ----------------------------------------------------------------------

def test_states(client, db):
    db.collections["suburbs"] = FakeCollection("suburbs", [{"state": "VIC"}, {"state": "ACT"}])
    response = client.get('/api/data/states')
    assert response.status_code == 200
    assert response.get_json() == ["ACT", "VIC"]


def test_suburb_overviews_are_json_safe(client, db):
    oid = ObjectId()
    db.collections["suburbs"] = FakeCollection("suburbs", [
        {"_id": oid, "id": "VIC-footscray", "updated": datetime(2025, 1, 1, tzinfo=timezone.utc)},
    ])

    [suburb] = client.get('/api/data/suburb-overviews').get_json()
    assert suburb["_id"] == str(oid)
    assert suburb["updated"] == "2025-01-01T00:00:00+00:00"


def test_search_parses_price_band(client, db):
    response = client.get('/api/data/search?region=VIC-footscray&min=350000&max=')
    body = response.get_json()

    assert response.status_code == 200
    assert body["total"] == 0
    assert body["query"]["price"]["$gte"] == 350000
    assert body["query"]["suburbId"]["$regex"] == "^VIC-footscray$"


def test_properties_with_filter(client, db):
    db.collections["properties"] = FakeCollection("properties", [{"id": "NSW-manly-p1"}])
    response = client.get('/api/data/properties', query_string={"query": '{"bedrooms": 3}'})

    assert response.get_json() == [{"id": "NSW-manly-p1"}]
    assert db.properties.calls[-1] == ("find", {"bedrooms": 3})


@pytest.mark.parametrize("url, args, error", [
    ('/api/data/properties', {"query": "not-json"}, "Failed to fetch properties"),
    ('/api/data/properties', {"query": '{"$where": "1"}'}, "Failed to fetch properties"),
    ('/api/data/search', {"min": "cheap"}, "Failed to fetch data"),
])
def test_bad_queries_fail_with_error_message(client, url, args, error):
    response = client.get(url, query_string=args)
    assert response.status_code == 500
    assert response.get_json() == {"error": error}


def test_database_failure_is_reported(client, db):
    class Unavailable(FakeCollection):
        def aggregate(self, pipeline):
            raise ConnectionError("no servers available")

    db.collections["suburbs"] = Unavailable("suburbs")
    response = client.get('/api/data/city-comparison')
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to fetch data"}


# ----------------------------------------------------------------------
# Health and seeding
# ----------------------------------------------------------------------

def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "database": True}


def test_health_without_database(app, client):
    app.config["MONGO_DATABASE"] = FakeDatabase(reachable=False)
    response = client.get('/health')
    assert response.status_code == 503
    assert response.get_json()["database"] is False


def test_seed(client, db):
    response = client.get('/seed')
    assert response.status_code == 200
    assert response.get_json()["inserted"] == {"users": 2, "suburbs": 80, "properties": 800}


def test_seed_disabled(app, client):
    app.config["ENABLE_SEED_ROUTE"] = False
    assert client.get('/seed').status_code == 404


# ----------------------------------------------------------------------
# Chat
# ----------------------------------------------------------------------

def test_start_in_language(client):
    body = client.post('/api/chat/start', json={"language": "vi"}).get_json()

    assert body["status"] == "success"
    assert body["language"] == "vi"
    assert body["session"]["is_active"]
    assert body["messages"][0]["content"] == translate("welcome", "vi")
    assert body["quick_questions"] == quick_questions("vi")


def test_message_round_trip(client):
    response = send(client, "As a tenant, my landlord won't return my $1200 deposit after 2 months")
    body = response.get_json()

    assert response.status_code == 200
    assert body["reply"]["content"] == CLEAR
    assert body["reply"]["type"] == "bot"
    assert body["follow_ups"][0]["type"] == "feedback"
    assert body["user_context"]["role"] == "tenant"
    assert body["user_context"]["issue_type"] == "deposit"
    assert body["user_context"]["specific_details"] == ["$1200", "2 months"]

    messages = client.get('/api/chat/session').get_json()["messages"]
    assert [m["type"] for m in messages] == ["bot", "user", "bot", "feedback"]


@pytest.mark.parametrize("payload", [None, {}, {"message": ""}, {"message": "   "}, {"message": 42},
                                     {"message": "rent?", "question_id": 7}])
def test_message_validation(client, payload):
    response = client.post('/api/chat/message', json=payload)
    assert response.status_code == 400
    assert response.get_json()["status"] == "invalid_request"


def test_message_after_expiry(client, clock):
    client.post('/api/chat/start')
    clock.advance(minutes=15)

    response = send(client, "Is my landlord allowed to do this?")
    assert response.status_code == 409
    assert response.get_json()["status"] == "session_inactive"

    body = client.get('/api/chat/session').get_json()
    assert not body["session"]["is_active"]
    assert body["messages"][-1]["content"] == translate("session_expired", "en", minutes=15)
    assert body["notice"] == translate("session_ended", "en")

    restarted = client.post('/api/chat/start').get_json()
    assert restarted["session"]["is_active"]
    assert restarted["session"]["id"] != body["session"]["id"]


def test_feedback(client):
    reply = send(client, "Can my landlord keep my bond?").get_json()["reply"]

    assert client.post('/api/chat/feedback', json={"message_id": "nope", "helpful": True}).status_code == 404
    assert client.post('/api/chat/feedback', json={"message_id": reply["id"], "helpful": "yes"}).status_code == 400

    response = client.post('/api/chat/feedback', json={"message_id": reply["id"], "helpful": True})
    assert response.status_code == 200
    assert response.get_json()["reply"]["content"] == translate("feedback_thanks", "en")

    again = client.post('/api/chat/feedback', json={"message_id": reply["id"], "helpful": False})
    assert again.status_code == 409
    assert again.get_json()["status"] == "already_rated"


def test_volunteer_handoff(client):
    send(client, "As a tenant, how do I get my deposit back?")

    first = client.post('/api/chat/volunteer').get_json()
    assert first["status"] == "success"
    assert first["message"]["content"] == translate("volunteer_connecting", "en", role="tenant", issue="a deposit")

    assert client.post('/api/chat/volunteer').get_json()["status"] == "already_connected"
    assert client.post('/api/chat/volunteer/dismiss').status_code == 200


def test_language_change(client):
    client.post('/api/chat/start')
    response = client.post('/api/chat/language', json={"language": "zh"})

    assert response.get_json()["language"] == "zh"
    assert client.post('/api/chat/language', json={}).status_code == 400


def test_activity_and_end(client, clock):
    client.post('/api/chat/start')
    clock.advance(minutes=5)

    activity = client.post('/api/chat/activity', json={"kind": "typing"}).get_json()
    assert activity["time_left_seconds"] == 15 * 60

    assert client.post('/api/chat/end').status_code == 200
    assert client.post('/api/chat/end').status_code == 409
    assert client.post('/api/chat/activity').status_code == 409


def test_new_chat_replaces_session(client):
    first = client.post('/api/chat/start').get_json()["session"]["id"]
    second = client.post('/api/chat/new').get_json()
    assert second["session"]["id"] != first
    assert len(second["messages"]) == 1


def test_clients_have_separate_sessions(app):
    one, two = app.test_client(), app.test_client()
    first = one.post('/api/chat/start').get_json()["session"]["id"]
    second = two.post('/api/chat/start').get_json()["session"]["id"]
    assert first != second


def test_quick_questions(client):
    assert client.get('/api/chat/quick-questions?language=hi').get_json() == {
        "language": "hi",
        "questions": quick_questions("hi"),
    }
    assert client.get('/api/chat/quick-questions?language=xx').get_json()["language"] == "en"


def test_expired_session_survives_other_clients(app, clock):
    first, second = app.test_client(), app.test_client()
    first.post('/api/chat/start')
    clock.advance(minutes=15)
    second.post('/api/chat/start')

    response = send(first, "My landlord won't return my $1200 deposit after 2 months")
    assert response.status_code == 409
    assert response.get_json()["status"] == "session_inactive"

    body = first.get('/api/chat/session').get_json()
    assert not body["session"]["is_active"]
    assert body["messages"][-1]["content"] == translate("session_expired", "en", minutes=15)


def test_dropped_session_still_reports_expiry(app, clock):
    first, second = app.test_client(), app.test_client()
    first_id = first.post('/api/chat/start').get_json()["session"]["id"]
    clock.advance(minutes=15 + 60)
    second.post('/api/chat/start')

    response = send(first, "Can my landlord keep my bond?")
    assert response.status_code == 409
    assert response.get_json()["status"] == "session_inactive"

    body = first.get('/api/chat/session').get_json()
    assert body["session"]["id"] != first_id
    assert not body["session"]["is_active"]
    assert body["messages"][-1]["content"] == translate("session_expired", "en", minutes=15)

    assert first.post('/api/chat/start').get_json()["session"]["is_active"]


def test_busy_when_reply_is_rejected_on_active_session(app, client):
    client.post('/api/chat/start')
    [orchestrator] = app.config["CHAT_ORCHESTRATORS"].values()
    orchestrator.send_message = lambda *args, **kwargs: None

    response = send(client, "Can my landlord keep my bond?")
    assert response.status_code == 409
    assert response.get_json()["status"] == "busy"


def test_orchestrator_created_under_registry_lock(app, monkeypatch):
    held = []

    class Recording(services.ConversationOrchestrator):
        def start(self):
            held.append(services._registry_lock.locked())
            return super().start()

    monkeypatch.setattr(services, "ConversationOrchestrator", Recording)
    app.test_client().post('/api/chat/start')
    assert held == [True]


def test_prune_tolerates_registry_growth(clock):
    registry = {}

    class Growing:
        is_active = True

        def refresh(self, now):
            registry.setdefault("late", Growing())

    registry["early"] = Growing()
    services._prune_stale(registry, set(), clock(), timedelta(minutes=75))
    assert set(registry) == {"early", "late"}
