import random
import re
from datetime import datetime, timedelta, timezone

from passlib.hash import pbkdf2_sha256
from pymongo.errors import BulkWriteError

from WarmHome.mongodb_database import apply_validators
from WarmHome.mongodb_database.seed_data import (
    STATES,
    _insert,
    generate_suburbs_and_properties,
    placeholder_users,
    seed_database,
)
from WarmHome.mongodb_database.suburbs_db.suburbs_validator import suburbs_validator
from tests.fakes import FakeCollection, FakeDatabase

NOW = datetime(2025, 3, 3, tzinfo=timezone.utc)


def test_generates_ten_suburbs_per_state_with_ten_properties_each():
    suburbs, properties = generate_suburbs_and_properties(random.Random(7), NOW)

    assert len(suburbs) == 10 * len(STATES)
    assert len(properties) == 10 * len(suburbs)
    assert len({s["id"] for s in suburbs}) == len(suburbs)
    assert len({p["id"] for p in properties}) == len(properties)


def test_generated_documents_link_and_validate():
    suburbs, properties = generate_suburbs_and_properties(random.Random(7), NOW)
    suburb_ids = {s["id"] for s in suburbs}
    pattern = re.compile(suburbs_validator["$jsonSchema"]["properties"]["id"]["pattern"])

    assert "VIC-stkilda" in suburb_ids
    assert all(pattern.match(suburb_id) for suburb_id in suburb_ids)
    assert all(p["suburbId"] in suburb_ids for p in properties)
    assert all(NOW - timedelta(days=365) <= p["date"] <= NOW for p in properties)
    assert all(400000 <= p["price"] <= 2000000 for p in properties)
    assert all(0 <= s["growthRate"] <= 7 for s in suburbs)


def test_placeholder_users_have_hashed_passwords():
    users = placeholder_users()
    assert [u["email"] for u in users] == ["alice@example.com", "bob@example.com"]
    assert users[0]["password"] != "password123"
    assert pbkdf2_sha256.verify("password123", users[0]["password"])


def test_seed_database_counts():
    db = FakeDatabase()
    counts = seed_database(db, random.Random(1))

    assert counts == {"users": 2, "suburbs": 80, "properties": 800}
    assert db.properties.calls[-1] == ("insert_many", 800, False)


def test_insert_reports_partial_success():
    class DuplicateCollection(FakeCollection):
        def insert_many(self, documents, ordered=True):
            raise BulkWriteError({"nInserted": 3, "writeErrors": [{"code": 11000}]})

    assert _insert(DuplicateCollection("suburbs"), [{}] * 5) == 3


def test_apply_validator_updates_existing_collection():
    db = FakeDatabase(existing=["suburbs"])
    apply_validators.apply_validator(db, "suburbs", suburbs_validator, [([("id", 1)], {"unique": True})])

    assert db.commands == [(("collMod", "suburbs"), {"validator": suburbs_validator})]
    assert db.created == []
    assert db.suburbs.calls == [("create_index", [("id", 1)], {"unique": True})]


def test_apply_all_creates_missing_collections():
    db = FakeDatabase(existing=["users"])
    applied = apply_validators.apply_all(db)

    assert applied == ["Chat_Transcripts", "properties", "suburbs", "users"]
    assert sorted(name for name, _ in db.created) == ["Chat_Transcripts", "properties", "suburbs"]
    assert all("validator" in options for _, options in db.created)
    assert db.commands[0][0] == ("collMod", "users")


def test_every_validator_is_a_json_schema():
    for validator, _ in apply_validators.COLLECTIONS.values():
        schema = validator["$jsonSchema"]
        assert schema["bsonType"] == "object"
        assert schema["required"]
