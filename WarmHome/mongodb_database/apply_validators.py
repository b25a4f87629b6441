import logging

from WarmHome.mongodb_database.connection import get_database
from WarmHome.mongodb_database.suburbs_db.suburbs_validator import suburbs_validator
from WarmHome.mongodb_database.properties_db.properties_validator import properties_validator
from WarmHome.mongodb_database.users_db.users_validator import users_validator
from WarmHome.mongodb_database.chat_transcripts_db.chat_transcripts_validator import chat_transcripts_validator

logger = logging.getLogger(__name__)

# collection name -> (validator, [(index keys, index options)])
COLLECTIONS = {
    "suburbs": (suburbs_validator, [
        ([("id", 1)], {"unique": True}),
        ([("state", 1), ("name", 1)], {}),
    ]),
    "properties": (properties_validator, [
        ([("id", 1)], {"unique": True}),
        ([("suburbId", 1)], {}),
        ([("date", -1), ("price", -1)], {}),
    ]),
    "users": (users_validator, [
        ([("email", 1)], {"unique": True}),
    ]),
    "Chat_Transcripts": (chat_transcripts_validator, [
        ([("session_id", 1)], {"unique": True}),
        ([("updated_at", 1)], {}),
    ]),
}


def apply_validator(db, collection_name, validator, indexes=()):
    """Create the collection with its validator, or update the validator if it exists."""
    if collection_name in db.list_collection_names():
        db.command("collMod", collection_name, validator=validator)
        logger.info(f"Validator applied to existing collection '{collection_name}'")
    else:
        db.create_collection(collection_name, validator=validator)
        logger.info(f"Collection '{collection_name}' created with validator")

    for keys, options in indexes:
        db[collection_name].create_index(keys, **options)


def apply_all(db):
    for name, (validator, indexes) in COLLECTIONS.items():
        apply_validator(db, name, validator, indexes)
    return sorted(COLLECTIONS)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    applied = apply_all(get_database())
    logger.info(f"Collections ready: {applied}")
