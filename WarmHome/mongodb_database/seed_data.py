import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from passlib.hash import pbkdf2_sha256
from pymongo.errors import BulkWriteError

from .property_queries import suburb_slug

logger = logging.getLogger(__name__)

PROPERTIES_PER_SUBURB = 10

STATES = {
    "VIC": ["Footscray", "Richmond", "Carlton", "St Kilda", "Brunswick", "Hawthorn", "Fitzroy", "South Yarra", "Docklands", "Melton"],
    "NSW": ["Parramatta", "Liverpool", "Penrith", "Chatswood", "Manly", "Bondi", "Newtown", "Burwood", "Bankstown", "Blacktown"],
    "QLD": ["South Brisbane", "Fortitude Valley", "Sunnybank", "Chermside", "Logan", "Ipswich", "Springfield", "Cairns North", "Townsville", "Toowoomba"],
    "WA": ["Fremantle", "Joondalup", "Cottesloe", "Scarborough", "Subiaco", "Claremont", "Mandurah", "Armadale", "Rockingham", "Bunbury"],
    "SA": ["Glenelg", "Norwood", "Prospect", "Semaphore", "Mawson Lakes", "Unley", "Henley Beach", "Burnside", "Elizabeth", "Port Adelaide"],
    "TAS": ["Hobart", "Launceston", "Devonport", "Burnie", "Glenorchy", "Kingston", "New Norfolk", "Ulverstone", "George Town", "Scottsdale"],
    "NT": ["Darwin", "Palmerston", "Alice Springs", "Katherine", "Nhulunbuy", "Tennant Creek", "Humpty Doo", "Howard Springs", "Berry Springs", "Coolalinga"],
    "ACT": ["Belconnen", "Woden", "Gungahlin", "Tuggeranong", "Kingston", "Manuka", "Braddon", "Narrabundah", "Watson", "Lyneham"],
}

SAMPLE_USERS = [
    {"id": "u1", "name": "Alice Nguyen", "email": "alice@example.com", "password": "password123",
     "isTechDisadvantaged": True},
    {"id": "u2", "name": "Bob Tran", "email": "bob@example.com", "password": "password456"},
]


def placeholder_users() -> List[Dict]:
    """Sample users with hashed passwords."""
    return [dict(user, password=pbkdf2_sha256.hash(user["password"])) for user in SAMPLE_USERS]


def generate_suburbs_and_properties(rng: Optional[random.Random] = None,
                                    now: Optional[datetime] = None) -> Tuple[List[Dict], List[Dict]]:
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    suburbs, properties = [], []

    for state, names in STATES.items():
        for name in names:
            suburb_id = f"{state}-{suburb_slug(name)}"
            suburbs.append({
                "id": suburb_id,
                "name": name,
                "state": state,
                "medianHousePrice": rng.randint(500000, 1500000),
                "averageRent": rng.randint(300, 800),
                "population": rng.randint(5000, 50000),
                "growthRate": round(rng.random() * 7, 1),
            })

            for i in range(PROPERTIES_PER_SUBURB):
                properties.append({
                    "id": f"{suburb_id}-p{i}",
                    "suburbId": suburb_id,
                    "address": f"{rng.randint(1, 200)} {name} St, {name} {state}",
                    "price": rng.randint(400000, 2000000),
                    "bedrooms": rng.randint(1, 5),
                    "bathrooms": rng.randint(1, 3),
                    "type": rng.choice(["House", "Apartment", "Townhouse"]),
                    "status": rng.choice(["For Sale", "Sold", "For Rent"]),
                    "description": f"Lovely {name} property with great amenities.",
                    "date": now - timedelta(days=rng.randint(0, 365)),
                })

    return suburbs, properties


def _insert(collection, documents: List[Dict]) -> int:
    try:
        result = collection.insert_many(documents, ordered=False)
        return len(result.inserted_ids)
    except BulkWriteError as e:
        inserted = e.details.get("nInserted", 0)
        logger.warning(f"{collection.name}: {len(documents) - inserted} documents skipped during seeding")
        return inserted


def seed_database(db, rng: Optional[random.Random] = None) -> Dict[str, int]:
    """Insert sample users, suburbs and properties. Returns inserted counts."""
    suburbs, properties = generate_suburbs_and_properties(rng)
    counts = {
        "users": _insert(db.users, placeholder_users()),
        "suburbs": _insert(db.suburbs, suburbs),
        "properties": _insert(db.properties, properties),
    }
    logger.info(f"Seeding completed: {counts}")
    return counts
