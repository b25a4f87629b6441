# COLLECTION: suburbs
# PURPOSE: One document per suburb with the aggregate housing statistics used by the charts

suburbs_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["id", "name", "state", "medianHousePrice"],
        "properties": {
            "id": {
                "bsonType": "string",
                "pattern": r"^[A-Z]{2,3}-[a-z0-9]+$",
                "description": "State code and suburb name without spaces, e.g. 'VIC-footscray'"
            },
            "name": {
                "bsonType": "string",
                "description": "Display name of the suburb"
            },
            "state": {
                "bsonType": "string",
                "description": "State or territory code (VIC, NSW, ...)"
            },
            "medianHousePrice": {
                "bsonType": ["int", "long", "double"],
                "minimum": 0,
                "description": "Median house price in dollars"
            },
            "averageRent": {
                "bsonType": ["int", "long", "double"],
                "minimum": 0,
                "description": "Average weekly rent in dollars"
            },
            "population": {
                "bsonType": ["int", "long"],
                "minimum": 0
            },
            "growthRate": {
                "bsonType": ["int", "double"],
                "description": "Yearly price growth percentage"
            }
        }
    }
}
