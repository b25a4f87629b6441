# COLLECTION: properties
# PURPOSE: Individual listings and sales, linked to their suburb through suburbId

properties_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["id", "suburbId", "address", "price", "date"],
        "properties": {
            "id": {
                "bsonType": "string",
                "description": "Listing identifier, e.g. 'VIC-footscray-p0'"
            },
            "suburbId": {
                "bsonType": "string",
                "description": "id of the suburb document this property belongs to"
            },
            "address": {
                "bsonType": "string"
            },
            "price": {
                "bsonType": ["int", "long", "double"],
                "minimum": 0,
                "description": "Asking, sale or rent price in dollars"
            },
            "bedrooms": {
                "bsonType": ["int", "null"]
            },
            "bathrooms": {
                "bsonType": ["int", "null"]
            },
            "type": {
                "enum": ["House", "Apartment", "Townhouse", "Unit", "Land"],
                "description": "Dwelling type"
            },
            "status": {
                "enum": ["For Sale", "Sold", "For Rent"],
                "description": "Listing status"
            },
            "description": {
                "bsonType": ["string", "null"]
            },
            "date": {
                "bsonType": "date",
                "description": "Listing or sale date (drives the yearly trend line)"
            }
        }
    }
}
