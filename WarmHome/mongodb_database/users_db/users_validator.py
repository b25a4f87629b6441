users_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["id", "name", "email", "password"],
        "properties": {
            "id": {
                "bsonType": "string"
            },
            "name": {
                "bsonType": "string",
                "description": "Enter the user's full name as a string"
            },
            "email": {
                "bsonType": "string",
                "pattern": r"^.+@.+\..+$",
                "description": "Enter a valid email address"
            },
            "password": {
                "bsonType": "string",
                "description": "pbkdf2_sha256 password hash"
            },
            "isTechDisadvantaged": {
                "bsonType": "bool",
                "description": "User needs simplified chat interactions"
            }
        }
    }
}
