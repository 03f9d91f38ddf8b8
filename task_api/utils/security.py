"""Password hashing.

bcrypt is used directly: ``gensalt()`` gives every digest its own salt and
``checkpw`` does the comparison in constant time.
"""

import bcrypt


def get_password_hash(password: str) -> str:
    # bcrypt only looks at the first 72 bytes; the schema caps password length below that
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed digest
        return False


# Digest used to keep login timing equal when the username does not exist
DUMMY_HASH = get_password_hash("task-api-timing-dummy")
