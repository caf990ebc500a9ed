"""Client-side identifiers for contacts that have no server-assigned id"""

import secrets
import string
import time

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def generate_contact_id() -> str:
    """
    Generate a contact id of the form "<epoch-millis>-<base36 suffix>".

    Not globally unique; collisions within the same millisecond are only
    made unlikely by the random suffix.
    """
    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{timestamp}-{suffix}"
