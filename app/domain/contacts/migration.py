"""One-time migration of legacy contact records

Older clients stored the VCF organization under an "organization" key. It is
folded into "address" when the record has no address of its own.
"""

from typing import Any


def migrate_contact_organization(record: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of record without "organization", moved to "address" if unset"""
    migrated = {key: value for key, value in record.items() if key != "organization"}
    organization = record.get("organization")

    if not isinstance(migrated.get("address"), str) and isinstance(organization, str) and organization:
        migrated["address"] = organization

    return migrated


def migrate_contacts(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [migrate_contact_organization(record) for record in records]
