"""Contact service - Business logic for contact operations"""

import json
import logging
from datetime import datetime
from io import StringIO
from typing import Any, Optional

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...config import MAX_CONTACT_FILE_SIZE
from ...models import Contact
from ...shared.id_generator import generate_contact_id
from .migration import migrate_contacts
from .parser import SUPPORTED_EXTENSIONS, UNSUPPORTED_FILE_MESSAGE, parse_contact_file
from .repository import ContactRepository
from .schemas import (
    BulkContactItem,
    BulkContactPayload,
    ContactCreate,
    ContactImportResponse,
    ContactPreviewResponse,
    ContactResponse,
    ParsedContact,
)

logger = logging.getLogger(__name__)

UNREADABLE_FILE_MESSAGE = "Error reading file. Please make sure the file is valid."
NO_CONTACTS_MESSAGE = "No contacts found in the file. Please check the file format."

# Keys of a stored contact record that are not extra fields
_RECORD_FIELDS = ("id", "name", "email", "phone", "address")


def name_to_first_last(name: Optional[str]) -> tuple[str, str]:
    """Split a full name at the first space into (first_name, last_name)"""
    trimmed = (name or "").strip()
    space = trimmed.find(" ")
    if space <= 0:
        return trimmed or "Contact", ""
    return trimmed[:space], trimmed[space + 1 :].strip()


def export_cell(value: Any) -> str:
    """Cell text for the CSV export: no commas or line breaks"""
    text = "" if value is None else str(value)
    text = text.replace("\r", " ").replace("\n", " ").replace(",", ";")
    return text.strip()


def _extra_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def record_to_parsed_contact(record: dict[str, Any]) -> ParsedContact:
    """Convert a loosely-typed stored record into a ParsedContact"""
    address = record.get("address")
    return ParsedContact(
        name=str(record.get("name") or ""),
        email=str(record.get("email") or ""),
        phone=str(record.get("phone") or ""),
        address=str(address) if address else None,
        extra={
            str(key): _extra_value(value)
            for key, value in record.items()
            if key not in _RECORD_FIELDS and value is not None
        },
    )


class ContactService:
    """Service layer for contact business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ContactRepository()

    @staticmethod
    def to_response(contact: Contact) -> ContactResponse:
        return ContactResponse(
            id=contact.contact_id,
            name=contact.name or "",
            email=contact.email or "",
            phone=contact.phone or "",
            address=contact.address,
            extra=contact.extra_fields or {},
            technicianId=contact.technician_id,
            created_at=contact.created_at,
        )

    def get_contacts(self, technician_id: Optional[str] = None) -> list[Contact]:
        """Get all contacts, optionally for one technician"""
        return self.repo.get_contacts(self.db, technician_id)

    def get_contact(self, contact_id: str) -> Contact:
        """Get a specific contact"""
        contact = self.repo.get_contact_by_id(self.db, contact_id)
        if not contact:
            raise HTTPException(status_code=404, detail="Contact not found")
        return contact

    def add_contacts(
        self, items: list[ParsedContact], technician_id: Optional[str] = None
    ) -> list[Contact]:
        """Assign ids to parsed contacts and save them"""
        rows = []
        for item in items:
            row = {
                "contact_id": generate_contact_id(),
                "name": item.name or "",
                "email": item.email or "",
                "phone": item.phone or "",
                "extra_fields": dict(item.extra) or None,
            }
            if item.address:
                row["address"] = item.address
            rows.append(row)

        if not rows:
            return []

        try:
            contacts = self.repo.create_contacts(self.db, technician_id, rows)
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save {len(rows)} contacts: {str(e)}")
            logger.exception(e)
            raise HTTPException(
                status_code=500, detail="Failed to save contacts. Please try again."
            )

        logger.info(f"✅ Saved {len(contacts)} contacts (technician_id: {technician_id})")
        return contacts

    def create_contact(self, data: ContactCreate) -> Contact:
        """Create a single contact"""
        item = ParsedContact(
            name=data.name or "",
            email=data.email or "",
            phone=data.phone or "",
            address=data.address,
        )
        if not (item.name.strip() or item.email.strip()):
            raise HTTPException(status_code=400, detail="A contact needs a name or an email")

        return self.add_contacts([item], data.technicianId)[0]

    def sync_legacy_contacts(
        self, records: list[dict[str, Any]], technician_id: Optional[str] = None
    ) -> list[Contact]:
        """Save contacts stored by older web clients, migrating legacy fields first"""
        items = [record_to_parsed_contact(record) for record in migrate_contacts(records)]
        items = [item for item in items if item.name or item.email]
        logger.info(f"📥 Syncing {len(items)} of {len(records)} stored contacts")
        return self.add_contacts(items, technician_id)

    # File Import Methods
    def read_contact_file(self, filename: Optional[str], contents: bytes) -> list[ParsedContact]:
        """Validate an uploaded file and decode it into contacts"""
        if not filename or not filename.lower().endswith(SUPPORTED_EXTENSIONS):
            logger.warning(f"⚠️ Rejected contact file with unsupported name: '{filename}'")
            raise HTTPException(status_code=400, detail=UNSUPPORTED_FILE_MESSAGE)

        if len(contents) > MAX_CONTACT_FILE_SIZE:
            limit_mb = MAX_CONTACT_FILE_SIZE / (1024 * 1024)
            raise HTTPException(
                status_code=400,
                detail=f"File size exceeds {limit_mb:g}MB limit. "
                f"Your file is {len(contents) / (1024 * 1024):.2f}MB.",
            )

        try:
            text = contents.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            logger.warning(f"⚠️ Could not decode contact file '{filename}': {e}")
            raise HTTPException(status_code=400, detail=UNREADABLE_FILE_MESSAGE)

        parsed = parse_contact_file(filename, text)
        if not parsed:
            logger.warning(f"⚠️ No contacts found in '{filename}'")
            raise HTTPException(status_code=400, detail=NO_CONTACTS_MESSAGE)

        return parsed

    def preview_file(self, filename: Optional[str], contents: bytes) -> ContactPreviewResponse:
        """Parse an uploaded file without saving anything"""
        parsed = self.read_contact_file(filename, contents)
        return ContactPreviewResponse(total=len(parsed), contacts=parsed)

    def import_file(
        self, filename: Optional[str], contents: bytes, technician_id: Optional[str] = None
    ) -> ContactImportResponse:
        """Parse an uploaded file and save every contact found in it"""
        logger.info(f"📥 Contact import requested: '{filename}' ({len(contents)} bytes)")

        parsed = self.read_contact_file(filename, contents)
        contacts = self.add_contacts(parsed, technician_id)

        logger.info(f"✅ Imported {len(contacts)} contacts from '{filename}'")
        return ContactImportResponse(
            imported=len(contacts),
            contacts=[self.to_response(c) for c in contacts],
        )

    def delete_contact(self, contact_id: str) -> dict:
        """Delete a contact"""
        contact = self.get_contact(contact_id)
        self.repo.delete_contact(self.db, contact)
        return {"message": "Contact deleted"}

    def clear_contacts(self, technician_id: Optional[str] = None) -> dict:
        """Delete all contacts"""
        deleted_count = self.repo.delete_all_contacts(self.db, technician_id)
        logger.info(f"🗑️ Cleared {deleted_count} contacts (technician_id: {technician_id})")
        return {
            "message": f"Successfully deleted {deleted_count} contact(s)",
            "deletedCount": deleted_count,
        }

    # Export Methods
    @staticmethod
    def build_bulk_payload(
        items: list[ParsedContact], technician_id: Optional[str] = None
    ) -> BulkContactPayload:
        """Convert contacts into the remote bulk JSON upload body"""
        rows = []
        for item in items:
            first_name, last_name = name_to_first_last(item.name)
            email = (item.email or "").strip()
            phone = (item.phone or "").strip()
            rows.append(
                BulkContactItem(
                    first_name=first_name or "Contact",
                    last_name=last_name or None,
                    email=email or None,
                    phone_number_1=phone or None,
                )
            )

        return BulkContactPayload(contacts=rows, technician_id=technician_id or "")

    def export_bulk_payload(self, technician_id: Optional[str] = None) -> BulkContactPayload:
        """Saved contacts in the remote bulk JSON shape"""
        contacts = self.get_contacts(technician_id)
        items = [
            ParsedContact(name=c.name or "", email=c.email or "", phone=c.phone or "")
            for c in contacts
        ]
        return self.build_bulk_payload(items, technician_id)

    def export_contacts_csv(self, technician_id: Optional[str] = None) -> StreamingResponse:
        """
        Export contacts as CSV that parse_csv can read back.

        The decoder has no quoting, so commas inside values are written as
        ";" and line breaks as spaces. Extra fields follow the fixed columns
        in order of first appearance.
        """
        try:
            contacts = self.get_contacts(technician_id)
            logger.info(f"📊 CSV export of {len(contacts)} contacts")

            extra_headers: list[str] = []
            for contact in contacts:
                for key in contact.extra_fields or {}:
                    if key not in extra_headers:
                        extra_headers.append(key)

            output = StringIO()
            header = ["Name", "Email", "Phone", "Address", *extra_headers]
            output.write(",".join(export_cell(h) for h in header) + "\n")
            for contact in contacts:
                extra = contact.extra_fields or {}
                row = [
                    contact.name,
                    contact.email,
                    contact.phone,
                    contact.address,
                    *(extra.get(key) for key in extra_headers),
                ]
                output.write(",".join(export_cell(value) for value in row) + "\n")

            filename = f"contacts_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"

            return StreamingResponse(
                iter([output.getvalue()]),
                media_type="text/csv",
                headers={
                    "Content-Disposition": f"attachment; filename={filename}",
                    "Cache-Control": "no-cache",
                },
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"❌ CSV export failed: {str(e)}")
            logger.exception(e)
            raise HTTPException(
                status_code=500, detail="Failed to export contacts. Please try again."
            )
