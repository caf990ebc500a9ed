"""Contact domain schemas - Pydantic models for parsing and validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class ParsedContact(BaseModel):
    """Contact record decoded from an uploaded CSV or VCF file"""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: Optional[str] = None
    # Unrecognized CSV columns, keyed by lowercased header in header order
    extra: dict[str, str] = Field(default_factory=dict)


class ContactCreate(BaseModel):
    """Schema for creating a single contact"""

    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    technicianId: Optional[str] = None


class ContactResponse(BaseModel):
    """Schema for contact response"""

    id: str
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    extra: dict[str, str] = Field(default_factory=dict)
    technicianId: Optional[str] = None
    created_at: Optional[datetime] = None


class ContactSyncRequest(BaseModel):
    """Contacts kept in browser storage by older web clients"""

    contacts: list[dict[str, Any]]
    technicianId: Optional[str] = None


class ContactImportResponse(BaseModel):
    """Result of importing an uploaded contact file"""

    imported: int
    contacts: list[ContactResponse]


class ContactPreviewResponse(BaseModel):
    """Parsed contacts from an uploaded file, not yet saved"""

    total: int
    contacts: list[ParsedContact]


class BulkContactItem(BaseModel):
    """One row of the remote bulk JSON upload body"""

    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number_1: Optional[str] = None


class BulkContactPayload(BaseModel):
    """Remote bulk JSON upload body"""

    shop_id: str = ""
    technician_id: str = ""
    contacts: list[BulkContactItem]
