"""Contact router - FastAPI endpoints for contact operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    BulkContactPayload,
    ContactCreate,
    ContactImportResponse,
    ContactPreviewResponse,
    ContactResponse,
    ContactSyncRequest,
)
from .service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["Contacts"])


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    """Dependency injection for ContactService"""
    return ContactService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[ContactResponse])
async def get_contacts(
    technician_id: Optional[str] = Query(None),
    service: ContactService = Depends(get_contact_service),
):
    """Get all contacts in the order they were added"""
    contacts = service.get_contacts(technician_id)
    return [service.to_response(c) for c in contacts]


@router.post("", response_model=ContactResponse)
async def create_contact(
    data: ContactCreate,
    service: ContactService = Depends(get_contact_service),
):
    """Create a single contact"""
    contact = service.create_contact(data)
    return service.to_response(contact)


@router.delete("")
async def clear_contacts(
    technician_id: Optional[str] = Query(None),
    service: ContactService = Depends(get_contact_service),
):
    """Delete all contacts"""
    return service.clear_contacts(technician_id)


# ============================================================================
# FILE IMPORT
# ============================================================================


@router.post("/import", response_model=ContactImportResponse)
async def import_contacts(
    file: UploadFile = File(...),
    technician_id: Optional[str] = Query(None),
    service: ContactService = Depends(get_contact_service),
):
    """Import contacts from an uploaded .csv or .vcf file"""
    contents = await file.read()
    return service.import_file(file.filename, contents, technician_id)


@router.post("/preview", response_model=ContactPreviewResponse)
async def preview_contacts(
    file: UploadFile = File(...),
    service: ContactService = Depends(get_contact_service),
):
    """Parse an uploaded .csv or .vcf file without saving it"""
    contents = await file.read()
    return service.preview_file(file.filename, contents)


@router.post("/sync", response_model=list[ContactResponse])
async def sync_contacts(
    data: ContactSyncRequest,
    service: ContactService = Depends(get_contact_service),
):
    """Save contacts from browser storage, migrating legacy organization fields"""
    contacts = service.sync_legacy_contacts(data.contacts, data.technicianId)
    return [service.to_response(c) for c in contacts]


# ============================================================================
# EXPORT
# ============================================================================


@router.get("/export")
async def export_contacts_csv(
    technician_id: Optional[str] = Query(None),
    service: ContactService = Depends(get_contact_service),
):
    """Export contacts as CSV"""
    return service.export_contacts_csv(technician_id)


@router.get("/export/bulk-json", response_model=BulkContactPayload, response_model_exclude_none=True)
async def export_bulk_json(
    technician_id: Optional[str] = Query(None),
    service: ContactService = Depends(get_contact_service),
):
    """Export contacts in the bulk JSON shape used by the contact backend"""
    return service.export_bulk_payload(technician_id)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    """Get a specific contact"""
    return service.to_response(service.get_contact(contact_id))


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    """Delete a contact"""
    return service.delete_contact(contact_id)


__all__ = [
    "router",
    "get_contacts",
    "create_contact",
    "clear_contacts",
    "import_contacts",
    "preview_contacts",
    "sync_contacts",
    "export_contacts_csv",
    "export_bulk_json",
    "get_contact",
    "delete_contact",
]
