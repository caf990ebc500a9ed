"""Contact repository - Database operations for contacts"""

from typing import Any, Optional

from sqlalchemy.orm import Session

from ...models import Contact


class ContactRepository:
    """Repository for contact database operations"""

    @staticmethod
    def get_contacts(db: Session, technician_id: Optional[str] = None) -> list[Contact]:
        """Get contacts in the order they were added, optionally for one technician"""
        query = db.query(Contact)

        if technician_id:
            query = query.filter(Contact.technician_id == technician_id)

        return query.order_by(Contact.id.asc()).all()

    @staticmethod
    def get_contact_by_id(db: Session, contact_id: str) -> Optional[Contact]:
        """Get a specific contact by its public id"""
        return db.query(Contact).filter(Contact.contact_id == contact_id).first()

    @staticmethod
    def create_contacts(
        db: Session, technician_id: Optional[str], rows: list[dict[str, Any]]
    ) -> list[Contact]:
        """Create a batch of contacts in a single commit"""
        contacts = [Contact(technician_id=technician_id, **row) for row in rows]
        db.add_all(contacts)
        db.commit()
        for contact in contacts:
            db.refresh(contact)
        return contacts

    @staticmethod
    def delete_contact(db: Session, contact: Contact) -> None:
        """Delete a contact"""
        db.delete(contact)
        db.commit()

    @staticmethod
    def delete_all_contacts(db: Session, technician_id: Optional[str] = None) -> int:
        """Delete every contact, optionally only one technician's. Returns the count."""
        query = db.query(Contact)

        if technician_id:
            query = query.filter(Contact.technician_id == technician_id)

        deleted_count = query.delete(synchronize_session=False)
        db.commit()
        return deleted_count
