from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from .database import Base
from .shared.id_generator import generate_contact_id


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    # Public contact id ("<epoch-millis>-<suffix>") shared with the web client
    contact_id = Column(
        String(64), unique=True, nullable=False, index=True, default=generate_contact_id
    )
    technician_id = Column(String(255), nullable=True, index=True)  # Owning barber/technician
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    phone = Column(String(50), nullable=False, default="")
    address = Column(String(500), nullable=True)
    extra_fields = Column(JSON, nullable=True)  # Unrecognized CSV columns, keyed by header
    created_at = Column(DateTime(timezone=True), server_default=func.now())
