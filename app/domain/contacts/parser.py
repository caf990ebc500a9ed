"""Contact file decoders - CSV and vCard text into ParsedContact records

Both decoders are pure functions of the uploaded text. Missing columns or
properties degrade to empty strings; a record is kept only when it has a
name or an email.
"""

import logging
import re

from .schemas import ParsedContact

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".vcf")
UNSUPPORTED_FILE_MESSAGE = "Unsupported file format. Please upload a CSV or VCF file."

# CSV header categories, resolved in this order. A header belongs to a
# category when it contains any of the listed substrings; the first such
# header (left to right) is used for that category.
HEADER_CATEGORIES = (
    ("name", ("name", "full name", "contact")),
    ("email", ("email", "e-mail")),
    ("phone", ("phone", "mobile", "tel")),
    ("address", ("address", "location", "street", "city")),
)

# Headers containing any of these terms are not copied into ParsedContact.extra
RESERVED_HEADER_TERMS = ("name", "email", "phone", "address", "location", "street", "city")

# vCard properties read by the decoder
VCARD_PROPERTIES = frozenset({"FN", "N", "EMAIL", "TEL", "ADR", "ORG"})

_VCARD_BEGIN = re.compile(r"BEGIN:VCARD", re.IGNORECASE)
_PROPERTY_SEPARATOR = re.compile(r"[;:]")
_PHONE_DISALLOWED = re.compile(r"[^\d+()\-]")


class UnsupportedContactFile(ValueError):
    """Raised when an uploaded file is neither CSV nor VCF"""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(UNSUPPORTED_FILE_MESSAGE)


# ============================================================================
# CSV
# ============================================================================


def _resolve_column(headers: list[str], terms: tuple[str, ...]) -> int:
    """Index of the first header containing any of terms, or -1"""
    for index, header in enumerate(headers):
        if any(term in header for term in terms):
            return index
    return -1


def _cell(values: list[str], index: int) -> str:
    if 0 <= index < len(values):
        return values[index]
    return ""


def parse_csv(text: str) -> list[ParsedContact]:
    """
    Parse comma-separated text with a header row into contacts.

    Quoted fields are not supported: a literal comma inside a value shifts
    the remaining columns of that row.
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return []

    headers = [header.strip().lower() for header in lines[0].split(",")]
    columns = {
        category: _resolve_column(headers, terms) for category, terms in HEADER_CATEGORIES
    }
    extra_columns = [
        (index, header)
        for index, header in enumerate(headers)
        if not any(term in header for term in RESERVED_HEADER_TERMS)
    ]

    contacts = []
    for line in lines[1:]:
        values = [value.strip() for value in line.split(",")]
        address_index = columns["address"]

        contact = ParsedContact(
            name=_cell(values, columns["name"]),
            email=_cell(values, columns["email"]),
            phone=_cell(values, columns["phone"]),
            address=_cell(values, address_index) if address_index >= 0 else None,
            extra={header: _cell(values, index) for index, header in extra_columns},
        )

        if contact.name or contact.email:
            contacts.append(contact)

    logger.debug(f"Parsed {len(contacts)} contacts from {len(lines) - 1} CSV rows")
    return contacts


# ============================================================================
# VCF
# ============================================================================


def _scan_card(chunk: str) -> dict[str, str]:
    """
    Map each known property to the first line that declares it.

    Scanning stops at END:VCARD so trailing text before the next card is
    ignored. Later repeats of a property (a second EMAIL, ...) are dropped.
    """
    properties: dict[str, str] = {}
    for raw_line in chunk.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        name = _PROPERTY_SEPARATOR.split(line, maxsplit=1)[0].strip().upper()
        if name == "END" and line.upper().startswith("END:VCARD"):
            break
        if name in VCARD_PROPERTIES and name not in properties:
            properties[name] = line
    return properties


def _value(line: str) -> str:
    """Property value: everything after the first colon"""
    return line.partition(":")[2]


def _last_component(line: str) -> str:
    """Everything after the last ':' or ';' on the line"""
    return _PROPERTY_SEPARATOR.split(line)[-1].strip()


def _join_components(value: str, separator: str) -> str:
    parts = [part.strip() for part in value.split(";")]
    return separator.join(part for part in parts if part)


def _card_to_contact(properties: dict[str, str]) -> ParsedContact:
    contact = ParsedContact()

    if "FN" in properties:
        contact.name = _value(properties["FN"]).strip()
    if not contact.name and "N" in properties:
        contact.name = _join_components(_value(properties["N"]), " ")

    if "EMAIL" in properties:
        contact.email = _last_component(properties["EMAIL"])

    if "TEL" in properties:
        contact.phone = _PHONE_DISALLOWED.sub("", _last_component(properties["TEL"]))

    if "ADR" in properties:
        contact.address = _join_components(_value(properties["ADR"]), ", ")
    elif "ORG" in properties:
        # Quirk kept for compatibility: the organization stands in for a
        # missing address.
        contact.address = _value(properties["ORG"]).strip()

    return contact


def parse_vcf(text: str) -> list[ParsedContact]:
    """
    Parse one or more vCards into contacts, in file order.

    Cards are split on BEGIN:VCARD only, so a card missing END:VCARD does not
    affect the cards after it. Folded lines, grouped properties and encoded
    values are not supported.
    """
    contacts = []
    for chunk in _VCARD_BEGIN.split(text):
        if not chunk.strip():
            continue

        contact = _card_to_contact(_scan_card(chunk))
        if contact.name or contact.email:
            contacts.append(contact)

    logger.debug(f"Parsed {len(contacts)} contacts from vCard text")
    return contacts


def parse_contact_file(filename: str, text: str) -> list[ParsedContact]:
    """Pick the decoder from the file extension and parse text"""
    lowered = (filename or "").lower()
    if lowered.endswith(".csv"):
        return parse_csv(text)
    if lowered.endswith(".vcf"):
        return parse_vcf(text)
    raise UnsupportedContactFile(filename)
