"""Contacts domain - contact file import, storage and export"""

# Decoders for uploaded contact files live in parser.py and have no
# dependency on the database or FastAPI:
# - parse_csv: comma-separated text with a header row
# - parse_vcf: one or more BEGIN:VCARD blocks
# - parse_contact_file: picks one of the above from the file extension

__all__ = []
