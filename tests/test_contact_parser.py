"""Tests for the CSV and vCard contact decoders"""

import pytest

from app.domain.contacts.parser import (
    UnsupportedContactFile,
    parse_contact_file,
    parse_csv,
    parse_vcf,
)
from app.domain.contacts.schemas import ParsedContact


def vcard(*lines: str) -> str:
    return "\n".join(["BEGIN:VCARD", "VERSION:3.0", *lines, "END:VCARD"])


# ---------------------------------------------------------------------------
# parse_csv
# ---------------------------------------------------------------------------


class TestParseCSV:
    def test_empty_string(self):
        assert parse_csv("") == []

    def test_whitespace_only_lines(self):
        assert parse_csv("\n\n  \n") == []

    def test_header_only(self):
        assert parse_csv("name,email,phone\n") == []

    def test_name_and_email_headers(self):
        result = parse_csv("name,email\nJohn Doe,john@example.com\nJane,jane@example.com")

        assert len(result) == 2
        assert result[0].name == "John Doe"
        assert result[0].email == "john@example.com"
        assert result[1].name == "Jane"
        assert result[1].email == "jane@example.com"

    def test_headers_match_case_insensitively(self):
        result = parse_csv("Name,Email,Phone\nAlice,alice@test.com,555-1234")

        assert result == [
            ParsedContact(name="Alice", email="alice@test.com", phone="555-1234")
        ]

    def test_row_without_name_or_email_is_dropped(self):
        result = parse_csv("name,email\n, \nBob,bob@test.com")

        assert len(result) == 1
        assert result[0].name == "Bob"

    def test_email_only_row_is_kept(self):
        result = parse_csv("name,email\n,solo@test.com")

        assert result[0].name == ""
        assert result[0].email == "solo@test.com"

    def test_crlf_line_endings(self):
        result = parse_csv("Name,Email\r\nAlice,alice@test.com\r\n\r\n")

        assert len(result) == 1
        assert result[0].email == "alice@test.com"

    def test_missing_columns_default_to_empty(self):
        result = parse_csv("name\nCarl")

        assert result[0].email == ""
        assert result[0].phone == ""
        assert result[0].address is None

    def test_short_row_defaults_to_empty(self):
        result = parse_csv("name,email,phone,city\nDana")

        assert result[0].email == ""
        assert result[0].phone == ""
        assert result[0].address == ""

    @pytest.mark.parametrize(
        "header", ["Address", "Location", "Street", "City", "Home Address"]
    )
    def test_address_like_columns(self, header):
        result = parse_csv(f"Name,{header}\nEve,Springfield")

        assert result[0].address == "Springfield"

    @pytest.mark.parametrize("header", ["Phone", "Mobile", "Tel", "Telephone"])
    def test_phone_like_columns(self, header):
        result = parse_csv(f"Email,{header}\nf@test.com,+1 555 0100")

        assert result[0].phone == "+1 555 0100"

    def test_first_matching_header_wins(self):
        result = parse_csv("First Name,Last Name,Email\nJohn,Doe,john@test.com")

        assert result[0].name == "John"

    def test_contact_header_is_a_name_column(self):
        result = parse_csv("Contact,Mobile\nZed,555")

        assert result[0].name == "Zed"
        assert result[0].phone == "555"

    def test_unrecognized_columns_become_extra_fields(self):
        result = parse_csv("Name,Email,Notes,Birthday\nAl,al@test.com,VIP,01/01")

        assert result[0].extra == {"notes": "VIP", "birthday": "01/01"}
        assert list(result[0].extra) == ["notes", "birthday"]

    def test_reserved_headers_are_not_extra_fields(self):
        result = parse_csv("Full Name,E-mail Address,Street,Mobile\nAl,a@b.com,Main,555")

        assert "full name" not in result[0].extra
        assert "street" not in result[0].extra
        assert "e-mail address" not in result[0].extra
        # mobile is recognized as the phone column but is not a reserved term
        assert result[0].extra == {"mobile": "555"}

    def test_extra_field_on_short_row_is_empty(self):
        result = parse_csv("name,notes\nGus")

        assert result[0].extra == {"notes": ""}

    def test_values_keep_their_case(self):
        result = parse_csv("NAME,EMAIL\nMcDONALD,Ron@Test.com")

        assert result[0].name == "McDONALD"
        assert result[0].email == "Ron@Test.com"

    def test_quoted_commas_are_not_supported(self):
        result = parse_csv('name,email\n"Doe, John",john@test.com')

        assert result[0].name == '"Doe'
        assert result[0].email == 'John"'

    def test_row_order_is_preserved(self):
        rows = "\n".join(f"Person {i},p{i}@test.com" for i in range(20))
        result = parse_csv(f"name,email\n{rows}")

        assert [c.name for c in result] == [f"Person {i}" for i in range(20)]

    def test_parsing_is_repeatable(self):
        text = "Name,Email,Phone,City,Notes\nA,a@x.com,1,Paris,n1\nB,,2,,n2"

        assert parse_csv(text) == parse_csv(text)


# ---------------------------------------------------------------------------
# parse_vcf
# ---------------------------------------------------------------------------


class TestParseVCF:
    def test_empty_string(self):
        assert parse_vcf("") == []

    def test_simple_card(self):
        result = parse_vcf(vcard("FN:John Doe", "EMAIL:john@example.com", "TEL:555-1234"))

        assert len(result) == 1
        assert result[0].name == "John Doe"
        assert result[0].email == "john@example.com"
        assert result[0].phone == "555-1234"

    def test_multiple_cards_keep_order(self):
        text = "\n".join([vcard("FN:First"), vcard("FN:Second")])
        result = parse_vcf(text)

        assert [c.name for c in result] == ["First", "Second"]

    def test_structured_name_fallback(self):
        result = parse_vcf(vcard("N:Doe;John;;;"))

        assert result[0].name == "Doe John"

    def test_blank_formatted_name_falls_back_to_structured_name(self):
        result = parse_vcf(vcard("FN:  ", "N:Smith;Anna;Marie;;"))

        assert result[0].name == "Smith Anna Marie"

    def test_formatted_name_wins_over_structured_name(self):
        result = parse_vcf(vcard("N:Doe;John;;;", "FN:Johnny Doe"))

        assert result[0].name == "Johnny Doe"

    def test_formatted_name_with_parameters(self):
        result = parse_vcf(vcard("FN;CHARSET=UTF-8:José Álvarez"))

        assert result[0].name == "José Álvarez"

    def test_email_with_type_parameters(self):
        result = parse_vcf(vcard("FN:A", "EMAIL;TYPE=INTERNET;TYPE=HOME:a@home.com"))

        assert result[0].email == "a@home.com"

    def test_only_first_email_and_phone_are_used(self):
        result = parse_vcf(
            vcard(
                "FN:A",
                "EMAIL;TYPE=WORK:first@test.com",
                "EMAIL;TYPE=HOME:second@test.com",
                "TEL;TYPE=CELL:111",
                "TEL;TYPE=HOME:222",
            )
        )

        assert result[0].email == "first@test.com"
        assert result[0].phone == "111"

    def test_phone_is_sanitized(self):
        result = parse_vcf(vcard("FN:A", "TEL;TYPE=CELL:+1 (555) 123.4567 ext"))

        assert result[0].phone == "+1(555)1234567"

    def test_address_components_are_joined(self):
        result = parse_vcf(
            vcard("FN:A", "ADR;TYPE=HOME:;;123 Main St;Springfield;IL;62701;USA")
        )

        assert result[0].address == "123 Main St, Springfield, IL, 62701, USA"

    def test_organization_stands_in_for_missing_address(self):
        result = parse_vcf(vcard("FN:A", "ORG:Fresh Cuts Barbershop"))

        assert result[0].address == "Fresh Cuts Barbershop"

    def test_address_preferred_over_organization(self):
        result = parse_vcf(vcard("FN:A", "ORG:Fresh Cuts", "ADR:;;1 Elm St;;;;"))

        assert result[0].address == "1 Elm St"

    def test_no_address_or_organization(self):
        result = parse_vcf(vcard("FN:A"))

        assert result[0].address is None

    def test_card_without_name_or_email_is_dropped(self):
        text = "\n".join([vcard("TEL:555"), vcard("FN:Kept")])
        result = parse_vcf(text)

        assert [c.name for c in result] == ["Kept"]

    def test_card_missing_end_does_not_stop_next_card(self):
        text = "BEGIN:VCARD\nFN:Broken\nBEGIN:VCARD\nFN:Next\nEND:VCARD"
        result = parse_vcf(text)

        assert [c.name for c in result] == ["Broken", "Next"]

    def test_begin_marker_is_case_insensitive(self):
        result = parse_vcf("begin:vcard\nfn:Lower Case\nemail:lc@test.com\nend:vcard")

        assert result[0].name == "Lower Case"
        assert result[0].email == "lc@test.com"

    def test_text_without_cards(self):
        assert parse_vcf("just some text\nwith lines") == []

    def test_crlf_line_endings(self):
        text = "BEGIN:VCARD\r\nFN:Win Dows\r\nEMAIL:w@test.com\r\nEND:VCARD\r\n"
        result = parse_vcf(text)

        assert result[0].name == "Win Dows"
        assert result[0].email == "w@test.com"

    def test_properties_after_end_are_ignored(self):
        result = parse_vcf(vcard("FN:A") + "\nEMAIL:stray@test.com\n")

        assert result[0].email == ""

    def test_similar_property_names_are_not_confused(self):
        result = parse_vcf(vcard("NOTE:FN:Wrong", "NICKNAME:Nick", "N:Right;Name;;;"))

        assert result[0].name == "Right Name"

    def test_parsing_is_repeatable(self):
        text = "\n".join([vcard("FN:A", "ORG:X"), vcard("N:B;C", "EMAIL:b@c.com")])

        assert parse_vcf(text) == parse_vcf(text)


# ---------------------------------------------------------------------------
# parse_contact_file
# ---------------------------------------------------------------------------


class TestParseContactFile:
    def test_csv_extension(self):
        result = parse_contact_file("clients.CSV", "name\nA")

        assert result[0].name == "A"

    def test_vcf_extension(self):
        result = parse_contact_file("export.vcf", vcard("FN:B"))

        assert result[0].name == "B"

    @pytest.mark.parametrize("filename", ["contacts.txt", "contacts.csv.bak", "", None])
    def test_unsupported_extension(self, filename):
        with pytest.raises(UnsupportedContactFile) as exc_info:
            parse_contact_file(filename, "name\nA")

        assert isinstance(exc_info.value, ValueError)
        assert "CSV or VCF" in str(exc_info.value)
