"""Tests for SNMP value decoding."""

import pytest
from pyasn1.type import univ
from pysnmp.proto import rfc1902, rfc1905

from lldp_discovery.decoder import (
    NIL_VALUE,
    decode_management_address,
    decode_value,
    is_mostly_printable,
)


class TestAbsentValues:
    @pytest.mark.parametrize("value", [
        None,
        univ.Null(""),
        rfc1905.noSuchObject,
        rfc1905.noSuchInstance,
        rfc1905.endOfMibView,
    ])
    def test_absent_is_nil(self, value):
        assert decode_value(value) == NIL_VALUE == "<nil>"


class TestOctetStrings:
    def test_printable_name_is_text(self):
        assert decode_value(rfc1902.OctetString(b"switch-1")) == "switch-1"

    def test_mac_address_is_hex(self):
        value = rfc1902.OctetString(b"\x00\x1a\x2b\x3c\x4d\x5e")
        assert decode_value(value) == "001a2b3c4d5e"

    def test_empty_is_empty_text(self):
        assert decode_value(rfc1902.OctetString(b"")) == ""

    def test_newlines_count_as_printable(self):
        text = b"Cisco IOS Software\r\nVersion 15.2"
        assert decode_value(rfc1902.OctetString(text)) == text.decode()

    def test_tab_counts_as_non_printable(self):
        assert decode_value(rfc1902.OctetString(b"a\tb")) == "610962"

    def test_exactly_ten_percent_is_hex(self):
        data = b"abcdefghi\x01"
        assert decode_value(rfc1902.OctetString(data)) == data.hex()

    def test_below_ten_percent_is_text(self):
        data = b"abcdefghij\x01"
        assert decode_value(rfc1902.OctetString(data)) == "abcdefghij\x01"

    def test_text_is_not_reencoded(self):
        data = b"Caf\xe9 switch 01"
        assert decode_value(rfc1902.OctetString(data)) == "Café switch 01"

    def test_hex_is_lowercase_two_digits_per_byte(self):
        data = bytes(range(0, 256, 17))
        decoded = decode_value(rfc1902.OctetString(data))
        assert decoded == decoded.lower()
        assert len(decoded) == 2 * len(data)

    def test_plain_bytes(self):
        assert decode_value(b"gi0/1") == "gi0/1"
        assert decode_value(b"\xff\xfe") == "fffe"


class TestOtherTypes:
    def test_integer(self):
        assert decode_value(rfc1902.Integer32(42)) == "42"

    def test_counter(self):
        assert decode_value(rfc1902.Counter32(7)) == "7"

    def test_ip_address_is_not_hex(self):
        assert decode_value(rfc1902.IpAddress("10.0.0.1")) == "10.0.0.1"

    def test_object_identifier(self):
        assert decode_value(rfc1902.ObjectName("1.3.6.1.4.1.9")) == "1.3.6.1.4.1.9"

    def test_plain_python_value(self):
        assert decode_value(5) == "5"


class TestPurity:
    def test_decoding_twice_gives_same_result(self):
        value = rfc1902.OctetString(b"\x00\x1a\x2b\x3c\x4d\x5e")
        assert decode_value(value) == decode_value(value)


class TestIsMostlyPrintable:
    def test_empty(self):
        assert is_mostly_printable(b"")

    def test_all_binary(self):
        assert not is_mostly_printable(b"\x00\x01\x02")


class TestManagementAddress:
    def test_ipv4(self):
        assert decode_management_address((1, 4, 192, 168, 1, 10)) == "192.168.1.10"

    def test_ipv6(self):
        index = (2, 16, 0x20, 0x01, 0x0d, 0xb8) + (0,) * 11 + (1,)
        assert decode_management_address(index) == "2001:db8::1"

    def test_other_family_is_hex(self):
        index = (6, 6, 0, 17, 34, 51, 68, 85)
        assert decode_management_address(index) == "001122334455"

    @pytest.mark.parametrize("index", [
        (),
        (1,),
        (1, 4, 10, 0),
        (1, 2, 300, 1),
    ])
    def test_malformed_is_empty(self, index):
        assert decode_management_address(index) == ""
