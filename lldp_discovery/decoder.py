import ipaddress

from pyasn1.type import univ
from pysnmp.proto import rfc1902

NIL_VALUE = "<nil>"

# OCTET STRING subtypes pysnmp already renders in a readable form
_NON_TEXT_OCTET_TYPES = (rfc1902.IpAddress, rfc1902.Opaque)

# IANA address family numbers used in lldpRemManAddrSubtype
_ADDRESS_FAMILY_IPV4 = 1
_ADDRESS_FAMILY_IPV6 = 2


def is_mostly_printable(data):
    """
    Check whether fewer than 10% of the bytes fall outside printable ASCII.

    Newline and carriage return count as printable. An empty payload is
    treated as printable.
    """
    if not data:
        return True
    non_printable = sum(1 for b in data if (b < 32 or b > 126) and b not in (10, 13))
    return non_printable * 10 < len(data)


def is_byte_string(value):
    return isinstance(value, (bytes, bytearray)) or (
        isinstance(value, univ.OctetString) and not isinstance(value, _NON_TEXT_OCTET_TYPES)
    )


def decode_value(value):
    """
    Convert one SNMP value to the string written to logs and CSV.

    Args:
        value: A pysnmp/pyasn1 value object, raw bytes, or None when the agent
            returned nothing for the OID.

    Returns:
        str: "<nil>" for absent values (including noSuchObject, noSuchInstance
        and endOfMibView), the raw text of mostly printable octet strings, the
        lowercase hex of other octet strings, or the default textual form of
        any other type.
    """
    if value is None or isinstance(value, univ.Null):
        return NIL_VALUE
    if is_byte_string(value):
        data = bytes(value.asOctets()) if isinstance(value, univ.OctetString) else bytes(value)
        if is_mostly_printable(data):
            return data.decode("latin-1")
        return data.hex()
    if hasattr(value, "prettyPrint"):
        return value.prettyPrint()
    return str(value)


def decode_management_address(index):
    """
    Decode the address part of an lldpRemManAddrTable index.

    The index is encoded as <subtype>.<length>.<octet>...; IPv4 and IPv6
    addresses are rendered in their usual notation, anything else as hex.
    Returns an empty string when the index is malformed.
    """
    if len(index) < 2:
        return ""
    subtype, length = index[0], index[1]
    octets = index[2:2 + length]
    if len(octets) != length or any(o > 255 for o in octets):
        return ""
    data = bytes(octets)
    if subtype == _ADDRESS_FAMILY_IPV4 and length == 4:
        return str(ipaddress.IPv4Address(data))
    if subtype == _ADDRESS_FAMILY_IPV6 and length == 16:
        return str(ipaddress.IPv6Address(data))
    return data.hex()
