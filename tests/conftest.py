"""Shared test fixtures for lldp_discovery."""

import pytest
from pysnmp.proto import rfc1902

from lldp_discovery.oids import LLDP_REM_MAN_ADDR_TABLE, LLDP_REM_TABLE, default_oid_table
from lldp_discovery.table import Cell

CHASSIS, PORT_ID, PORT_DESC, SYS_NAME, SYS_CAP = 5, 7, 8, 9, 12


def remote_cell(column, port, index, value, time_mark=0):
    """Build an lldpRemTable cell for one column of one neighbor."""
    return Cell.of(f"{LLDP_REM_TABLE}.1.{column}.{time_mark}.{port}.{index}", value)


def man_addr_cell(port, index, address, time_mark=0, column=3):
    """Build an lldpRemManAddrTable cell carrying an IPv4 address in its index."""
    octets = ".".join(str(o) for o in address)
    return Cell.of(
        f"{LLDP_REM_MAN_ADDR_TABLE}.1.{column}.{time_mark}.{port}.{index}.1.{len(address)}.{octets}",
        rfc1902.Integer32(2),
    )


def neighbor_cells(port, index, name, mac=b"\x00\x11\x22\x33\x44\x55"):
    """Cells of one fully populated neighbor, column-ascending."""
    return [
        remote_cell(CHASSIS, port, index, rfc1902.OctetString(mac)),
        remote_cell(PORT_ID, port, index, rfc1902.OctetString(f"Gi0/{port}".encode())),
        remote_cell(PORT_DESC, port, index, rfc1902.OctetString(b"uplink")),
        remote_cell(SYS_NAME, port, index, rfc1902.OctetString(name.encode())),
        remote_cell(SYS_CAP, port, index, rfc1902.OctetString(b"\x28\x00")),
    ]


@pytest.fixture
def oid_table():
    return default_oid_table()
