from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

# Local LLDP information (LLDP-MIB lldpLocalSystemData)
LLDP_LOC_CHASSIS_ID = "1.0.8802.1.1.2.1.3.2.0"
LLDP_LOC_SYS_NAME = "1.0.8802.1.1.2.1.3.3.0"
LLDP_LOC_PORT_DESC = "1.0.8802.1.1.2.1.3.7.1.3"

# System group / vendor
SYS_DESCR = "1.3.6.1.2.1.1.1.0"
SYS_VENDOR = "1.3.6.1.4.1.8072.3.2.10"

# lldpRemTable: <root>.1.<column>.<timeMark>.<localPortNum>.<remIndex>
LLDP_REM_TABLE = "1.0.8802.1.1.2.1.4.1"
LLDP_REM_CHASSIS_ID = "1.0.8802.1.1.2.1.4.1.1.5"
LLDP_REM_PORT_ID = "1.0.8802.1.1.2.1.4.1.1.7"
LLDP_REM_PORT_DESC = "1.0.8802.1.1.2.1.4.1.1.8"
LLDP_REM_SYS_NAME = "1.0.8802.1.1.2.1.4.1.1.9"
LLDP_REM_SYS_CAP = "1.0.8802.1.1.2.1.4.1.1.12"

# lldpRemManAddrTable: the address itself is encoded in the row index
LLDP_REM_MAN_ADDR_TABLE = "1.0.8802.1.1.2.1.4.2"

LOCAL_LABELS = {
    LLDP_LOC_CHASSIS_ID: "Local Chassis ID",
    LLDP_LOC_SYS_NAME: "Local System Name",
    LLDP_LOC_PORT_DESC: "Local Port Description",
    SYS_DESCR: "System Description",
    SYS_VENDOR: "System Vendor",
}

REMOTE_LABELS = {
    LLDP_REM_CHASSIS_ID: "Remote Chassis ID",
    LLDP_REM_PORT_ID: "Remote Port ID",
    LLDP_REM_PORT_DESC: "Remote Port Description",
    LLDP_REM_SYS_NAME: "Remote System Name",
    LLDP_REM_SYS_CAP: "Remote System Capabilities",
}

MANAGEMENT_ADDRESS_LABEL = "Remote Management Address"

# Number of index components identifying one neighbor in the remote tables
NEIGHBOR_KEY_LENGTH = 3

Oid = Tuple[int, ...]


def parse_oid(text):
    """
    Convert a dotted OID string (leading dot optional) to a tuple of integers.
    """
    text = text.strip().lstrip(".")
    if not text:
        return ()
    return tuple(int(part) for part in text.split("."))


def format_oid(oid):
    return ".".join(str(part) for part in oid)


@dataclass(frozen=True)
class LLDPOidTable:
    """
    Read-only binding of OIDs to the labels written in the output.

    Attributes:
        local (Mapping[Oid, str]): Exact local identifiers -> label.
        remote_root (Oid): Root of the remote neighbor table.
        remote_columns (Mapping[Oid, str]): Column identifiers (root + entry + column) -> label.
        man_addr_root (Oid): Root of the remote management address table.
        required_remote_labels (Tuple[str, ...]): Labels that complete one neighbor
            when completion-driven grouping is used.
    """
    local: Mapping[Oid, str]
    remote_root: Oid
    remote_columns: Mapping[Oid, str]
    man_addr_root: Oid
    required_remote_labels: Tuple[str, ...]

    @property
    def local_oids(self):
        return [format_oid(oid) for oid in self.local]


def default_oid_table():
    """
    Build the LLDP OID table used for every target.
    """
    return LLDPOidTable(
        local=MappingProxyType({parse_oid(oid): label for oid, label in LOCAL_LABELS.items()}),
        remote_root=parse_oid(LLDP_REM_TABLE),
        remote_columns=MappingProxyType({parse_oid(oid): label for oid, label in REMOTE_LABELS.items()}),
        man_addr_root=parse_oid(LLDP_REM_MAN_ADDR_TABLE),
        required_remote_labels=tuple(REMOTE_LABELS.values()),
    )
