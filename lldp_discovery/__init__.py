# Import submodules to make them available at the package level
from .decoder import decode_value
from .oids import LLDPOidTable, default_oid_table
from .table import Cell, TableReconstructor
from .poller import LLDPPoller, PollResult
from .snmp_manager import SNMPManager, SNMPQueryError
