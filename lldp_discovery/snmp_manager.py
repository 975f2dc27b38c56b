import logging
import asyncio

# pysnmp 7.x uses v3arch.asyncio for async SNMP operations
from pysnmp.error import PySnmpError
from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData, SnmpEngine, ContextData,
    ObjectType, ObjectIdentity,
    get_cmd, walk_cmd,
)
from pysnmp.hlapi.v3arch.asyncio.transport import UdpTransportTarget

from lldp_discovery.oids import format_oid, parse_oid
from lldp_discovery.table import Cell

# errorStatus of an SNMPv1 response naming an OID the agent does not have
NO_SUCH_NAME = 2


class SNMPQueryError(Exception):
    """Raised when a GET or walk against a target fails."""

    def __init__(self, host, message):
        super().__init__(f"{host}: {message}")
        self.host = host


class SNMPManager:
    def __init__(self, version=2, community=None, port=161, timeout=5.0, retries=1, query_timeout=60.0, max_results=5000):
        """
        Initialize the SNMP manager with the given parameters.

        Args:
            version (int): The SNMP version to use (1 or 2 for v2c).
            community (str): The SNMP community string.
            port (int, optional): UDP port of the agent. Defaults to 161.
            timeout (float, optional): Per-request timeout in seconds. Defaults to 5.0.
            retries (int, optional): Retries per request. Defaults to 1.
            query_timeout (float, optional): Upper bound for one whole GET or walk. Defaults to 60.0.
            max_results (int, optional): Maximum number of cells accepted from one walk. Defaults to 5000.

        Raises:
            ValueError: If the version is not 1 or 2, or the community string is missing.
        """
        if version not in (1, 2):
            raise ValueError("Invalid SNMP version. Must be 1 or 2.")
        if not community:
            raise ValueError("Community string is required for SNMPv1 and SNMPv2c")
        self.version = version
        self.community = community
        self.port = port
        self.timeout = timeout
        self.retries = retries
        self.query_timeout = query_timeout
        self.max_results = max_results

    def _user_data(self):
        return CommunityData(self.community, mpModel=0 if self.version == 1 else 1)

    async def _transport(self, target):
        try:
            return await UdpTransportTarget.create((target, self.port), timeout=self.timeout, retries=self.retries)
        except PySnmpError as e:
            raise SNMPQueryError(target, f"cannot resolve transport: {e}") from e

    async def _bounded(self, target, coro, what):
        try:
            return await asyncio.wait_for(coro, timeout=self.query_timeout)
        except asyncio.TimeoutError:
            logging.error(f'SNMP {what} timeout for {target}')
            raise SNMPQueryError(target, f"{what} timed out after {self.query_timeout}s")
        except PySnmpError as e:
            logging.error(f'SNMP {what} failed for {target}: {e}')
            raise SNMPQueryError(target, str(e)) from e

    def _is_missing_v1_oid(self, errorIndication, errorStatus, errorIndex, requested):
        return (
            self.version == 1
            and not errorIndication
            and bool(errorStatus)
            and int(errorStatus) == NO_SUCH_NAME
            and 0 < int(errorIndex) <= requested
        )

    @staticmethod
    def _raise_for_error(target, errorIndication, errorStatus, errorIndex, varBinds):
        if errorIndication:
            logging.error(f'Error Indication: {errorIndication}')
            raise SNMPQueryError(target, str(errorIndication))
        if errorStatus:
            at = errorIndex and varBinds[int(errorIndex) - 1][0] or "?"
            logging.error(f'Error Status: {errorStatus.prettyPrint()} at {at}')
            raise SNMPQueryError(target, f"{errorStatus.prettyPrint()} at {at}")

    async def get(self, target, oids):
        """
        Fetch an explicit list of OIDs with a single GET request.

        Under SNMPv1 an OID the agent reports as noSuchName is left out and
        the request is repeated with the rest.

        Args:
            target (str): The IP address or hostname of the target device.
            oids (list): Dotted OID strings to request.

        Returns:
            list: Cells in the order the agent answered them.

        Raises:
            SNMPQueryError: If the request fails or times out.
        """
        return await self._bounded(target, self._get(target, oids), "get")

    async def _get(self, target, oids):
        oids = list(oids)
        transport = await self._transport(target)
        engine = SnmpEngine()
        try:
            while oids:
                errorIndication, errorStatus, errorIndex, varBinds = await get_cmd(
                    engine,
                    self._user_data(),
                    transport,
                    ContextData(),
                    *[ObjectType(ObjectIdentity(oid)) for oid in oids],
                )
                # SNMPv1 fails the whole request on one missing OID; retry without it
                if self._is_missing_v1_oid(errorIndication, errorStatus, errorIndex, len(oids)):
                    missing = oids.pop(int(errorIndex) - 1)
                    logging.warning(f'{target} has no value for {missing}, retrying without it')
                    continue
                self._raise_for_error(target, errorIndication, errorStatus, errorIndex, varBinds)
                return [Cell.from_var_bind(varBind) for varBind in varBinds]
            return []
        finally:
            engine.close_dispatcher()

    async def walk(self, target, base_oid):
        """
        Walk every OID below base_oid.

        Args:
            target (str): The IP address or hostname of the target device.
            base_oid (str): Root of the subtree to walk.

        Returns:
            list: Cells in the order they were received.

        Raises:
            SNMPQueryError: If any request of the walk fails or the walk times out.
        """
        return await self._bounded(target, self._walk(target, base_oid), "walk")

    async def _walk(self, target, base_oid):
        root = parse_oid(base_oid)
        transport = await self._transport(target)
        engine = SnmpEngine()
        results = []
        try:
            async for errorIndication, errorStatus, errorIndex, varBinds in walk_cmd(
                engine,
                self._user_data(),
                transport,
                ContextData(),
                ObjectType(ObjectIdentity(format_oid(root))),
                lexicographicMode=False,
            ):
                self._raise_for_error(target, errorIndication, errorStatus, errorIndex, varBinds)
                for varBind in varBinds:
                    cell = Cell.from_var_bind(varBind)
                    # Stop once the agent moves past the requested subtree
                    if cell.oid[:len(root)] != root:
                        return results
                    results.append(cell)
                if len(results) >= self.max_results:
                    logging.warning(f'Reached max results limit ({self.max_results}) for {base_oid} on {target}')
                    break
        finally:
            engine.close_dispatcher()
        return results
