import logging
import asyncio
from dataclasses import dataclass, field
from typing import Dict, Tuple

from pyasn1.error import PyAsn1Error
from pysnmp.error import PySnmpError

from lldp_discovery.decoder import decode_value
from lldp_discovery.oids import LLDP_REM_MAN_ADDR_TABLE, LLDP_REM_TABLE, default_oid_table, format_oid
from lldp_discovery.snmp_manager import SNMPManager, SNMPQueryError
from lldp_discovery.table import GROUP_BY_INDEX, TableReconstructor


@dataclass(frozen=True)
class PollResult:
    target: str
    local: Dict[str, str] = field(default_factory=dict)
    remote: Tuple[Dict[str, str], ...] = ()


class LLDPPoller:
    def __init__(self, version=2, port=161, timeout=5.0, retries=1, max_concurrency=10, grouping=GROUP_BY_INDEX, oid_table=None, manager_factory=SNMPManager):
        """
        Polls a batch of targets for local and remote LLDP information.

        Args:
            version (int, optional): SNMP version, 1 or 2 (v2c). Defaults to 2.
            port (int, optional): Agent UDP port. Defaults to 161.
            timeout (float, optional): Per-request timeout in seconds. Defaults to 5.0.
            retries (int, optional): Retries per request. Defaults to 1.
            max_concurrency (int, optional): Targets polled at the same time. Defaults to 10.
            grouping (str, optional): Remote record grouping strategy, "index" or "completion".
            oid_table (LLDPOidTable, optional): Identifier bindings. Defaults to default_oid_table().
            manager_factory (callable, optional): Builds the SNMP manager for one target.
        """
        self.version = version
        self.port = port
        self.timeout = timeout
        self.retries = retries
        self.max_concurrency = max_concurrency
        self.grouping = grouping
        self.oid_table = oid_table or default_oid_table()
        self.manager_factory = manager_factory

    def _manager(self, community):
        return self.manager_factory(
            version=self.version,
            community=community,
            port=self.port,
            timeout=self.timeout,
            retries=self.retries,
        )

    async def poll_target(self, target, community):
        """
        Fetch and rebuild the LLDP information of one target.

        Raises:
            SNMPQueryError: If the GET or one of the walks fails.
        """
        snmp_manager = self._manager(community)
        reconstructor = TableReconstructor(self.oid_table)

        local_cells = await snmp_manager.get(target, self.oid_table.local_oids)
        local_info = reconstructor.collect_local(local_cells)

        logging.info(f'Starting SNMP walk on remote LLDP table for {target}')
        remote_cells = await snmp_manager.walk(target, LLDP_REM_TABLE)
        for cell in remote_cells:
            logging.debug(f'OID: {format_oid(cell.oid)}, Value: {decode_value(cell.value)}')

        if self.grouping == GROUP_BY_INDEX:
            man_addr_cells = await snmp_manager.walk(target, LLDP_REM_MAN_ADDR_TABLE)
            remote_info = reconstructor.collect_neighbors(remote_cells, man_addr_cells)
        else:
            remote_info = reconstructor.collect_remote(remote_cells, self.grouping)

        logging.info(f'Found {len(remote_info)} LLDP neighbors on {target}')
        return PollResult(target=target, local=local_info, remote=tuple(remote_info))

    async def _poll_guarded(self, semaphore, target, community):
        async with semaphore:
            try:
                return await self.poll_target(target, community)
            except (SNMPQueryError, PySnmpError, PyAsn1Error, OSError) as e:
                logging.error(f'Error fetching LLDP info for {target}: {e}')
                return None

    async def poll_all(self, targets):
        """
        Poll every (target, community) pair, skipping the ones that fail.

        Returns:
            list: PollResult objects for the successful targets, in input order.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)
        results = await asyncio.gather(
            *[self._poll_guarded(semaphore, target, community) for target, community in targets]
        )
        succeeded = [result for result in results if result is not None]
        logging.info(f'Polled {len(succeeded)} of {len(results)} targets successfully')
        return succeeded
