import logging
from typing import Any, NamedTuple, Tuple

from lldp_discovery.decoder import decode_management_address, decode_value
from lldp_discovery.oids import MANAGEMENT_ADDRESS_LABEL, NEIGHBOR_KEY_LENGTH, format_oid, parse_oid

GROUP_BY_INDEX = "index"
GROUP_BY_COMPLETION = "completion"
GROUPING_STRATEGIES = (GROUP_BY_INDEX, GROUP_BY_COMPLETION)


class Cell(NamedTuple):
    """One (OID, value) pair returned by a GET or a walk."""
    oid: Tuple[int, ...]
    value: Any

    @classmethod
    def of(cls, oid, value):
        return cls(parse_oid(oid) if isinstance(oid, str) else tuple(oid), value)

    @classmethod
    def from_var_bind(cls, var_bind):
        oid, value = var_bind
        return cls(tuple(int(part) for part in oid), value)


class TableReconstructor:
    """
    Rebuilds LLDP records from the flat cell sequences of one target.

    An instance belongs to a single target; the only state it keeps is the
    count of cells that matched no known identifier.
    """

    def __init__(self, oid_table):
        self.oid_table = oid_table
        self.dropped = 0

    def collect_local(self, cells):
        """
        Map the cells of the local GET to their labels.

        Unknown identifiers are dropped. Labels the agent did not answer for
        are absent from the result.
        """
        result = {}
        for cell in cells:
            label = self.oid_table.local.get(cell.oid)
            if label is None:
                self._drop(cell)
                continue
            result[label] = decode_value(cell.value)
        return result

    def group_rows(self, cells, root, columns):
        """
        Group table cells into rows keyed by their index suffix.

        Args:
            cells (Iterable[Cell]): Walk results in the order received.
            root (tuple): Table OID the walk started from.
            columns (Mapping[tuple, str]): Column identifier (root + entry + column) -> label.

        Returns:
            dict: index suffix -> {label: value}, in order of first appearance.
        """
        rows = {}
        column_length = len(root) + 2
        for cell in cells:
            label = columns.get(cell.oid[:column_length])
            suffix = cell.oid[column_length:]
            if label is None or not suffix:
                self._drop(cell)
                continue
            rows.setdefault(suffix, {})[label] = decode_value(cell.value)
        return rows

    def collect_remote(self, cells, strategy=GROUP_BY_INDEX):
        """
        Rebuild the remote neighbor records from an lldpRemTable walk.

        Args:
            cells (Iterable[Cell]): Walk results in the order received.
            strategy (str): "index" groups cells by their index suffix,
                "completion" starts a new record once every required label
                has been seen.

        Returns:
            list: One dict per neighbor, in discovery order.

        Raises:
            ValueError: If the strategy is not known.
        """
        if strategy == GROUP_BY_INDEX:
            rows = self.group_rows(cells, self.oid_table.remote_root, self.oid_table.remote_columns)
            return list(rows.values())
        if strategy == GROUP_BY_COMPLETION:
            return self._collect_until_complete(cells)
        raise ValueError(f"Unknown grouping strategy: {strategy}. Must be one of {', '.join(GROUPING_STRATEGIES)}.")

    def _collect_until_complete(self, cells):
        required = self.oid_table.required_remote_labels
        column_length = len(self.oid_table.remote_root) + 2
        results = []
        current = {}
        for cell in cells:
            label = self.oid_table.remote_columns.get(cell.oid[:column_length])
            if label is None:
                self._drop(cell)
                continue
            current[label] = decode_value(cell.value)
            if all(key in current for key in required):
                results.append(current)
                current = {}

        # Trailing partial record
        if current:
            results.append(current)
        return results

    def collect_management_addresses(self, cells):
        """
        Extract one management address per neighbor from an lldpRemManAddrTable walk.

        Returns:
            dict: neighbor key (timeMark, localPortNum, remIndex) -> address.
        """
        addresses = {}
        column_length = len(self.oid_table.man_addr_root) + 2
        for cell in cells:
            if cell.oid[:len(self.oid_table.man_addr_root)] != self.oid_table.man_addr_root:
                self._drop(cell)
                continue
            index = cell.oid[column_length:]
            address = decode_management_address(index[NEIGHBOR_KEY_LENGTH:])
            if len(index) <= NEIGHBOR_KEY_LENGTH or not address:
                self._drop(cell)
                continue
            addresses.setdefault(index[:NEIGHBOR_KEY_LENGTH], address)
        return addresses

    def collect_neighbors(self, remote_cells, man_addr_cells=()):
        """
        Rebuild neighbors from the remote table and attach their management address.

        Neighbors only present in the management address table still produce
        a record, placed after the others.
        """
        rows = self.group_rows(remote_cells, self.oid_table.remote_root, self.oid_table.remote_columns)
        for key, address in self.collect_management_addresses(man_addr_cells).items():
            rows.setdefault(key, {})[MANAGEMENT_ADDRESS_LABEL] = address
        if self.dropped:
            logging.debug(f"Dropped {self.dropped} cells with unknown identifiers")
        return list(rows.values())

    def _drop(self, cell):
        self.dropped += 1
        logging.debug(f"Ignoring unmapped OID {format_oid(cell.oid)}")
