import csv
import logging
from typing import NamedTuple

from lldp_discovery.utils import ensure_directory_exists

OUTPUT_HEADERS = ["Type", "Target", "Neighbor", "Description", "Value"]


class Target(NamedTuple):
    address: str
    community: str


def read_targets(path):
    """
    Read the target,community pairs to poll.

    Rows with fewer than two fields are skipped with a warning; extra fields
    are ignored.

    Raises:
        OSError: If the file cannot be opened.
    """
    targets = []
    with open(path, newline='', encoding='utf-8') as csv_file:
        for line_number, record in enumerate(csv.reader(csv_file), start=1):
            fields = [field.strip() for field in record]
            if len(fields) < 2 or not fields[0] or not fields[1]:
                logging.warning(f"Skipping invalid record on line {line_number}: {record}")
                continue
            targets.append(Target(fields[0], fields[1]))
    return targets


def write_batch_csv(path, results):
    """
    Write the local and remote LLDP information of every polled target.

    Decoded text holds one character per device byte, so the file is written
    as latin-1 and the device's bytes reach the CSV unchanged.

    Args:
        path (str): Output CSV file; its directory is created when missing.
        results (Iterable[PollResult]): One result per successfully polled target.

    Returns:
        int: Number of data rows written.
    """
    ensure_directory_exists(path)
    rows = 0
    with open(path, 'w', newline='', encoding='latin-1') as csv_file:
        writer = csv.writer(csv_file)
        writer.writerow(OUTPUT_HEADERS)

        for result in results:
            for desc, value in result.local.items():
                writer.writerow(["Local", result.target, "", desc, value])
                rows += 1

            for neighbor, info in enumerate(result.remote, start=1):
                for desc, value in info.items():
                    writer.writerow(["Remote", result.target, neighbor, desc, value])
                    rows += 1
    return rows
