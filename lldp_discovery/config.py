import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from lldp_discovery.table import GROUPING_STRATEGIES


@dataclass(frozen=True)
class Settings:
    snmp_version: int = 2
    snmp_port: int = 161
    snmp_timeout: float = 5.0
    snmp_retries: int = 1
    input_csv: str = 'input.csv'
    output_csv: str = 'lldp_info.csv'
    log_file: str = 'logs/lldp_discovery.log'
    max_concurrency: int = 10
    grouping: str = 'index'


def _env(name, default, convert=str):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}")


def load_settings(env_file=None):
    """
    Load settings from the environment, reading a .env file first when present.

    Variables already set in the environment take precedence over the .env file.

    Args:
        env_file (str, optional): Path of the .env file. Defaults to searching
            from the current directory.

    Raises:
        ValueError: If a variable cannot be converted or names an unknown option.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    defaults = Settings()
    settings = Settings(
        snmp_version=_env('SNMP_VERSION', defaults.snmp_version, int),
        snmp_port=_env('SNMP_PORT', defaults.snmp_port, int),
        snmp_timeout=_env('SNMP_TIMEOUT', defaults.snmp_timeout, float),
        snmp_retries=_env('SNMP_RETRIES', defaults.snmp_retries, int),
        input_csv=_env('LLDP_INPUT_CSV', defaults.input_csv),
        output_csv=_env('LLDP_OUTPUT_CSV', defaults.output_csv),
        log_file=_env('LLDP_LOG_FILE', defaults.log_file),
        max_concurrency=_env('LLDP_MAX_CONCURRENCY', defaults.max_concurrency, int),
        grouping=_env('LLDP_GROUPING', defaults.grouping),
    )
    if settings.snmp_version not in (1, 2):
        raise ValueError("Invalid SNMP_VERSION. Must be 1 or 2.")
    if settings.grouping not in GROUPING_STRATEGIES:
        raise ValueError(f"Invalid LLDP_GROUPING. Must be one of {', '.join(GROUPING_STRATEGIES)}.")
    if settings.max_concurrency < 1:
        raise ValueError("LLDP_MAX_CONCURRENCY must be at least 1.")
    return settings
