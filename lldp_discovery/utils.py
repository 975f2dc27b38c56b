import os
import logging


def ensure_directory_exists(file_path):
    """
    Ensures that the directory for the given file path exists.
    """
    directory = os.path.dirname(file_path)
    if directory and not os.path.exists(directory):
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            logging.error(f"Error creating directory {directory}: {e}")


def configure_logging(log_path, verbose=False, console=True):
    """
    Send log records to log_path and, optionally, to the console.

    Args:
        log_path (str): Log file; its directory is created when missing.
        verbose (bool, optional): Log at DEBUG instead of INFO. Defaults to False.
        console (bool, optional): Also log to stderr. Defaults to True.
    """
    ensure_directory_exists(log_path)

    handlers = [logging.FileHandler(log_path)]
    if console:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers,
        force=True  # Override any existing configuration
    )
    # pysnmp is chatty at DEBUG
    logging.getLogger('pysnmp').setLevel(logging.WARNING)
