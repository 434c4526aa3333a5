import os
import re
from typing import Optional

from .config import DATASET_ROUTE, LOG_FILE_PATH

# Regex to capture the dataset URL from the server's startup log message
URL_PATTERN = re.compile(r"Dataset available at: (http://127\.0\.0\.1:\d+" + re.escape(DATASET_ROUTE) + r")")


def find_latest_api_url(log_file_path: str = LOG_FILE_PATH) -> Optional[str]:
    """
    Reads the server log to find the most recent URL the dataset server
    was started on.

    Returns:
        The URL string if found, otherwise None.
    """
    if not os.path.exists(log_file_path):
        return None

    try:
        with open(log_file_path, 'r', encoding='utf-8') as f:
            # Read lines and reverse them to find the latest entry first
            for line in reversed(f.readlines()):
                match = URL_PATTERN.search(line)
                if match:
                    return match.group(1)
    except IOError:
        return None  # Failed to read file

    return None  # No URL found in the entire file
