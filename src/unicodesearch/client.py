#client.py
import json
import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from .config import FETCH_TIMEOUT
from .errors import DatasetFetchError, InputMissingError
from .models import NormalizedRecord, RawRecord
from .normalizer import normalize_all


def records_from_document(document: Dict[str, Any]) -> List[NormalizedRecord]:
    """Validates a dataset document and normalizes its records in order."""
    if not isinstance(document, dict) or not document.get("success"):
        raise DatasetFetchError("Dataset reports an unsuccessful build")
    data = document.get("data")
    if not isinstance(data, list):
        raise DatasetFetchError("Dataset has no 'data' list")
    try:
        return normalize_all(RawRecord.from_dict(item) for item in data)
    except (ValueError, AttributeError) as e:
        raise DatasetFetchError(f"Invalid record in dataset: {e}") from e


async def fetch_dataset(url: str, client: Optional[httpx.AsyncClient] = None) -> List[NormalizedRecord]:
    """
    Fetches the dataset JSON over HTTP. Any failure is raised as a
    DatasetFetchError carrying the message to show; there are no retries.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(follow_redirects=True)
    try:
        try:
            response = await client.get(url, timeout=FETCH_TIMEOUT)
        except httpx.HTTPError as e:
            raise DatasetFetchError(f"Error fetching emoji data: {e}") from e
        if not response.is_success:
            raise DatasetFetchError(
                f"HTTP Error fetching emoji data: {response.status_code} {response.reason_phrase}"
            )
        try:
            document = response.json()
        except ValueError as e:  # JSONDecodeError and UnicodeDecodeError
            raise DatasetFetchError(f"Error decoding emoji data: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    records = records_from_document(document)
    logging.info(f"Loaded {len(records)} records from {url}")
    return records


def load_dataset_file(path: str) -> List[NormalizedRecord]:
    if not os.path.exists(path):
        raise InputMissingError(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except ValueError as e:
        raise DatasetFetchError(f"Error decoding emoji data: {e}") from e
    return records_from_document(document)
