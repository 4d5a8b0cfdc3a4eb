from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import pandas as pd
from loguru import logger

from .config import (
    CATALOG_SNAPSHOT_PATH,
    HTTP_CONNECT_TIMEOUT,
    HTTP_READ_TIMEOUT,
    HTTP_USER_AGENT,
    STEAM_APP_LIST_URL,
)
from .errors import CatalogFetchError

CATALOG_COLUMNS = ["appid", "name"]


def _http_client() -> httpx.Client:
    return httpx.Client(
        headers={"User-Agent": HTTP_USER_AGENT},
        follow_redirects=True,
        timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT),
    )


def _extract_apps(payload) -> List[Dict]:
    try:
        apps = payload["applist"]["apps"]
    except (KeyError, TypeError) as e:
        raise CatalogFetchError(f"Unexpected Steam app list payload: missing {e}") from e
    if not isinstance(apps, list):
        raise CatalogFetchError("Unexpected Steam app list payload: 'apps' is not a list")
    return apps


def apps_to_frame(apps: List[Dict]) -> pd.DataFrame:
    """
    Turn raw ``{appid, name}`` records into the catalog frame.

    Row order is the order of the records. Names are kept verbatim, including
    duplicates and empty names.
    """
    if not apps:
        return pd.DataFrame(columns=CATALOG_COLUMNS).astype({"appid": "int64", "name": "object"})

    bad = [i for i, rec in enumerate(apps) if not isinstance(rec, dict)]
    if bad:
        raise CatalogFetchError(
            f"Steam app list contains {len(bad)} non-object records (first at index {bad[0]})"
        )

    df = pd.DataFrame.from_records(apps)
    missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogFetchError(f"Steam app records are missing fields: {missing}")

    df = df[CATALOG_COLUMNS].reset_index(drop=True)
    try:
        ids = pd.to_numeric(df["appid"], errors="raise")
    except (TypeError, ValueError) as e:
        raise CatalogFetchError(f"Steam app records contain a non-integer appid: {e}") from e
    # ids must be present and integral
    if ids.isna().any() or (ids % 1 != 0).any():
        raise CatalogFetchError("Steam app records contain a missing or non-integer appid")
    df["appid"] = ids.astype("int64")
    df["name"] = df["name"].fillna("").astype(str)
    return df


def fetch_steam_apps(url: str = STEAM_APP_LIST_URL, client: Optional[httpx.Client] = None) -> pd.DataFrame:
    """
    Fetch Steam's full app list in a single request.

    Any transport error, HTTP error status or malformed body raises
    CatalogFetchError; there is no retry.
    """
    logger.info("Fetching Steam app list: {}", url)
    owns_client = client is None
    client = client or _http_client()
    try:
        r = client.get(url)
        if r.status_code >= 400:
            raise CatalogFetchError(f"HTTP {r.status_code} for {url}")
        payload = r.json()
    except httpx.HTTPError as e:
        raise CatalogFetchError(f"Could not fetch Steam app list from {url}: {e}") from e
    except ValueError as e:
        raise CatalogFetchError(f"Steam app list response is not valid JSON: {e}") from e
    finally:
        if owns_client:
            client.close()

    df = apps_to_frame(_extract_apps(payload))
    logger.info("Found {} games in Steam's database.", len(df))
    return df


# ---------------------------
# Snapshot IO
# ---------------------------

def save_catalog_snapshot(df: pd.DataFrame, output_path: Path = CATALOG_SNAPSHOT_PATH) -> Path:
    """Write the catalog as a JSON list of {appid, name} records."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    records = [
        {"appid": int(appid), "name": name}
        for appid, name in df[CATALOG_COLUMNS].itertuples(index=False, name=None)
    ]
    output_path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    logger.info("Catalog snapshot written to {} ({} apps)", output_path, len(records))
    return output_path


def load_catalog_snapshot(path: Path = CATALOG_SNAPSHOT_PATH) -> pd.DataFrame:
    """
    Load a catalog snapshot written by save_catalog_snapshot.

    The raw API payload (``{"applist": {"apps": [...]}}``) is accepted too.
    """
    path = Path(path)
    logger.info("Loading catalog snapshot from {}", path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogFetchError(f"Catalog snapshot not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogFetchError(f"Could not read catalog snapshot {path}: {e}") from e

    apps = payload if isinstance(payload, list) else _extract_apps(payload)
    df = apps_to_frame(apps)
    logger.info("Loaded catalog snapshot with {} apps", len(df))
    return df
