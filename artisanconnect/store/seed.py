from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

SEED_COLUMNS: list[str] = [
    "id",
    "businessName",
    "category",
    "description",
    "address",
    "phone",
    "whatsapp",
    "latitude",
    "longitude",
    "ratingAverage",
    "reviewCount",
    "updatedAt",
    "blacklisted",
]

_NUMERIC_COLUMNS = ["latitude", "longitude", "ratingAverage", "reviewCount"]
_TRUE_VALUES = {"true", "1", "yes"}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def load_vendor_seed(path: Path) -> list[dict[str, Any]]:
    """
    Read vendor documents from a CSV export.

    Empty cells become absent fields, numeric columns are coerced (bad
    values dropped) and ``blacklisted`` becomes a bool. Rows without an
    id are skipped.
    """
    if not path.is_file():
        logger.warning("Vendor seed file %s not found, starting empty", path)
        return []

    df = pd.read_csv(path, dtype=str)

    for col in _NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")

    if "blacklisted" in df.columns:
        df["blacklisted"] = (
            df["blacklisted"].fillna("").str.strip().str.lower().isin(_TRUE_VALUES)
        )

    documents: list[dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        doc = {
            key: value.strip() if isinstance(value, str) else value
            for key, value in record.items()
            if not _is_blank(value)
        }
        if "id" not in doc:
            logger.warning("Skipping seed row without an id: %s", doc.get("businessName"))
            continue
        if "reviewCount" in doc:
            doc["reviewCount"] = int(doc["reviewCount"])
        if "blacklisted" in doc:
            doc["blacklisted"] = bool(doc["blacklisted"])
        documents.append(doc)

    logger.info("Loaded %d vendor documents from %s", len(documents), path)
    return documents
