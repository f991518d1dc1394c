from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_SEED = Path(__file__).resolve().parent.parent / "data" / "vendors.csv"


@dataclass(frozen=True)
class StoreConfig:
    vendor_seed_csv: Path = field(
        default_factory=lambda: Path(os.getenv("VENDOR_SEED_CSV", str(_DEFAULT_SEED)))
    )
    seed_on_first_use: bool = True


DEFAULT_STORE_CONFIG = StoreConfig()

VENDORS = "vendors"
REVIEWS = "reviews"
ACTIVITIES = "activities"
