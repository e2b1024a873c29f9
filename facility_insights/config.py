"""Configuration and environment for the facility insights engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("FACILITIES_DATA_DIR", str(PROJECT_ROOT / "data")))

# Facility store: first existing file wins (CSV or JSON array)
FACILITY_FILE_NAMES = ["healthcare_facilities.csv", "healthcare_facilities.json", "facilities.csv", "facilities.json"]
FACILITIES_FILE = os.getenv("FACILITIES_FILE", "")


def _find_facilities_file() -> Path | None:
    if FACILITIES_FILE:
        p = Path(FACILITIES_FILE)
        return p if p.exists() else None
    for name in FACILITY_FILE_NAMES:
        p = DATA_DIR / name
        if p.exists():
            return p
    return None


# Derivation
ALERT_LIMIT = int(os.getenv("ALERT_LIMIT", "10"))
DESERT_THRESHOLD = int(os.getenv("DESERT_THRESHOLD", "2"))  # regions with fewer facilities are deserts
CRITICAL_COVERAGE = int(os.getenv("CRITICAL_COVERAGE", "50"))

# Natural-language question endpoint (external); OpenAI is used when no endpoint is set
CHAT_ENDPOINT_URL = os.getenv("CHAT_ENDPOINT_URL", "")
CHAT_API_KEY = os.getenv("CHAT_API_KEY", "")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")

# API
API_TIMEOUT_SECONDS = int(os.getenv("API_TIMEOUT_SECONDS", "55"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
