# config.py
from pathlib import Path
from dotenv import load_dotenv
import os

# Always resolve path so it works no matter where you run from
ENV_PATH = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=ENV_PATH)  # set override=True if you want .env to win over OS env

def int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    s = raw.strip().strip('"').strip("'")
    try:
        return int(s)
    except ValueError:
        return default

ES_URL = os.getenv("ES_URL")
SOURCE_INDEX = os.getenv("SOURCE_INDEX")
API_KEY_B64 = os.getenv("API_KEY_B64")
# osquery pack query whose results carry the installed Microsoft 365 Apps version
OFFICE_PROGRAM_QUERY = os.getenv(
    "OFFICE_PROGRAM_QUERY",
    "SELECT name, version FROM programs WHERE name LIKE 'Microsoft 365%';",
)

# One published release table per version family
LEGACY_RELEASE_URL = os.getenv(
    "LEGACY_RELEASE_URL",
    "https://learn.microsoft.com/en-us/officeupdates/update-history-office-2013",
)
CURRENT_RELEASE_URL = os.getenv(
    "CURRENT_RELEASE_URL",
    "https://learn.microsoft.com/en-us/officeupdates/update-history-microsoft365-apps-by-date",
)

OFFICE_CHANNEL = os.getenv("OFFICE_CHANNEL", "Monthly Enterprise Channel")
OUT_DIR = os.getenv("OUT_DIR", "office_update_reports")
CSV_OUT = os.getenv("CSV_OUT", "office_verdicts.csv")
SNAPSHOT_OUT = os.getenv("SNAPSHOT_OUT", "")
HTTP_TIMEOUT: int = int_env("HTTP_TIMEOUT", 30)
