"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path
from types import MappingProxyType

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "weekly-budget.db"
OUTPUT_DIR = PROJECT_ROOT / "output"
DEFAULT_BUDGET_FILE = "budget.yml"

# =============================================================================
# TIME CONSTANTS
# =============================================================================

# RFC 5545 weekday codes -> day-of-week ordinal (Sunday = 0)
DAY_MAP = MappingProxyType(
    {"SU": 0, "MO": 1, "TU": 2, "WE": 3, "TH": 4, "FR": 5, "SA": 6}
)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_WEEK = 604800
HOURS_PER_WEEK = 168  # 7 days x 24 hours

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

UNCATEGORIZED = "Uncategorized"
TOTAL = "TOTAL"
RESERVED_CATEGORIES = frozenset({UNCATEGORIZED, TOTAL})
CSV_HEADERS = ["Category", "Budgeted", "Actual", "Variance"]

# =============================================================================
# CALDAV CREDENTIALS (from environment)
# =============================================================================

FASTMAIL_EMAIL = os.environ.get("FASTMAIL_EMAIL", "")
FASTMAIL_PASSWORD = os.environ.get("FASTMAIL_APP_PASSWORD", "")
CALDAV_URL = os.environ.get("CALDAV_URL", "")
# Certificate verification is off by default: the tool only reads calendar data
CALDAV_VERIFY_TLS = os.environ.get("CALDAV_VERIFY_TLS", "false").lower() == "true"

MISSING_CREDENTIALS_HELP = """\
Error: Missing credentials

Please set the following environment variables:
  export FASTMAIL_EMAIL='your@email.com'
  export FASTMAIL_APP_PASSWORD='your-app-specific-password'
  export CALDAV_URL='https://caldav.fastmail.com/dav/calendars/user/...'

To create an app-specific password:
  1. Go to https://www.fastmail.com/settings/security/devicekeys/new
  2. Create a new app password with CalDAV access
  3. Copy the generated password"""


def missing_credentials() -> list[str]:
    """Names of CalDAV environment variables that are not set."""
    required = {
        "FASTMAIL_EMAIL": FASTMAIL_EMAIL,
        "FASTMAIL_APP_PASSWORD": FASTMAIL_PASSWORD,
        "CALDAV_URL": CALDAV_URL,
    }
    return [name for name, value in required.items() if not value]


# =============================================================================
# API CONFIGURATION
# =============================================================================

WEEKLY_BUDGET_API_KEY = os.environ.get("WEEKLY_BUDGET_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
