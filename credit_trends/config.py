"""
Credit Trends — Configuration: paths, column layout, view constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with CREDIT_TRENDS_DATA_DIR env var for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("CREDIT_TRENDS_DATA_DIR", str(Path.home() / "Desktop" / "Credit Trends")))
EXPORTS_FOLDER = _data_dir / "exports"

LOG_LEVEL = os.environ.get("CREDIT_TRENDS_LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Fixed 8-column layout: external CSV name → internal field name
# Columns are read by position, never matched by name.
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "Year": "year",
    "State": "state",
    "Tax_Credit_Type": "credit_type",
    "Sector": "sector",
    "Claimed_Amount": "claimed_amount",
    "Claims_Count": "claims_count",
    "Income_Bracket": "income_bracket",
    "Source": "source",
}

COLUMNS = list(COLUMN_MAP.keys())
FIELDS = list(COLUMN_MAP.values())
EXPECTED_COLUMN_COUNT = len(COLUMNS)
DELIMITER = ","

INT_FIELDS = ["year", "claims_count"]
FLOAT_FIELDS = ["claimed_amount"]
STRING_FIELDS = ["state", "credit_type", "sector", "income_bracket", "source"]

# ---------------------------------------------------------------------------
# View sizes
# ---------------------------------------------------------------------------
TOP_CREDIT_TYPES = 7
TOP_STATES = 10
TOP_STATES_EFFICIENCY = 8
TOP_STATES_CONCENTRATION = 3
REPORT_TOP_N = 5

# Claims per million dollars claimed
EFFICIENCY_SCALE = 1_000_000

# ---------------------------------------------------------------------------
# Export file naming: <prefix>_<YYYY-MM-DD>.<ext>
# ---------------------------------------------------------------------------
EXPORT_NAMES = {
    "csv": ("tax_credit_data", "csv"),
    "report": ("tax_credit_summary", "txt"),
}
