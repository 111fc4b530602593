"""
Roster configuration: paths, column sets, normalization maps.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths, override with ROSTER_DATA_DIR env var
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("ROSTER_DATA_DIR", str(Path.home() / "Roster")))
BASE_FOLDER = _data_dir
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Column sets for CSV import/export
# ---------------------------------------------------------------------------
REQUIRED_COLUMNS = ["name", "email", "gender"]
EXPORT_COLUMNS = ["id", "name", "email", "gender"]

# Descriptive fields a record may carry; none are needed for any computation
OPTIONAL_FIELDS = ["nationality", "college", "major", "minor"]

# ---------------------------------------------------------------------------
# Statistic dimensions
# ---------------------------------------------------------------------------
GENDER_DIMENSION = "gender"
DOMAIN_DIMENSION = "email_domain"
DEFAULT_DIMENSIONS = (GENDER_DIMENSION, DOMAIN_DIMENSION)

UNKNOWN_LABEL = "Unknown"

# ---------------------------------------------------------------------------
# Gender normalization map (keys are upper-cased, trimmed raw values)
# ---------------------------------------------------------------------------
GENDER_NORMALIZATION = {
    "M": "Male",
    "MALE": "Male",
    "F": "Female",
    "FEMALE": "Female",
    "O": "Other",
    "OTHER": "Other",
    "NON-BINARY": "Other",
    "NONBINARY": "Other",
    "NB": "Other",
}

# ---------------------------------------------------------------------------
# CSV syntax
# ---------------------------------------------------------------------------
CSV_SEPARATOR = ","
CSV_QUOTE = '"'
CSV_LINE_TERMINATOR = "\n"

# ---------------------------------------------------------------------------
# Download boundary
# ---------------------------------------------------------------------------
CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
EXPORT_FILENAME_PREFIX = "students-export"

# ---------------------------------------------------------------------------
# Dashboard defaults
# ---------------------------------------------------------------------------
TOP_GROUPS_DEFAULT = 10
STATS_CACHE_SIZE = 32
