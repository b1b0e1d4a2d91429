import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Filename Configuration ---
ORDER_HISTORY_FILENAME = os.getenv(
    "ORDER_HISTORY_FILENAME", "Retail.OrderHistory.1.csv"
)
INVENTORY_FILENAME = os.getenv("INVENTORY_FILENAME", "little-owl.csv")
TRACKING_FILENAME = os.getenv("TRACKING_FILENAME", "tracking.csv")

# The last-import marker lives next to the project, not in the output folder,
# so clearing old outputs never resets the incremental import.
LAST_IMPORT_FILE = BASE_DIR / os.getenv("LAST_IMPORT_FILENAME", ".last-import")

# --- Logging ---
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = os.getenv("LOG_FILENAME", "app.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Shared Business Logic ---
# Every synthesized SKU starts with this, followed by ASIN and Order ID.
SKU_PREFIX = os.getenv("SKU_PREFIX", "LO-1167-")

# Orders placed before this year never reach the tracking sheet.
TRACKING_START_YEAR = int(os.getenv("TRACKING_START_YEAR", "2024"))

VENDOR_LABEL = "Amazon"
MARKET_LABEL = "AMZ"
INVENTORY_TYPE = "FBA"

# Orders shipped to the prep facility carry the higher prep-and-ship rate.
PREP_FACILITY_MARKER = "POLARIS"
PREP_FACILITY_RATE = Decimal("3")
DIRECT_SHIP_RATE = Decimal("1.85")

# Upload sheet wants mm/dd/yyyy, the tracking sheet is kept in dd/mm/yyyy.
INVENTORY_DATE_FORMAT = "%m/%d/%Y"
TRACKING_DATE_FORMAT = "%d/%m/%Y"

NOT_AVAILABLE = "Not Available"
