"""Constants for FieldForm application"""

# ==================== File Paths ====================
DATABASE_PATH = "data/fieldform.db"
LOG_FILE_DEFAULT = "data/fieldform.log"

# ==================== Validation ====================
INVALID_SCHEMA_MESSAGE = "Invalid schema"
EMAIL_PATTERN = r"[^\s@]+@[^\s@]+\.[^\s@]+"
CONDITION_PATTERN = r"([><=]+)(\d+\.?\d*)"
LEADING_NUMBER_PATTERN = r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"

# Textual date formats accepted besides ISO 8601
DATE_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
)

# ==================== AI Generation ====================
AI_BASE_URL_DEFAULT = "https://api.openai.com/v1"
AI_MODEL_DEFAULT = "gpt-4o-mini"
AI_API_KEY_PLACEHOLDER = "your_openai_api_key_here"
AI_MAX_RETRIES = 3
AI_RETRY_DELAY = 2  # seconds

# ==================== Timeouts (seconds) ====================
TIMEOUT_AI_REQUEST = 60
TIMEOUT_HTTP_REQUEST = 30

# ==================== Dashboard ====================
DASHBOARD_RECENT_LIMIT = 5

# ==================== Template Names ====================
TEMPLATE_SCHEMA_PROMPT = "schema_prompt.j2"
TEMPLATE_REPORT_PROMPT = "report_prompt.j2"

# ==================== HTTP Headers ====================
HEADER_USER_ID = "X-User-Id"
HEADER_USER_ROLE = "X-User-Role"

# ==================== Database Configuration ====================
DB_MAX_CONNECTIONS = 20
DB_STALE_TIMEOUT = 300  # 5 minutes
DB_JOURNAL_MODE = "wal"
DB_SYNCHRONOUS = "NORMAL"
DB_BUSY_TIMEOUT = 5000  # 5 seconds
DB_CACHE_SIZE = -64 * 1000  # 64MB

# ==================== Database Pragmas ====================
DB_PRAGMAS = {
    "journal_mode": DB_JOURNAL_MODE,
    "synchronous": DB_SYNCHRONOUS,
    "busy_timeout": DB_BUSY_TIMEOUT,
    "foreign_keys": 1,
    "cache_size": DB_CACHE_SIZE,
}
