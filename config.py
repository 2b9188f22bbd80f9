"""Central configuration for the workout scraper.

All tunable parameters are defined here with descriptive names.
Environment-driven settings (URLs, tokens, match strategy overrides) live in
settings.py and fall back to the defaults below.
"""

# =============================================================================
# DAY RESOLUTION
# =============================================================================

# Weekday labels, indexed like datetime.date.weekday() (Monday == 0)
WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# The scraper runs in the evening for the next day's workout
DAY_OFFSET = 1

DEFAULT_TIMEZONE = "America/Los_Angeles"

# =============================================================================
# CAROUSEL MATCHING
# =============================================================================

# Token substituted with the resolved weekday in both match patterns
DAY_PLACEHOLDER = "{DAY}"

DEFAULT_CAROUSEL_SELECTOR = ".workout-carousel"
DEFAULT_MATCH_STRATEGY = "both"
DEFAULT_ALT_PATTERN = "{DAY}"
DEFAULT_FILENAME_PATTERN = "({DAY})"

# =============================================================================
# BROWSER
# =============================================================================

BROWSER_VIEWPORT = {"width": 1920, "height": 1080}
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
BROWSER_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")

# Timeouts in milliseconds (Playwright convention)
PAGE_LOAD_TIMEOUT_MS = 60000
CAROUSEL_WAIT_TIMEOUT_MS = 10000

# Extra settle time after DOM content loaded, for lazy carousels
DYNAMIC_CONTENT_WAIT_MS = 2000

# =============================================================================
# IMAGE DOWNLOAD
# =============================================================================

# Seconds (requests convention)
DOWNLOAD_TIMEOUT = 30

# =============================================================================
# IMAGE PREPROCESSING
# =============================================================================

# Percentiles mapped to black/white by the contrast stretch
CONTRAST_LOW_PERCENTILE = 1.0
CONTRAST_HIGH_PERCENTILE = 99.0

# Sharpening strength: 0 disables, 1 is the classic 3x3 sharpen kernel
SHARPEN_STRENGTH = 1.0

# Schedules smaller than this are upscaled before OCR (None disables)
MIN_OCR_WIDTH = None

# Bounds for MIN_OCR_WIDTH when set
MIN_UPSCALE_WIDTH = 256
MAX_UPSCALE_WIDTH = 4096

# =============================================================================
# OCR
# =============================================================================

DEFAULT_OCR_ENGINE = "easyocr"
OCR_LANGUAGES = ("en",)
OCR_USE_GPU = False

# Fragments whose vertical centres differ by less than this fraction of the
# fragment height are joined into one line
OCR_LINE_MERGE_RATIO = 0.5

# =============================================================================
# DELIVERY
# =============================================================================

TELEGRAM_API_BASE = "https://api.telegram.org"
TELEGRAM_TIMEOUT = 30
TELEGRAM_MESSAGE_LIMIT = 4096
TELEGRAM_CAPTION_LIMIT = 1024

# Characters of OCR text shown in the photo caption
CAPTION_PREVIEW_LENGTH = 200

# Characters of OCR text kept in WorkoutReport.text_preview
REPORT_PREVIEW_LENGTH = 300
