"""Shared constants for the ComplyFlow backend."""

ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"
LOCALHOST = "localhost"
DEV_JWT_SECRET_PLACEHOLDER = "dev-jwt-secret-change-me"

DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 60
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 30

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096

# Generative AI
SYSTEM_INSTRUCTION_PREFIX = "SYSTEM: "
SYSTEM_INSTRUCTION_ACK = "Understood."
EMBEDDING_MAX_CHARS = 10000
EMBEDDING_DIMENSIONS = 768

# Retrieval
KNOWLEDGE_MATCH_THRESHOLD = 0.7
KNOWLEDGE_MATCH_COUNT = 3
ORG_DOCUMENT_MATCH_THRESHOLD = 0.5
ORG_DOCUMENT_MATCH_COUNT = 5
NO_CONTEXT_FOUND = "No specific internal documents found."
DEFAULT_CITATION_SOURCE = "Internal Knowledge Base"

# Knowledge file ingestion
CHUNK_SIZE = 1000
CHUNK_OVERLAP = 200
MIN_MEANINGFUL_TEXT_LENGTH = 50

# Billing
TIER_PREFIX = "tier_"
PLAN_NAMES = {"pro": "Professional", "enterprise": "Enterprise"}
PLAN_AMOUNTS = {"pro": 49, "enterprise": 299}

# Email senders
NOTIFICATIONS_SENDER = "ComplyFlow <notifications@novumsolvo.co.uk>"
TRANSACTIONAL_SENDER = "ComplyFlow <noreply@complyflow.uk>"
ONBOARDING_SENDER = "ComplyFlow <hello@complyflow.uk>"

# Scheduled jobs
TRIAL_LENGTH_DAYS = 14
TRIAL_WARNING_DAYS_LEFT = 3
VISA_ALERT_THRESHOLDS = (90, 60, 30, 14)
VISA_ALERT_ROLES = ("admin", "owner")
DIGEST_LOOKBACK_DAYS = 7
DIGEST_VISA_WINDOW_DAYS = 30
DIGEST_SCORE_TARGET = 80
DIGEST_TOP_UPDATES = 3
NO_REGULATORY_UPDATES = "No new regulatory updates this week."
WELCOME_DRIP_LOG = "welcome_drip_day1"
TRIAL_ENDING_LOG = "trial_ending_day11"

# Compliance alerts
VISA_ALERT_WINDOW_DAYS = 90
VISA_CRITICAL_DAYS = 30

# Regulatory feed
FEED_ITEM_LIMIT = 20
FEED_SUMMARY_MAX_CHARS = 300
RELEVANCE_BASE_SCORE = 30
RELEVANCE_MAX_SCORE = 100
RELEVANCE_STORE_THRESHOLD = 50
RELEVANCE_KEYWORDS = {
    "care home": 20,
    "residential care": 20,
    "nursing home": 20,
    "cqc": 15,
    "care quality commission": 15,
    "safeguarding": 15,
    "inspection": 12,
    "regulation": 10,
    "compliance": 10,
    "staffing": 8,
    "medication": 8,
    "infection": 8,
    "visiting": 8,
    "sponsor licence": 15,
    "right to work": 15,
    "immigration": 10,
    "older people": 5,
    "adult social care": 12,
}

# Trend watchdog
WATCHDOG_DEFAULT_RADIUS_MILES = 10
WATCHDOG_MAX_AREAS = 3
WATCHDOG_MAX_STORED_REPORTS = 50
WATCHDOG_ALERT_LIMIT = 20
CONCERNING_RATINGS = ("Requires improvement", "Inadequate")
POSTCODE_REGIONS = {
    "B": ["B", "WS", "WV", "DY", "CV"],
    "E": ["E", "EC", "N", "NW", "SE", "SW", "W", "WC"],
    "W": ["E", "EC", "N", "NW", "SE", "SW", "W", "WC"],
    "M": ["M", "SK", "OL", "BL", "WN"],
    "LS": ["LS", "WF", "BD", "HX", "HD"],
}

CQC_DOMAINS = [
    ("Safe", "safe"),
    ("Effective", "effective"),
    ("Caring", "caring"),
    ("Responsive", "responsive"),
    ("Well-led", "wellLed"),
]
NOT_RATED = "Not Rated"
