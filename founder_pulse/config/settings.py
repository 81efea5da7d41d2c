"""Application-wide configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()

# Redis
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

# ── Check-in Journal ─────────────────────────────────────────────────────

NOTES_MAX_LENGTH: int = int(os.getenv("NOTES_MAX_LENGTH", "500"))

# Entries looked at when computing trends after a check-in
HISTORY_WINDOW_DAYS: int = int(os.getenv("HISTORY_WINDOW_DAYS", "7"))

# ── Action Plan ──────────────────────────────────────────────────────────

STATS_WINDOW_DAYS: int = int(os.getenv("STATS_WINDOW_DAYS", "7"))
STREAK_LOOKBACK_DAYS: int = int(os.getenv("STREAK_LOOKBACK_DAYS", "365"))

# Archetype assumed when a user asks for actions before taking the assessment
DEFAULT_ARCHETYPE: str = os.getenv("DEFAULT_ARCHETYPE", "Balanced Founder")

# ── Data Retention ───────────────────────────────────────────────────────

# Check-ins, burnout scores and actions older than this are purged by cleanup
DATA_RETENTION_DAYS: int = int(os.getenv("DATA_RETENTION_DAYS", "365"))

# Shared secret the scheduler sends as X-Cron-Secret; cleanup is refused when unset
CRON_SECRET: str = os.getenv("CRON_SECRET", "")

# ── Insights (optional text-generation collaborator) ─────────────────────

INSIGHTS_API_KEY: str = os.getenv("INSIGHTS_API_KEY", "")
INSIGHTS_API_URL: str = os.getenv(
    "INSIGHTS_API_URL", "https://api.groq.com/openai/v1/chat/completions"
)
INSIGHTS_MODEL: str = os.getenv("INSIGHTS_MODEL", "llama-3.1-8b-instant")
INSIGHTS_TIMEOUT_SECONDS: float = float(os.getenv("INSIGHTS_TIMEOUT_SECONDS", "10.0"))

# ── Server Configuration ─────────────────────────────────────────────────

SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
