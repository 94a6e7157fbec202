"""
Roku IAP Relay — Configuration
All settings are read from environment variables with sensible defaults.
The roku client library itself never reads the environment; only the relay does.
"""
import os

# ── Roku ──────────────────────────────────────────────────────────────────────
ROKU_DEV_TOKEN        = os.getenv("ROKU_DEV_TOKEN", "")  # Empty = /validate answers 503
ROKU_IS_PRODUCTION    = os.getenv("ROKU_IS_PRODUCTION", "true").lower() == "true"
ROKU_TIMEOUT_SEC      = float(os.getenv("ROKU_TIMEOUT_SEC", "0"))  # 0 = client default (5s)

# ── Auth ──────────────────────────────────────────────────────────────────────
CLIENT_SECRET         = os.getenv("CLIENT_SECRET", "")  # Empty = dev mode (no auth)

# ── Rate limiting ─────────────────────────────────────────────────────────────
VALIDATE_RATE_LIMIT   = os.getenv("VALIDATE_RATE_LIMIT", "30/minute")

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL             = os.getenv("LOG_LEVEL", "INFO").upper()
