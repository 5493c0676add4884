"""
Example config (local-only). Copy to config_local.py if you need overrides.

Prefer environment variables (or .env) for everything:

THREADPULSE_APP_NAME=threadpulse
THREADPULSE_LOG_LEVEL=INFO
THREADPULSE_LOG_DIR=.local/threadpulse
THREADPULSE_LOG_TO_FILE=true

THREADPULSE_DEFAULT_TYPE=concurrent
THREADPULSE_DEFAULT_PRIORITY=normal
THREADPULSE_ITERATOR_INTERVAL_MS=100
"""

# Allowed overrides (read by threadpulse.config):
# DEFAULT_TYPE = "sequential"
# DEFAULT_PRIORITY = "high"
