import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="portfolio-api-tests-")

# Pin the environment before anything imports app.core.config.
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["DATA_STORE"] = "sqlite"
os.environ["SQLITE_DB_PATH"] = os.path.join(_TMP_DIR, "portfolio.db")
os.environ["LOG_LEVEL"] = "WARNING"
for _name in ("SENTRY_DSN", "SMTP_HOST", "CONTACT_NOTIFY_EMAIL", "OPENAI_API_KEY", "CLAUDE_API_KEY"):
    os.environ.pop(_name, None)
