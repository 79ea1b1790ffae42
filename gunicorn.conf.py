"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async worker. The session dataset lives in process memory, so a
# single worker keeps every request on the same upload and filter selection.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

# Uploads are parsed in-request; large files need more than the default 30s
timeout = 120

graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("CREDIT_TRENDS_LOG_LEVEL", "info").lower()
