"""
Gunicorn configuration for the Streakwise API.

Run with:  gunicorn streakwise.main:app -c gunicorn.conf.py

Env vars that override defaults:
  PORT     — TCP port to bind
  WORKERS  — number of worker processes (default: 2)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# With the SQLite default every worker opens the same file; keep this low.
workers = int(os.environ.get("WORKERS", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5
timeout = 60
graceful_timeout = 30

# Access and error logs go to stdout; application logs use the
# "streakwise" logger configured in streakwise.core.logging.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'
