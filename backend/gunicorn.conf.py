import os

# Single process: the document store serializes writers with an in-process lock,
# so concurrency comes from threads only.
wsgi_app = "chirpy.wsgi:app"
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8080")
workers = 1
threads = int(os.getenv("GUNICORN_THREADS", "8"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
