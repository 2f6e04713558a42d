# Run with: gunicorn -c gunicorn.conf.py "tokenforge:create_app()"

# Bind & workers
bind = "0.0.0.0:8000"
# Keys and revocations are process-local: one worker, many threads.
workers = 1
threads = 8
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override with env LOG_LEVEL

# Respect proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
