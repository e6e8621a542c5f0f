import os
import multiprocessing

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))

threads = 3
worker_class = "gthread"

wsgi_app = "podsync.wsgi:application"

# The maximum number of requests a worker will process before restarting.
max_requests = 1000

log_dir = os.getenv("LOGGING_DIR_GUNICORN", "")
errorlog = log_dir + "error.log" if log_dir else "-"
accesslog = log_dir + "access.log" if log_dir else "-"
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(T)s "%(f)s" "%(a)s"'

timeout = 120
graceful_timeout = 60
