"""
Gunicorn configuration for the widget API.

    gunicorn -c gunicorn.conf.py run:app
"""
import os

bind = f"0.0.0.0:{os.getenv('API_PORT', '3001')}"

# Worker configuration
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
timeout = 60
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info')
capture_output = True

# Process naming
proc_name = 'widget-sample-app'

# Tables are created and seeded once in the master before forking
preload_app = True

graceful_timeout = 30


def on_starting(server):
    print("[Gunicorn] Starting widget API server...")


def on_exit(server):
    print("[Gunicorn] Widget API server shutting down...")
