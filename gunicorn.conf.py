# Gunicorn configuration for ClinicDesk
import os
import sys

# Add src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

wsgi_app = "clinicdesk.app:app"

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', 8000)}"
backlog = 2048

# Worker processes: login sessions are held in process memory, so more
# than one worker would split them across processes
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
timeout = 30
keepalive = 2

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

# Process naming
proc_name = "clinicdesk"

# Server mechanics
preload_app = True
daemon = False


def on_starting(server):
    server.log.info("Starting ClinicDesk (single worker, in-memory sessions)")
