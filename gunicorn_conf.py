import multiprocessing
import os

# Gunicorn configuration file
# For FastAPI/Uvicorn, we use the UvicornWorker
#   gunicorn task_api.main:app -c gunicorn_conf.py

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

# Token verification is stateless, so any worker can serve any request
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

timeout = 120
keepalive = 5

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

name = "task_api"
reload = False
