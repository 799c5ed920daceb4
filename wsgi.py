"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 --threads 8 -b 0.0.0.0:8000 wsgi:app
"""

from lotto_room import create_app

app = create_app()
