"""
WSGI entrypoint

    gunicorn wsgi:app
    python wsgi.py
"""
import os

from contract_review import create_app

app = create_app(os.environ.get("FLASK_CONFIG", "default"))


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", "5000")))
