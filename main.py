"""Vercel/WSGI entrypoint.

Vercel's Flask detection looks for an `app` object in files like `main.py`.
"""

from lottori import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=False)
