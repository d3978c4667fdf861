import os

from taskboard.app import create_app

# Expose a module-level `app` for WSGI servers (gunicorn expects `wsgi:app`).
app = create_app()


if __name__ == "__main__":
    # Local development only: run the built-in server.
    app.run(
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "5000")),
        debug=app.config["DEBUG"],
    )
