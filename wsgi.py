from sprayline import create_app

app = create_app()

# Serve with gunicorn: gunicorn -w 2 wsgi:app
