import os

from waitress import serve

from asset_tracker import create_app
from asset_tracker.config import DATA_DIR
from asset_tracker.seed import seed_db

if __name__ == '__main__':
    # Default SQLite database lives in the package data directory
    DATA_DIR.mkdir(exist_ok=True)
    app = create_app()

    # Initialize and seed the database
    with app.app_context():
        seed_db()

    serve(app, host=os.environ.get('HOST', '0.0.0.0'), port=int(os.environ.get('PORT', 5000)))
