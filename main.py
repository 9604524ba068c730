import logging
import os

from app import create_app
from app.config import config

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)

app = create_app(config[os.getenv('FLASK_CONFIG', 'default')])

if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False))
