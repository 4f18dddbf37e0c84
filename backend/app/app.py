import logging

from app.core.config import get_port
from app.main import create_app

logger = logging.getLogger(__name__)

# Create Flask app
app = create_app()

if __name__ == "__main__":
    port = get_port()
    logger.info("Starting development server", extra={"context": {"port": port}})
    app.run(host="0.0.0.0", port=port, debug=True)
