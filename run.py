# run.py
import logging
import uvicorn
from dotenv import load_dotenv

load_dotenv()

from checkout_relay.core.config import get_settings  # noqa: E402

settings = get_settings()

handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=handlers,
)

def main():
    # Start the server
    uvicorn.run(
        "checkout_relay.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )

if __name__ == "__main__":
    main()
