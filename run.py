import uvicorn
from common.logging import logger
from common.config import Config
import os


def initialize_app():
    """Initialize the application with necessary setup"""
    os.makedirs(Config.LOG_DIR, exist_ok=True)
    for directory in (Config.CSL_PATH, Config.CSL_DEPENDENT_PATH):
        if not os.path.isdir(directory):
            logger.warning(f"Style directory {directory} does not exist; startup will fail")


def main():
    """Run the CSL style service"""
    initialize_app()
    logger.info(f"Starting CSL style service on {Config.HOST}:{Config.PORT}")
    uvicorn.run("agents.csl.service:app", host=Config.HOST, port=Config.PORT,
                log_level=Config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
