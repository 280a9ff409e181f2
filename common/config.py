import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    CSL_PATH = os.getenv("CSL_PATH", "./csl")
    CSL_DEPENDENT_PATH = os.getenv(
        "CSL_DEPENDENT_PATH", os.path.join(CSL_PATH, "dependent"))
    CSL_EXTENSION = ".csl"
    STYLE_HOST = os.getenv("STYLE_HOST", "www.zotero.org")
    STYLE_PATH_PREFIX = "/styles/"
    MAX_RESOLUTION_HOPS = int(os.getenv("MAX_RESOLUTION_HOPS", 8))
    LOG_DIR = os.getenv("LOG_DIR", "./logs/")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 8085))
