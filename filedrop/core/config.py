
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv(override=True)

@dataclass
class Settings:
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "files")
    MAX_FILE_SIZE: int = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))  # 10MB
    MAX_FILES: int = int(os.getenv("MAX_FILES", "10"))
    DEFAULT_LIMIT: int = int(os.getenv("DEFAULT_LIMIT", "20"))
    DEFAULT_OFFSET: int = int(os.getenv("DEFAULT_OFFSET", "0"))
    SEARCH_WORKERS: int = int(os.getenv("SEARCH_WORKERS", "4"))
    FILES_URL_PREFIX: str = os.getenv("FILES_URL_PREFIX", "/api/files")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
