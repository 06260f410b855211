import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

DEFAULT_FORMAT = os.getenv("SAFECONFIG_DEFAULT_FORMAT", "yaml")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("SAFECONFIG_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
HOST = os.getenv("SAFECONFIG_HOST", "0.0.0.0")
PORT = int(os.getenv("SAFECONFIG_PORT", "4000"))
LOG_LEVEL = os.getenv("SAFECONFIG_LOG_LEVEL", "INFO").upper()
