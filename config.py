import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./gradmatch.db")

CATALOG_API_URL = os.getenv("CATALOG_API_URL", "https://college-api-0qgk.onrender.com/find-colleges")
CATALOG_API_TIMEOUT = float(os.getenv("CATALOG_API_TIMEOUT", "15"))
CATALOG_API_RETRIES = int(os.getenv("CATALOG_API_RETRIES", "2"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
