import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

API_KEY = os.getenv("API_KEY")

DATABASE_PATH = os.getenv("DATABASE_PATH", os.path.join("data", "clipforge.db"))
UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")

# Artificial delay used by the placeholder clip generator
PROCESSING_DELAY_SECONDS = float(os.getenv("PROCESSING_DELAY_SECONDS", "2"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Paths that never require the x-api-key header (prefix match, except "/")
PUBLIC_PATHS = [
    "/",
    "/api/uploads/",
    "/api/mock-video/",
]
