import os
from dotenv import load_dotenv

# Values already in the environment win over the .env file
load_dotenv(override=False)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Simulated latency of the mock food analyzer, in seconds
ANALYZER_DELAY_SECONDS = float(os.getenv("ANALYZER_DELAY_SECONDS", "3.0"))

# CORS origins, comma separated. "*" allows everything (local dev default)
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

# Largest decoded food photo accepted, in bytes
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))
