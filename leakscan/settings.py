import os

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY") or os.getenv("OPENAI_API_KEY_ENV_VAR")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-5")

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

PASSWORD_ITERATIONS = int(os.getenv("PASSWORD_ITERATIONS", "150000"))
