import os
from dotenv import load_dotenv

load_dotenv()  # Load from .env file

# Storage
LOCAL_DATABASE_URL = os.getenv("LOCAL_DATABASE_URL", "sqlite:///./jrl_local.db")
REMOTE_DATABASE_URL = os.getenv("REMOTE_DATABASE_URL", "sqlite:///./jrl_remote.db")

# Token & Auth
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Remote store deadlines (seconds)
CREATE_TIMEOUT_SECONDS = float(os.getenv("CREATE_TIMEOUT_SECONDS", "3"))
WRITE_TIMEOUT_SECONDS = float(os.getenv("WRITE_TIMEOUT_SECONDS", "5"))
READ_TIMEOUT_SECONDS = float(os.getenv("READ_TIMEOUT_SECONDS", "5"))

# Translation
SOURCE_LANGUAGE = os.getenv("SOURCE_LANGUAGE", "en")
SUPPORTED_LANGUAGES = os.getenv("SUPPORTED_LANGUAGES", "en,es,fr,de,zh,ja,bn,hi,pt").split(",")
TRANSLATOR = os.getenv("TRANSLATOR", "placeholder")  # "placeholder" or "openai"

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_CHAT_MODEL = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")

# Display
EXCERPT_LENGTH = int(os.getenv("EXCERPT_LENGTH", "150"))
WORDS_PER_MINUTE = int(os.getenv("WORDS_PER_MINUTE", "200"))

# Drafts
DRAFT_MAX_AGE_DAYS = int(os.getenv("DRAFT_MAX_AGE_DAYS", "7"))

# Network
NETWORK_PROBE_URL = os.getenv("NETWORK_PROBE_URL", "https://www.google.com/favicon.ico")

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
