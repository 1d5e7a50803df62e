import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Game
    ROUND_DURATION_SEC = int(os.environ.get("ROUND_DURATION_SEC", "40"))
    MAX_ROUNDS = int(os.environ.get("MAX_ROUNDS", "5"))
    SCORE_REWARD = int(os.environ.get("SCORE_REWARD", "10"))
    ROUND_COOLDOWN_SEC = float(os.environ.get("ROUND_COOLDOWN_SEC", "3"))
    DEFAULT_CATEGORY = os.environ.get("DEFAULT_CATEGORY", "food")
    NICKNAME_MAX_LENGTH = int(os.environ.get("NICKNAME_MAX_LENGTH", "16"))
