import os


class Settings:
    PROJECT_NAME: str = "vocabquiz"
    DEBUG: bool = False
    LOG_DIR: str = "log"
    LOG_FILE: str = "vocabquiz.log"
    LOG_TO_DB: bool = os.environ.get("LOG_TO_DB", "") == "1"
    DB_DIR: str = "db"
    DB_FILE: str = "vocabquiz.db"
    CATALOG_FILE: str = os.environ.get("CATALOG_FILE", "data/words.json")
    # Extra draws allowed on top of catalog size x relations per mode
    GENERATION_RETRY_PADDING: int = 3
    SESSION_COOKIE_NAME: str = "quiz_session_id"
    SESSION_TIMEOUT_MINUTES: int = 120
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")


settings = Settings()
