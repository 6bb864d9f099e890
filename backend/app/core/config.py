from pydantic_settings import BaseSettings
from typing import Optional
import os

class Settings(BaseSettings):
    # Debug settings
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # JSON lines instead of rich console output

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "socat Forward Manager"
    VERSION: str = "1.0.0"

    # Web server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Forwarding tool
    SOCAT_BINARY: str = os.getenv("SOCAT_BINARY", "socat")
    SPAWN_GRACE_SECONDS: float = 0.0  # 0 = don't wait for an early exit
    STOP_WAIT_TIMEOUT: Optional[float] = 10.0  # None = wait forever for the child
    STOP_FORWARDS_ON_SHUTDOWN: bool = True

    # Event log
    MAX_LOG_ENTRIES: int = 100

    # Liveness
    LIVENESS_CHECKER: str = "procfs"  # "procfs" or "psutil"
    PROC_ROOT: str = "/proc"

    # Templates
    TEMPLATE_DIR: str = os.getenv(
        "TEMPLATE_DIR", os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
    )

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_parse_none_str = "None"  # STOP_WAIT_TIMEOUT=None from the environment

settings = Settings()
