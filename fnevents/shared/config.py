from dataclasses import dataclass
import os

@dataclass(frozen=True)
class Settings:
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Header carrying the request trace id (Cloud Run / Functions default)
    trace_header: str = os.getenv("TRACE_HEADER", "x-cloud-trace-context")

settings = Settings()
