"""Configuration management for the patient records dashboard"""
from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()

@dataclass(frozen = True)
class Settings:
    source_url: str = os.getenv("PATIENTS_SOURCE_URL", "https://jsonplaceholder.typicode.com/users")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "10"))  # seconds, one-shot fetch
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    ## api server
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))

SETTINGS = Settings()
