"""
Diary Notes Client — Configuration
===================================

What:  Where the client finds the API and how long it waits for it.
How:   Pydantic Settings with the `DIARY_` prefix (DIARY_API_URL,
       DIARY_TIMEOUT), or a .env file.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    # URL of the notes collection; item URLs are `{api_url}/{id}`
    api_url: str = Field(default="http://localhost:5000/notes")

    # Seconds before a request is abandoned and reported as a failure
    timeout: float = Field(default=10.0, gt=0, le=120)

    model_config = {
        "env_prefix": "DIARY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }
