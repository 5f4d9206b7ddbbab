from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class ClientSettings(BaseSettings):
    """Client-side settings; independent of the server's database and secrets."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    API_URL: str = "http://localhost:8000"
    AUTH_STORAGE_PATH: str = ".local/auth-storage.json"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

client_settings = ClientSettings()
