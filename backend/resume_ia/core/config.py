from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    app_name: str = "resume_ia"
    environment: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    database_url: str = "sqlite:///./resume_ia.db"
    auto_create_tables: bool = True

    audio_dir: str = "./data/audio"
    rate_limit_per_min: int = 60

    llm_provider: str = "gemini"
    google_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    llm_timeout_s: int = 60
    llm_temperature: float = 0.2

    youtube_api_key: str | None = None
    youtube_api_url: str = "https://www.googleapis.com/youtube/v3/videos"
    wikipedia_api_url: str = "https://fr.wikipedia.org/w/api.php"
    http_timeout_s: int = 10

    firebase_api_key: str | None = None
    firebase_project_id: str | None = None
    identity_api_url: str = "https://identitytoolkit.googleapis.com/v1"

    min_text_length: int = 50
    min_quiz_source_chars: int = 80
    wikipedia_intro_min_chars: int = 100
    max_source_chars: int = 30000

    tts_allow_network: bool = True

    log_level: str = "INFO"


settings = Settings()
