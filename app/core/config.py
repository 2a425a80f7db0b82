from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="ai-flashcards", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class FlashcardsSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    model_name: str = Field(default="gemini-2.0-flash", alias="FLASHCARDS_MODEL")
    store_path: str = Field(
        default="flashcards_store.json", alias="FLASHCARDS_STORE_PATH"
    )
    store_key: str = Field(default="ai_flashcard_sets", alias="FLASHCARDS_STORE_KEY")
    batch_size: int = Field(default=5, alias="FLASHCARDS_BATCH_SIZE")
    # Questions must stay under this many words
    max_words: int = Field(default=30, alias="FLASHCARDS_MAX_WORDS")
    switch_seconds: float = Field(default=0.22, alias="FLASHCARDS_SWITCH_SECONDS")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    flashcards: FlashcardsSettings = Field(
        default_factory=lambda: FlashcardsSettings()
    )

    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


settings = Settings()
