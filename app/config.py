"""Application configuration via Pydantic Settings.

NOTE: Store connection parameters are read from the individual DB_* variables
and combined into a SQLAlchemy URL, so passwords with special characters are
escaped correctly. Defaults are for local development only.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Server
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3001, validation_alias="PORT")

    # Database
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: str = Field(default="password", validation_alias="DB_PASSWORD")
    db_name: str = Field(default="counterdb", validation_alias="DB_NAME")
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_pool_timeout: float = Field(default=30.0, validation_alias="DB_POOL_TIMEOUT")
    db_connect_timeout: float = Field(default=10.0, validation_alias="DB_CONNECT_TIMEOUT")
    db_command_timeout: float = Field(default=30.0, validation_alias="DB_COMMAND_TIMEOUT")

    # Counter
    max_increment: int = Field(default=1_000_000, gt=0, validation_alias="MAX_INCREMENT")

    # App
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ORIGINS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def database_url(self) -> URL:
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
