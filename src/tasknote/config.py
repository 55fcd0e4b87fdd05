from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including database name, e.g. mongodb://localhost/tasknote?replicaSet=rs0
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8081
    debug: bool = False
    jwt_secret: str  # HMAC signing secret; startup fails without it
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 12
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKNOTE_",
        "extra": "ignore",
    }
