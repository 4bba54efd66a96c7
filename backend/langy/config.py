from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".langy" / "data"
    sqlite_filename: str = "langy.db"
    host: str = "127.0.0.1"
    port: int = 0  # 0 = pick a free port
    log_level: str = "info"
    owner_header: str = "X-Langy-User"
    session_size: int = 0  # 0 = no cap

    model_config = {"env_prefix": "LANGY_"}


settings = Settings()
