"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "patchbay"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Wire/connector colors that do not come from a scope definition
    ambiguous_color: str = "#777777"
    unknown_wire_color: str = "black"
    unknown_connector_color: str = "white"

    # Gap between the preview wire's tip and the cursor or snapped connector
    preview_margin: float = 5.0
    default_raster: int = 0
    max_sessions: int = 50

    model_config = {"env_prefix": "PATCHBAY_"}


settings = Settings()
