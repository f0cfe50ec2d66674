import os


class Settings:
    # API Settings
    PROJECT_NAME: str = "Quaternion Registration API"
    VERSION: str = "1.0.0"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8005))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "true").lower() == "true"
    LOG_DIR: str = os.getenv(
        "LOG_DIR",
        os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "config", "logs"),
    )

    # Registration Settings
    QUATREG_STRICT: bool = os.getenv("QUATREG_STRICT", "true").lower() == "true"
    QUATREG_WELL_POSED_TOLERANCE: float = float(os.getenv("QUATREG_WELL_POSED_TOLERANCE", 1e-9))
    QUATREG_CHUNK_SIZE: int = int(os.getenv("QUATREG_CHUNK_SIZE", 0))  # 0 = single batch
    QUATREG_WORKERS: int = int(os.getenv("QUATREG_WORKERS", 1))

    # Quality thresholds (same units as the input points)
    QUATREG_EXCELLENT_ERROR: float = float(os.getenv("QUATREG_EXCELLENT_ERROR", 1e-6))
    QUATREG_MAX_ERROR: float = float(os.getenv("QUATREG_MAX_ERROR", 0.05))

    def engine_config(self) -> dict:
        """Registration engine config dict built from the environment."""
        return {
            "strict": self.QUATREG_STRICT,
            "tolerance": self.QUATREG_WELL_POSED_TOLERANCE,
            "chunk_size": self.QUATREG_CHUNK_SIZE or None,
            "workers": self.QUATREG_WORKERS,
            "excellent_error": self.QUATREG_EXCELLENT_ERROR,
            "max_error": self.QUATREG_MAX_ERROR,
        }


settings = Settings()
