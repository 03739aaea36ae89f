import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

class Settings:
    # Project Root (calculated relative to this file)
    ROOT_DIR: Path = Path(__file__).resolve().parents[3]

    # Interactive grid size range
    MIN_GRID_SIZE: int = int(os.getenv("NONOGRAM_MIN_SIZE", "5"))
    MAX_GRID_SIZE: int = int(os.getenv("NONOGRAM_MAX_SIZE", "50"))
    DEFAULT_COLUMNS: int = int(os.getenv("NONOGRAM_DEFAULT_COLUMNS", "15"))

    # Export
    EXPORT_DIR: Path = ROOT_DIR / os.getenv("EXPORT_PATH", "exports")
    RENDER_DPI: int = int(os.getenv("NONOGRAM_RENDER_DPI", "150"))

settings = Settings()
