from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    data_file: str = os.getenv("RESULT_ANALYZER_DATAFILE", "students.dat")
    max_students: int = int(os.getenv("RESULT_ANALYZER_MAX_STUDENTS", "200"))
    max_name: int = int(os.getenv("RESULT_ANALYZER_MAX_NAME", "59"))
    bar_width: int = int(os.getenv("RESULT_ANALYZER_BAR_WIDTH", "40"))

    ui_mode: str = os.getenv("RESULT_ANALYZER_UI", "console").strip().lower()
    port: int = int(os.getenv("PORT", "8550"))
    log_level: str = os.getenv("RESULT_ANALYZER_LOG_LEVEL", "WARNING").upper()


settings = Settings()
