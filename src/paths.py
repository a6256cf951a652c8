"""Filesystem locations shared by the settings modules."""

from pathlib import Path

# src/paths.py -> repository root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Optional dotenv file holding TELEGRAM_* and NOTION_* variables
ENV_FILE = PROJECT_ROOT / ".env"
