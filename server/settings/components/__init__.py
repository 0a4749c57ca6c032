"""Settings components shared by every environment."""

from pathlib import Path

from decouple import AutoConfig

# Repository root: server/settings/components/__init__.py -> ../../..
BASE_DIR = Path(__file__).parent.parent.parent.parent

# Reads from environment variables first, then from `.env` in BASE_DIR
config = AutoConfig(search_path=BASE_DIR)
