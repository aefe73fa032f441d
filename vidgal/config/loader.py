import yaml
from pathlib import Path
from .models import AppConfig

def load_config(config_path: Path) -> AppConfig:
    """Loads YAML config and parses it into AppConfig Pydantic model."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    # Sections left empty in YAML parse as None
    for section in ("source", "general"):
        if section in data and data[section] is None:
            del data[section]

    return AppConfig(**data)
