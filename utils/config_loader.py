import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = "./configs/config.yaml"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "logging": {
        "level": "WARNING",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
    "metrics": {
        "enabled": False,
    },
}


def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load YAML settings and merge them over the defaults.

    A missing file (or an empty one) yields the defaults.
    """
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    config_path = Path(path or DEFAULT_CONFIG_PATH)
    if not config_path.is_file():
        return settings

    with open(config_path, 'r', encoding='utf-8') as file:
        cfg = yaml.safe_load(file)

    if not cfg:
        return settings
    if not isinstance(cfg, dict):
        raise TypeError(f"{config_path} must contain a mapping of sections")

    for section_name, section in cfg.items():
        section = section or {}
        if not isinstance(section, dict):
            raise TypeError(f"cfg['{section_name}'] must be a mapping of option -> value")
        settings.setdefault(section_name, {}).update(section)
    return settings
