# excsig/config.py
import os
import json
from typing import Any, Optional

from excsig.errors import ExcSigConfigError

DEFAULT_LOG_FILE = "~/.excsig/excsig.log"


def _default_data() -> dict:
    return {
        "preprocess_messages": True,
        "include_full_stack_trace": True,
        "traverse_inner": True,
        "log_level": "INFO",
        "log_to_file": False,
        "log_file": DEFAULT_LOG_FILE,
    }


class SignatureConfig:
    def __init__(self, **kwargs):
        data = _default_data()
        data.update(kwargs)
        data["log_file"] = os.path.expanduser(data["log_file"])
        self._data = data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __getattr__(self, name: str) -> Any:
        if name in self._data:
            return self._data[name]
        raise AttributeError(f"'SignatureConfig' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "_data":
            super().__setattr__(name, value)
        else:
            self._data[name] = value

    def to_dict(self) -> dict:
        return dict(self._data)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "SignatureConfig":
        config_path = os.path.expanduser(path) if path else os.path.join(_ensure_excsig_dir(), "config.json")
        if not os.path.exists(config_path):
            default_cfg = _default_data()
            try:
                with open(config_path, "w") as f:
                    json.dump(default_cfg, f, indent=2)
            except OSError as e:
                raise ExcSigConfigError(f"Failed to write default config to {config_path}: {e}")
            return cls(**default_cfg)

        try:
            with open(config_path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ExcSigConfigError(f"Failed to load config from {config_path}: {e}")
        if not isinstance(data, dict):
            raise ExcSigConfigError(f"Config in {config_path} must be a JSON object")
        return cls(**data)

    def save(self, path: Optional[str] = None) -> None:
        config_path = os.path.expanduser(path) if path else os.path.join(_ensure_excsig_dir(), "config.json")
        try:
            with open(config_path, "w") as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            raise ExcSigConfigError(f"Failed to save excsig config: {e}")


def _ensure_excsig_dir() -> str:
    """Ensure that ~/.excsig/ directory exists. Return its path."""
    home = os.path.expanduser("~")
    excsig_dir = os.path.join(home, ".excsig")
    os.makedirs(excsig_dir, exist_ok=True)
    return excsig_dir
