import copy
import sys
from pathlib import Path

import yaml

DEFAULT_CONFIG = {
    "parser": {
        "regexes_path": None,
        "size_limit": 20 * (1 << 23),
        "strategy": "ordered"
    },
    "report": {
        "format": "excel",
        "top_n": 50
    },
    "logging": {
        "level": "WARNING"
    }
}


class Config:
    def __init__(self, config_path=None):
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        if config_path:
            self.load(config_path)

    def load(self, config_path):
        path = Path(config_path)
        if not path.exists():
            print(f"Конфигурация {path} не найдена, используются значения по умолчанию", file=sys.stderr)
            return

        try:
            with open(path, 'r', encoding='utf-8') as f:
                user_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            print(f"Ошибка при загрузке конфигурации: {e}", file=sys.stderr)
            return
        if not isinstance(user_config, dict):
            print(f"Конфигурация {path} должна быть словарём, используются значения по умолчанию", file=sys.stderr)
            return
        self._update_recursive(self.config, user_config)
        print(f"Конфигурация загружена из {path}", file=sys.stderr)

    def _update_recursive(self, d, u):
        for k, v in u.items():
            if isinstance(v, dict):
                d[k] = self._update_recursive(d.get(k, {}), v)
            else:
                d[k] = v
        return d

    def get(self, path, default=None):
        keys = path.split('.')
        val = self.config
        for key in keys:
            if isinstance(val, dict):
                val = val.get(key)
            else:
                return default
        return val if val is not None else default
