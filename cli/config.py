"""
CLI Configuration Management
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Any, Dict


DEFAULT_API_URL = "http://localhost:8000/api/v1"


@dataclass
class CLIConfig:
    """Configuration for the research CLI"""

    # API settings
    api_base_url: str = field(default_factory=lambda: os.environ.get("RESEARCH_API_URL", DEFAULT_API_URL))
    timeout: float = 60.0

    # Output settings
    verbose: bool = False

    # Paths
    config_dir: str = field(
        default_factory=lambda: os.environ.get("RESEARCH_CONFIG_DIR", str(Path.home() / ".research-analysis"))
    )
    session_file: str = "session.json"

    def __post_init__(self):
        """Resolve the session file path and make sure the config dir exists"""
        Path(self.config_dir).mkdir(parents=True, exist_ok=True)
        if not os.path.isabs(self.session_file):
            self.session_file = str(Path(self.config_dir) / self.session_file)

    def load_from_file(self, config_path: str) -> None:
        """Override fields from a JSON config file"""
        path = Path(config_path)
        if not path.exists():
            return
        data = json.loads(path.read_text(encoding="utf-8"))
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
