"""
Configuration for the Content MathML parser
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml


# Each nesting level costs several interpreter frames; deeper limits would
# hit the default recursion limit before the depth check fires.
MAX_DEPTH_LIMIT = 150


@dataclass
class ParserConfig:
    """Parser configuration."""
    # General settings
    verbose: bool = False
    debug: bool = False

    # Structure
    max_depth: int = 128
    root_tag: str = "math"

    # Sanitizer: entity names registered on top of the Greek letters
    extra_entities: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate settings."""
        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")
        if self.max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must not exceed {MAX_DEPTH_LIMIT}, got {self.max_depth}")
        if not self.root_tag:
            raise ValueError("root_tag must not be empty")
        self.extra_entities = list(self.extra_entities)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ParserConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'ParserConfig':
        """Load configuration from a YAML or JSON file."""
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a mapping")
        return cls.from_dict(data)
