"""
Configuration management for the CalcPipe command line.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Dict, List

import yaml

from calcpipe.calcpipe_builtins import create_default_context
from calcpipe.calcpipe_context import CalcPipeContext


_IDENTIFIER_RE = re.compile(r'^(?:\$[a-zA-Z0-9]*|[a-zA-Z][a-zA-Z0-9]*)$')


@dataclass
class CalcPipeConfig:
    """Configuration for evaluating expressions from the command line."""

    max_depth: int = 100
    constants: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def load_from_file(cls, config_path: str) -> 'CalcPipeConfig':
        """Load configuration from YAML file."""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        return cls(
            max_depth=data.get('max_depth', 100),
            constants=dict(data.get('constants') or {})
        )

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        data = {
            'max_depth': self.max_depth,
            'constants': dict(self.constants)
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            errors.append(f"max_depth must be a positive integer, got {self.max_depth!r}")

        for name, value in self.constants.items():
            if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
                errors.append(f"Constant name {name!r} is not a valid identifier")

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"Constant {name!r} must be a number, got {value!r}")

        return errors

    def create_context(self) -> CalcPipeContext:
        """Build the default context extended with the configured constants."""
        return create_default_context(extra_constants=self.constants)
