"""TOML config loading for typedecl.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "typedecl.toml"


@dataclass
class TokenizerConfig:
    max_length: int = 65536


@dataclass
class OutputConfig:
    color: bool = True
    indent: int = 2


@dataclass
class TypedeclConfig:
    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find typedecl.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> TypedeclConfig:
    """Parse a typedecl.toml file into a TypedeclConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = TypedeclConfig()

    if "tokenizer" in data:
        tok = data["tokenizer"]
        config.tokenizer = TokenizerConfig(
            max_length=tok.get("max_length", 65536),
        )

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(
            color=out.get("color", True),
            indent=out.get("indent", 2),
        )

    return config


def discover_config(start_path: Path | None = None) -> TypedeclConfig:
    """Load the nearest typedecl.toml, or defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return TypedeclConfig()
