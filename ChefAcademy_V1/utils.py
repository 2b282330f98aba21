import json
from pathlib import Path
from typing import Type, Union

from pydantic import BaseModel, RootModel


def clamp(value: int, low: int, high: int) -> int:
    """Limit an integer to the inclusive range [low, high]."""
    return max(low, min(high, int(value)))


def load_json(data_path: Path):
    """Read a UTF-8 JSON file and return the decoded payload."""
    if not data_path.exists():
        raise FileNotFoundError(f"Data file not found: {data_path}")

    with data_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_and_validate(
    data_path: Path, model: Union[Type[RootModel], Type[BaseModel]]
) -> BaseModel:
    """
    Load and validate model data from data_path.
    Returns a validated model instance.
    """
    raw_data = load_json(data_path)
    return model.model_validate(raw_data)
