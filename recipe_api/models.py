from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    name: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "Recipe":
        """Build a recipe from decoded JSON, raising :class:`ValueError` if malformed."""

        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object.")

        values = {}
        for field in ("name", "description"):
            if field not in data:
                raise ValueError(f"Missing required field '{field}'.")
            if not isinstance(data[field], str):
                raise ValueError(f"Field '{field}' must be a string.")
            values[field] = data[field]

        return cls(**values)


__all__ = ["Recipe"]
