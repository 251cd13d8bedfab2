"""The validation error record reported by every failing rule."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .path import PropertyPath


@dataclass(frozen=True)
class ValidationError:
    """A single validation failure.

    Attributes:
        path: Where in the validated value the failure occurred
        message: Human-readable description, never empty
        code: Optional machine-readable tag (e.g. for i18n lookup)
        group: Optional display label attached by a ``group`` block
    """

    path: PropertyPath
    message: str
    code: str | None = None
    group: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.path, str):
            object.__setattr__(self, "path", PropertyPath.parse(self.path))
        if not self.message:
            raise ValueError("ValidationError message cannot be empty")

    @classmethod
    def root(
        cls,
        message: str,
        code: str | None = None,
        group: str | None = None,
    ) -> ValidationError:
        """Create an error at the empty path."""
        return cls(PropertyPath.EMPTY, message, code, group)

    def with_path(self, path: PropertyPath) -> ValidationError:
        """Copy of this error relocated to ``path``."""
        return replace(self, path=path)

    def with_group(self, group: str | None) -> ValidationError:
        """Copy of this error carrying ``group`` as its label."""
        return replace(self, group=group)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary, rendering the path as text.

        Returns:
            Dictionary with path, message and, when set, code and group
        """
        data: dict[str, Any] = {"path": str(self.path), "message": self.message}
        if self.code is not None:
            data["code"] = self.code
        if self.group is not None:
            data["group"] = self.group
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationError:
        """Create an error from its dictionary form.

        Args:
            data: Dictionary as produced by ``to_dict``

        Returns:
            ValidationError instance
        """
        return cls(
            path=PropertyPath.parse(data.get("path", "")),
            message=data["message"],
            code=data.get("code"),
            group=data.get("group"),
        )
