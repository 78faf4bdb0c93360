from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


def load_env(env_file: str | Path | None = None) -> None:
	"""Load environment variables from an `.env` file if present."""
	env_path = Path(env_file) if env_file else Path(".env")
	if env_path.exists():
		load_dotenv(env_path)


class Config(BaseSettings):
	"""Runtime configuration loaded from environment variables."""

	model_config = SettingsConfigDict(env_prefix="",
	                                  case_sensitive=False,
	                                  populate_by_name=True)

	log_level: str = Field(
	    "warning",
	    alias="MD_LOG_LEVEL",
	    description="Log level for the md CLI (logs go to stderr)",
	)
	json_output: bool = Field(
	    False,
	    alias="MD_JSON",
	    description="Emit JSON instead of text when no flag is given",
	)
	extensions: Any = Field(
	    default_factory=lambda: [".md"],
	    alias="MD_EXTENSIONS",
	    description="File suffixes matched when expanding glob patterns",
	)
	concat_shift: int = Field(
	    0,
	    alias="MD_CONCAT_SHIFT",
	    description="Default heading shift applied by `md concat`",
	)

	@field_validator("extensions", mode="before")
	@classmethod
	def split_extensions(cls, v: Any) -> list[str]:
		"""Normalize extensions to a list of dotted suffixes."""
		if v is None or v == "":
			return [".md"]
		if isinstance(v, (list, tuple)):
			items = [str(p).strip() for p in v]
		else:
			# fallback: comma-separated string
			items = [p.strip() for p in str(v).split(",")]
		return [p if p.startswith(".") else f".{p}" for p in items if p]

	@field_validator("concat_shift")
	@classmethod
	def validate_shift(cls, v: int) -> int:
		if v < 0:
			raise ValueError("concat_shift must be >= 0")
		return v

	def apply_overrides(self, **overrides: Any) -> None:
		"""Apply CLI overrides onto this config.

		Only non-None values are applied, preserving environment-based
		defaults for anything the user didn't explicitly set.
		"""
		for field, value in overrides.items():
			if value is not None and field in type(self).model_fields:
				setattr(self, field, value)


__all__ = ["Config", "load_env"]
