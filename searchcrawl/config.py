import os
import logging
from pathlib import Path
from typing import Optional

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")


DEFAULT_IGNORED_EXTENSIONS = (
	".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".bmp",
	".zip", ".css", ".js", ".xml", ".ico",
	".woff", ".woff2", ".ttf",
)


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_list_env(name: str, default: tuple) -> tuple:
	"""Read a comma-separated list; blank items are dropped."""
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return tuple(default)
	return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


def ignored_extensions() -> tuple:
	return get_list_env("IGNORED_EXTENSIONS", DEFAULT_IGNORED_EXTENSIONS)


def log_level() -> str:
	return (get_str_env("LOG_LEVEL", "INFO") or "INFO").strip().upper()
