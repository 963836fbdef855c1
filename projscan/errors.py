from __future__ import annotations


class ScanError(Exception):
	"""Base class for failures surfaced by the directory scanner."""


class PathNotFound(ScanError):
	def __init__(self, path: str):
		super().__init__(f"Path not found: {path}")
		self.path = path


class PermissionDenied(ScanError):
	def __init__(self, path: str):
		super().__init__(f"Permission denied: {path}")
		self.path = path


class LimitExceeded(ScanError):
	def __init__(self, path: str, size: int, limit: int):
		super().__init__(f"Scan limit exceeded: {path} is {size} bytes (limit {limit})")
		self.path = path
		self.size = size
		self.limit = limit


class InvalidConfig(ScanError):
	def __init__(self, message: str):
		super().__init__(f"Invalid configuration: {message}")
