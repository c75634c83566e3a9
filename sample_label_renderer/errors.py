"""
Error types raised while rendering labels.
"""


class LabelRenderError(Exception):
	"""Base class for every render failure."""


class EncodingError(LabelRenderError):
	"""Raised when a QR payload does not fit the symbology."""


class ConfigurationError(LabelRenderError):
	"""Raised when a layout descriptor fails shape validation."""


class MissingFieldError(LabelRenderError):
	"""Raised when a text template names a field the sample lacks."""

	def __init__(self, field_name: str):
		self.field_name = field_name
		super().__init__(f"Sample has no field named '{field_name}'")


class UnsupportedFontSizeError(LabelRenderError):
	"""Raised when a text placement asks for a font size outside the fixed set."""

	def __init__(self, font_size: object):
		self.font_size = font_size
		super().__init__(f"Unsupported font size: {font_size}")
