"""
Glyph rasterizers for the fixed set of label font sizes.

The registry is built once per process and shared read-only by every
render call.
"""

# Standard Library
import os
import pathlib
import threading
import types
from collections.abc import Mapping

# PIP3 modules
import PIL.ImageFont

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.config
import sample_label_renderer.errors


SUPPORTED_FONT_SIZES = slr.config.SUPPORTED_FONT_SIZES
FONT_STYLES = slr.config.FONT_STYLES
FONT_FILES = slr.config.FONT_FILES
SYSTEM_FONT_DIRS = slr.config.SYSTEM_FONT_DIRS

UnsupportedFontSizeError = slr.errors.UnsupportedFontSizeError

_registry: Mapping[int, PIL.ImageFont.FreeTypeFont] | None = None
_registry_lock = threading.Lock()


#============================================
def find_font_file(style: str, font_dir: pathlib.Path | None = None) -> pathlib.Path | None:
	"""
	Locate the TrueType file bound to a glyph style.

	Args:
		style: Glyph style name.
		font_dir: Optional directory searched before the system ones.

	Returns:
		Font file path, or None when no candidate exists.
	"""
	file_name = FONT_FILES[style]
	search_dirs = [pathlib.Path(entry) for entry in SYSTEM_FONT_DIRS]
	if font_dir is not None:
		search_dirs.insert(0, pathlib.Path(font_dir))
	for directory in search_dirs:
		candidate = directory / file_name
		if os.path.exists(candidate):
			return candidate
	return None


#============================================
def load_font(size: int, font_dir: pathlib.Path | None = None) -> PIL.ImageFont.FreeTypeFont:
	"""
	Load the rasterizer for one supported size.

	Falls back to the font bundled with Pillow when the style's file is
	not installed.

	Args:
		size: Font size in pixels.
		font_dir: Optional font directory.

	Returns:
		Pillow font.
	"""
	path = find_font_file(FONT_STYLES[size], font_dir)
	if path is None:
		return PIL.ImageFont.load_default(size=size)
	return PIL.ImageFont.truetype(str(path), size=size)


#============================================
def init_fonts(font_dir: pathlib.Path | None = None) -> Mapping[int, PIL.ImageFont.FreeTypeFont]:
	"""
	Build the font registry if it does not exist yet.

	Only the first call loads fonts; later calls return the same mapping
	and ignore font_dir.

	Args:
		font_dir: Optional font directory.

	Returns:
		Read-only mapping of size to font.
	"""
	global _registry
	if _registry is not None:
		return _registry
	with _registry_lock:
		if _registry is None:
			fonts = {size: load_font(size, font_dir) for size in SUPPORTED_FONT_SIZES}
			_registry = types.MappingProxyType(fonts)
	return _registry


#============================================
def get_font(size: int) -> PIL.ImageFont.FreeTypeFont:
	"""
	Return the rasterizer for a font size.

	Args:
		size: Font size in pixels.

	Returns:
		Pillow font.
	"""
	if size not in SUPPORTED_FONT_SIZES:
		raise UnsupportedFontSizeError(size)
	return init_fonts()[size]


#============================================
def get_font_style(size: int) -> str:
	"""
	Return the glyph style name bound to a font size.
	"""
	if size not in SUPPORTED_FONT_SIZES:
		raise UnsupportedFontSizeError(size)
	return FONT_STYLES[size]
