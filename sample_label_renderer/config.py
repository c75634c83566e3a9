"""
Shared configuration and constants.
"""

import dataclasses

# PIP3 modules
import PIL.Image


MM_PER_INCH = 25.4
LABEL_DPI = 96.0

DERIVED_KEY_FIELD = "qr_code_key"
CONTENT_KEY_LENGTH = 8

SUPPORTED_FONT_SIZES = (16, 24, 32)
FONT_STYLES = {
	16: "sans-16-black",
	24: "basic-24-black",
	32: "sans-32-black",
}
FONT_FILES = {
	"sans-16-black": "DejaVuSans.ttf",
	"basic-24-black": "DejaVuSansMono.ttf",
	"sans-32-black": "DejaVuSans.ttf",
}
SYSTEM_FONT_DIRS = (
	"/usr/share/fonts/truetype/dejavu",
	"/usr/share/fonts/dejavu",
	"/Library/Fonts",
	"C:/Windows/Fonts",
)

CANVAS_MODE = "RGB"
BACKGROUND_COLOR = (255, 255, 255)
TEXT_COLOR = (0, 0, 0)
QR_FILL_COLOR = "black"
QR_BACK_COLOR = "white"
QR_RESAMPLE = PIL.Image.Resampling.NEAREST

PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10


@dataclasses.dataclass(frozen=True)
class LabelSize:
	length: float
	width: float


@dataclasses.dataclass(frozen=True)
class Position:
	x: int
	y: int


#============================================
def mm_to_pixels(value: float) -> int:
	"""
	Convert millimeters to whole pixels at the label DPI.

	Args:
		value: Millimeters value.

	Returns:
		Pixel count, rounded to the nearest pixel.
	"""
	return int(round(value * LABEL_DPI / MM_PER_INCH))
