"""
Label compositing.
"""

# Standard Library
import dataclasses
import pathlib
from collections.abc import Mapping, Sequence

# PIP3 modules
import PIL.Image
import PIL.ImageDraw

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.config
import sample_label_renderer.errors
import sample_label_renderer.fonts
import sample_label_renderer.hasher
import sample_label_renderer.layout
import sample_label_renderer.qr_encoder
import sample_label_renderer.template


LabelSize = slr.config.LabelSize
LayoutDescriptor = slr.layout.LayoutDescriptor
QRPlacement = slr.layout.QRPlacement
TextPlacement = slr.layout.TextPlacement
ConfigurationError = slr.errors.ConfigurationError

CANVAS_MODE = slr.config.CANVAS_MODE
BACKGROUND_COLOR = slr.config.BACKGROUND_COLOR
TEXT_COLOR = slr.config.TEXT_COLOR
PROGRESS_BAR_WIDTH = slr.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = slr.config.PROGRESS_UPDATE_EVERY


@dataclasses.dataclass
class RenderedLabel:
	content_key: str
	image: PIL.Image.Image
	label_size: LabelSize


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def compute_canvas_size(label_size: LabelSize) -> tuple[int, int]:
	"""
	Convert a physical label size to canvas pixels.

	Label length runs along the canvas width and label width along its
	height.

	Args:
		label_size: Size in millimeters.

	Returns:
		Tuple of (width_px, height_px).
	"""
	width_px = slr.config.mm_to_pixels(label_size.length)
	height_px = slr.config.mm_to_pixels(label_size.width)
	return (width_px, height_px)


#============================================
def create_canvas(
	width: int,
	height: int,
	background_path: pathlib.Path | None = None,
) -> PIL.Image.Image:
	"""
	Allocate the label canvas.

	Args:
		width: Canvas width in pixels.
		height: Canvas height in pixels.
		background_path: Optional template image stretched to the canvas.

	Returns:
		RGB canvas.
	"""
	if background_path is None:
		return PIL.Image.new(CANVAS_MODE, (width, height), BACKGROUND_COLOR)
	try:
		with PIL.Image.open(background_path) as background:
			canvas = background.convert(CANVAS_MODE).resize((width, height))
	except OSError as error:
		raise ConfigurationError(f"Cannot read background image {background_path}: {error}") from error
	return canvas


#============================================
def draw_qr_entity(
	canvas: PIL.Image.Image,
	qr_image: PIL.Image.Image,
	entity: QRPlacement,
) -> None:
	"""
	Paste the QR bitmap at the entity position.

	The paste overwrites the canvas pixels; nothing is blended.

	Args:
		canvas: Label canvas.
		qr_image: QR bitmap at module resolution.
		entity: QR placement.
	"""
	scaled = slr.qr_encoder.resize_qr(qr_image, entity.size)
	canvas.paste(scaled, (entity.position.x, entity.position.y))


#============================================
def draw_text_entity(
	canvas: PIL.Image.Image,
	entity: TextPlacement,
	sample: Mapping[str, object],
) -> str:
	"""
	Draw a resolved text template at the entity position.

	Args:
		canvas: Label canvas.
		entity: Text placement.
		sample: Sample field mapping.

	Returns:
		The text that was drawn.
	"""
	text = slr.template.resolve_template(entity.text, sample)
	font = slr.fonts.get_font(entity.font_size_px)
	draw = PIL.ImageDraw.Draw(canvas)
	# 1-bit glyphs, no anti-aliasing
	draw.fontmode = "1"
	draw.text((entity.position.x, entity.position.y), text, font=font, fill=TEXT_COLOR)
	return text


#============================================
def compose_label(
	sample: Mapping[str, object],
	layout: LayoutDescriptor,
	content_key: str,
	background_path: pathlib.Path | None = None,
) -> PIL.Image.Image:
	"""
	Draw a label for a sample whose content key is already known.

	Args:
		sample: Sample field mapping.
		layout: Layout descriptor.
		content_key: QR payload.
		background_path: Optional background template image.

	Returns:
		Finished RGB label image.
	"""
	slr.layout.validate_layout(layout)
	width, height = compute_canvas_size(layout.label_size)
	canvas = create_canvas(width, height, background_path)
	qr_image = slr.qr_encoder.encode_qr(content_key)

	for entity in layout.entities:
		if isinstance(entity, QRPlacement):
			draw_qr_entity(canvas, qr_image, entity)
		else:
			draw_text_entity(canvas, entity, sample)
	return canvas


#============================================
def render_label(
	sample: Mapping[str, object],
	layout: LayoutDescriptor,
	background_path: pathlib.Path | None = None,
) -> PIL.Image.Image:
	"""
	Render one label for a sample.

	Args:
		sample: Sample field mapping.
		layout: Layout descriptor.
		background_path: Optional background template image.

	Returns:
		Finished RGB label image.
	"""
	content_key = slr.hasher.resolve_content_key(sample)
	return compose_label(sample, layout, content_key, background_path)


#============================================
def render_labels(
	samples: Sequence[Mapping[str, object]],
	layout: LayoutDescriptor,
	background_path: pathlib.Path | None = None,
	verbose: bool = False,
) -> list[RenderedLabel]:
	"""
	Render labels for a batch of samples.

	Stops at the first failing sample.

	Args:
		samples: Sample field mappings.
		layout: Layout descriptor.
		background_path: Optional background template image.
		verbose: Print a progress bar.

	Returns:
		Rendered labels in sample order.
	"""
	labels: list[RenderedLabel] = []
	total = len(samples)
	if verbose and total > 0:
		print_progress("Labels", 0, total)
	for index, sample in enumerate(samples, start=1):
		content_key = slr.hasher.resolve_content_key(sample)
		image = compose_label(sample, layout, content_key, background_path)
		labels.append(
			RenderedLabel(
				content_key=content_key,
				image=image,
				label_size=layout.label_size,
			)
		)
		if verbose and (index % PROGRESS_UPDATE_EVERY == 0 or index == total):
			print_progress("Labels", index, total)
	if verbose and total > 0:
		print()
	return labels
