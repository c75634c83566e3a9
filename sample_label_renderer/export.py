"""
Encoding rendered labels for printers and callers.
"""

# Standard Library
import io
import json
import pathlib

# PIP3 modules
import PIL.Image
import pypdf
import reportlab.lib.units
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.config
import sample_label_renderer.fonts
import sample_label_renderer.layout
import sample_label_renderer.render


LabelSize = slr.config.LabelSize
LayoutDescriptor = slr.layout.LayoutDescriptor
RenderedLabel = slr.render.RenderedLabel

LABEL_DPI = slr.config.LABEL_DPI


#============================================
def encode_png(image: PIL.Image.Image) -> bytes:
	"""
	Encode a label image as PNG bytes.

	Args:
		image: Label image.

	Returns:
		PNG data.
	"""
	buffer = io.BytesIO()
	image.save(buffer, format="PNG", dpi=(LABEL_DPI, LABEL_DPI))
	return buffer.getvalue()


#============================================
def sanitize_token(value: str) -> str:
	"""
	Sanitize a string for filenames.

	Args:
		value: Input string.

	Returns:
		Sanitized string.
	"""
	result: list[str] = []
	for char in value:
		if char.isalnum():
			result.append(char)
		else:
			result.append("_")
	sanitized = "".join(result).strip("_")
	if not sanitized:
		return "label"
	return sanitized


#============================================
def build_label_pdf(image: PIL.Image.Image, label_size: LabelSize) -> bytes:
	"""
	Build a one page PDF the size of the physical label.

	Args:
		image: Label image.
		label_size: Physical size in millimeters.

	Returns:
		PDF data.
	"""
	page_width = label_size.length * reportlab.lib.units.mm
	page_height = label_size.width * reportlab.lib.units.mm
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(page_width, page_height))
	pdf.drawImage(
		reportlab.lib.utils.ImageReader(image),
		0,
		0,
		width=page_width,
		height=page_height,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)
	pdf.showPage()
	pdf.save()
	return buffer.getvalue()


#============================================
def write_labels_pdf(labels: list[RenderedLabel], output_path: pathlib.Path) -> int:
	"""
	Write a print batch with one label per page.

	Args:
		labels: Rendered labels.
		output_path: Output PDF path.

	Returns:
		Number of pages written.
	"""
	writer = pypdf.PdfWriter()
	for label in labels:
		reader = pypdf.PdfReader(io.BytesIO(build_label_pdf(label.image, label.label_size)))
		writer.add_page(reader.pages[0])
	with output_path.open("wb") as handle:
		writer.write(handle)
	return len(labels)


#============================================
def write_label_pngs(labels: list[RenderedLabel], output_dir: pathlib.Path) -> list[pathlib.Path]:
	"""
	Write each label to its own PNG file.

	Args:
		labels: Rendered labels.
		output_dir: Output directory.

	Returns:
		Written file paths.
	"""
	output_dir.mkdir(parents=True, exist_ok=True)
	paths: list[pathlib.Path] = []
	for index, label in enumerate(labels, start=1):
		path = output_dir / f"label_{index:03d}_{sanitize_token(label.content_key)}.png"
		path.write_bytes(encode_png(label.image))
		paths.append(path)
	return paths


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	labels: list[RenderedLabel],
	layout: LayoutDescriptor,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		labels: Rendered labels.
		layout: Layout used for the batch.
	"""
	width_px, height_px = slr.render.compute_canvas_size(layout.label_size)
	data = {
		"labels": [
			{
				"content_key": label.content_key,
				"width_px": label.image.width,
				"height_px": label.image.height,
			}
			for label in labels
		],
		"total_labels": len(labels),
		"layout": {
			"entities": len(layout.entities),
			"label_length_mm": layout.label_size.length,
			"label_width_mm": layout.label_size.width,
			"canvas_width_px": width_px,
			"canvas_height_px": height_px,
			"dpi": LABEL_DPI,
		},
		"fonts": {
			str(size): slr.fonts.get_font_style(size)
			for size in slr.config.SUPPORTED_FONT_SIZES
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
