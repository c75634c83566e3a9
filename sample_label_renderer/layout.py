"""
Layout descriptors and parsing of stored layout documents.
"""

# Standard Library
import dataclasses
import json
import math
import numbers
import pathlib
from collections.abc import Iterable, Mapping

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.config
import sample_label_renderer.errors


LabelSize = slr.config.LabelSize
Position = slr.config.Position
ConfigurationError = slr.errors.ConfigurationError

FONT_SIZE_KEYS = ("fontSizePx", "fontSizePX")


@dataclasses.dataclass(frozen=True)
class QRPlacement:
	position: Position
	size: int

	@property
	def kind(self) -> str:
		return "qr"


@dataclasses.dataclass(frozen=True)
class TextPlacement:
	position: Position
	font_size_px: int
	text: str

	@property
	def kind(self) -> str:
		return "text"


PlacementEntity = QRPlacement | TextPlacement


@dataclasses.dataclass(frozen=True)
class LayoutDescriptor:
	entities: tuple[PlacementEntity, ...]
	label_size: LabelSize


#============================================
def is_number(value: object) -> bool:
	"""
	Check for a finite real number that is not a bool.
	"""
	if isinstance(value, bool) or not isinstance(value, numbers.Real):
		return False
	return math.isfinite(value)


#============================================
def parse_int_value(value: object, name: str) -> int:
	"""
	Parse a whole number from a layout document.

	Args:
		value: Raw value.
		name: Field name for error messages.

	Returns:
		Integer value.
	"""
	if not is_number(value):
		raise ConfigurationError(f"{name} must be a number, got {value!r}")
	if float(value) != int(value):
		raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
	return int(value)


#============================================
def parse_position(value: object) -> Position:
	"""
	Parse an {x, y} pixel position.

	Args:
		value: Raw position mapping.

	Returns:
		Position.
	"""
	if not isinstance(value, Mapping):
		raise ConfigurationError(f"position must be an object with x and y, got {value!r}")
	if "x" not in value or "y" not in value:
		raise ConfigurationError(f"position needs both x and y, got {dict(value)!r}")
	x = value["x"]
	y = value["y"]
	if not is_number(x) or not is_number(y):
		raise ConfigurationError(f"position x and y must be numbers, got {dict(value)!r}")
	return Position(x=int(round(x)), y=int(round(y)))


#============================================
def find_font_size(entity: Mapping[str, object]) -> object | None:
	"""
	Return the font size under either stored spelling.
	"""
	for key in FONT_SIZE_KEYS:
		if entity.get(key) is not None:
			return entity[key]
	return None


#============================================
def parse_entity(entity: object, index: int) -> PlacementEntity:
	"""
	Parse one placement entity.

	An entity with a size is a QR placement. An entity with a font size
	and text is a text placement. Anything else is rejected.

	Args:
		entity: Raw entity mapping.
		index: Position in the entity list, for error messages.

	Returns:
		QRPlacement or TextPlacement.
	"""
	if not isinstance(entity, Mapping):
		raise ConfigurationError(f"entity {index} must be an object, got {entity!r}")

	size = entity.get("size")
	font_size = find_font_size(entity)
	text = entity.get("text")
	has_qr = size is not None
	has_text = font_size is not None or text is not None

	if has_qr and has_text:
		raise ConfigurationError(f"entity {index} has both a QR size and text fields")
	if not has_qr and not has_text:
		raise ConfigurationError(f"entity {index} is neither a QR nor a text placement")

	position = parse_position(entity.get("position"))
	if has_qr:
		qr_size = parse_int_value(size, f"entity {index} size")
		if qr_size <= 0:
			raise ConfigurationError(f"entity {index} size must be positive, got {qr_size}")
		return QRPlacement(position=position, size=qr_size)

	if font_size is None:
		raise ConfigurationError(f"entity {index} has text but no fontSizePx")
	if not isinstance(text, str):
		raise ConfigurationError(f"entity {index} text must be a string, got {text!r}")
	font_size_px = parse_int_value(font_size, f"entity {index} fontSizePx")
	return TextPlacement(position=position, font_size_px=font_size_px, text=text)


#============================================
def parse_label_size(value: object) -> LabelSize:
	"""
	Parse the physical label size in millimeters.

	Args:
		value: Raw mapping with length and width.

	Returns:
		LabelSize.
	"""
	if not isinstance(value, Mapping):
		raise ConfigurationError(f"labelSize must be an object, got {value!r}")
	length = value.get("length")
	width = value.get("width")
	if not is_number(length) or not is_number(width):
		raise ConfigurationError(f"labelSize length and width must be numbers, got {dict(value)!r}")
	if length <= 0 or width <= 0:
		raise ConfigurationError(f"labelSize must be positive, got {length} x {width}")
	return LabelSize(length=float(length), width=float(width))


#============================================
def parse_layout(data: object) -> LayoutDescriptor:
	"""
	Parse a stored layout document into a descriptor.

	Args:
		data: Mapping with entities and labelSize.

	Returns:
		LayoutDescriptor.
	"""
	if not isinstance(data, Mapping):
		raise ConfigurationError(f"layout must be an object, got {type(data).__name__}")
	raw_entities = data.get("entities")
	if not isinstance(raw_entities, list) or not raw_entities:
		raise ConfigurationError("layout must have a non-empty entities list")
	entities = tuple(parse_entity(entity, index) for index, entity in enumerate(raw_entities))
	label_size = parse_label_size(data.get("labelSize"))
	return LayoutDescriptor(entities=entities, label_size=label_size)


#============================================
def check_int_field(value: object, name: str) -> None:
	"""
	Reject anything other than a plain int in a built descriptor.
	"""
	if isinstance(value, bool) or not isinstance(value, int):
		raise ConfigurationError(f"{name} must be an int, got {value!r}")


#============================================
def validate_layout(layout: LayoutDescriptor) -> None:
	"""
	Check a descriptor before any drawing happens.

	Positions and sizes must be whole pixels and the label must cover at
	least one pixel on each axis.

	Args:
		layout: Layout descriptor.
	"""
	if not layout.entities:
		raise ConfigurationError("layout has no entities")
	size = layout.label_size
	if not is_number(size.length) or not is_number(size.width):
		raise ConfigurationError("label size must be numeric")
	if size.length <= 0 or size.width <= 0:
		raise ConfigurationError(f"label size must be positive, got {size.length} x {size.width}")
	width_px = slr.config.mm_to_pixels(size.length)
	height_px = slr.config.mm_to_pixels(size.width)
	if width_px < 1 or height_px < 1:
		raise ConfigurationError(
			f"label size {size.length} x {size.width} mm is smaller than one pixel"
		)
	for index, entity in enumerate(layout.entities):
		if not isinstance(entity, (QRPlacement, TextPlacement)):
			raise ConfigurationError(f"entity {index} is neither a QR nor a text placement")
		if not isinstance(entity.position, Position):
			raise ConfigurationError(f"entity {index} position must be a Position")
		check_int_field(entity.position.x, f"entity {index} position x")
		check_int_field(entity.position.y, f"entity {index} position y")
		if isinstance(entity, QRPlacement):
			check_int_field(entity.size, f"entity {index} size")
			if entity.size <= 0:
				raise ConfigurationError(f"entity {index} size must be positive, got {entity.size}")
			continue
		check_int_field(entity.font_size_px, f"entity {index} font size")
		if not isinstance(entity.text, str):
			raise ConfigurationError(f"entity {index} text must be a string")


#============================================
def load_layout_json(path: pathlib.Path) -> LayoutDescriptor:
	"""
	Load a layout document from a JSON file.

	Args:
		path: JSON file path.

	Returns:
		LayoutDescriptor.
	"""
	with path.open("r", encoding="utf-8") as handle:
		data = json.load(handle)
	return parse_layout(data)


#============================================
def select_latest_layout(records: Iterable[Mapping[str, object]], team: str) -> LayoutDescriptor:
	"""
	Pick the most recently created layout for a team.

	Args:
		records: Stored layout rows with id, team and data.
		team: Team name.

	Returns:
		Parsed layout of the record with the highest id.
	"""
	latest = None
	latest_id = None
	for index, record in enumerate(records):
		if not isinstance(record, Mapping):
			raise ConfigurationError(f"layout record {index} must be an object, got {record!r}")
		if record.get("team") != team:
			continue
		record_id = record.get("id")
		if not is_number(record_id):
			raise ConfigurationError(f"layout record {index} needs a numeric id, got {record_id!r}")
		if latest_id is None or record_id > latest_id:
			latest = record
			latest_id = record_id
	if latest is None:
		raise ConfigurationError(f"No layout found for team {team}")
	return parse_layout(latest.get("data"))
