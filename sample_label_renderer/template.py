"""
Placeholder substitution for label text.

A template holds at most one `{field}` placeholder. Only the first
placeholder is replaced; any later ones are printed as written.
"""

# Standard Library
import datetime
import decimal
import math
import re
from collections.abc import Mapping

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.errors


PLACEHOLDER_PATTERN = re.compile(r"{(\w+)}")

MissingFieldError = slr.errors.MissingFieldError


#============================================
def find_placeholder(template: str) -> re.Match | None:
	"""
	Find the first placeholder in a template.

	Args:
		template: Template text.

	Returns:
		Match with the field name in group 1, or None.
	"""
	return PLACEHOLDER_PATTERN.search(template)


#============================================
def format_field_value(value: object) -> str:
	"""
	Format a sample value for printing.

	Args:
		value: Field value.

	Returns:
		Text form of the value.
	"""
	if isinstance(value, str):
		return value
	if isinstance(value, (datetime.date, datetime.datetime, datetime.time)):
		return value.isoformat()
	if isinstance(value, float) and math.isfinite(value):
		# positional digits, never exponent form
		return format(decimal.Decimal(repr(value)), "f")
	return str(value)


#============================================
def lookup_field(sample: Mapping[str, object], name: str) -> str | None:
	"""
	Look up a field as text.

	Args:
		sample: Sample field mapping.
		name: Field name.

	Returns:
		Formatted value, or None when the field is absent or null.
	"""
	if name not in sample:
		return None
	value = sample[name]
	if value is None:
		return None
	return format_field_value(value)


#============================================
def resolve_template(template: str, sample: Mapping[str, object]) -> str:
	"""
	Substitute the first placeholder with the sample value.

	Args:
		template: Template text.
		sample: Sample field mapping.

	Returns:
		Resolved text.
	"""
	match = find_placeholder(template)
	if match is None:
		return template
	field_name = match.group(1)
	value = lookup_field(sample, field_name)
	if value is None:
		raise MissingFieldError(field_name)
	return template[:match.start()] + value + template[match.end():]
