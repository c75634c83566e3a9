"""
Content keys derived from sample field values.
"""

# Standard Library
import datetime
import hashlib
import json
from collections.abc import Mapping, Sequence

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.config


DERIVED_KEY_FIELD = slr.config.DERIVED_KEY_FIELD
CONTENT_KEY_LENGTH = slr.config.CONTENT_KEY_LENGTH


#============================================
def serialize_value(value: object) -> object:
	"""
	JSON fallback for values the json module does not handle.

	Args:
		value: Field value.

	Returns:
		JSON compatible value.
	"""
	if isinstance(value, (datetime.date, datetime.datetime, datetime.time)):
		return value.isoformat()
	return str(value)


#============================================
def order_fields(
	sample: Mapping[str, object],
	field_order: Sequence[str] | None = None,
) -> list[str]:
	"""
	Return the canonical field order for hashing.

	Fields named in field_order come first, in that order. Every other
	field follows, sorted by name. The derived key field is never included.

	Args:
		sample: Sample field mapping.
		field_order: Optional declaration order.

	Returns:
		Ordered field names.
	"""
	names = [name for name in sample if name != DERIVED_KEY_FIELD]
	if not field_order:
		return sorted(names)
	ordered = [name for name in field_order if name in sample and name != DERIVED_KEY_FIELD]
	seen = set(ordered)
	ordered.extend(sorted(name for name in names if name not in seen))
	return ordered


#============================================
def canonicalize_sample(
	sample: Mapping[str, object],
	field_order: Sequence[str] | None = None,
) -> str:
	"""
	Serialize a sample into its canonical hashing string.

	Args:
		sample: Sample field mapping.
		field_order: Optional declaration order.

	Returns:
		Compact JSON object text.
	"""
	ordered = {name: sample[name] for name in order_fields(sample, field_order)}
	return json.dumps(
		ordered,
		separators=(",", ":"),
		ensure_ascii=False,
		default=serialize_value,
	)


#============================================
def compute_content_key(
	sample: Mapping[str, object],
	field_order: Sequence[str] | None = None,
) -> str:
	"""
	Compute the 8 character content key for a sample.

	Args:
		sample: Sample field mapping.
		field_order: Optional declaration order.

	Returns:
		Lowercase hex key.
	"""
	canonical = canonicalize_sample(sample, field_order)
	digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
	return digest[:CONTENT_KEY_LENGTH]


#============================================
def existing_content_key(sample: Mapping[str, object]) -> str | None:
	"""
	Return a pre-assigned key if the sample carries a usable one.
	"""
	value = sample.get(DERIVED_KEY_FIELD)
	if value is None:
		return None
	key = str(value)
	if not key:
		return None
	return key


#============================================
def resolve_content_key(sample: Mapping[str, object]) -> str:
	"""
	Return the sample key, computing it when none was assigned.

	Args:
		sample: Sample field mapping.

	Returns:
		Content key used as the QR payload.
	"""
	key = existing_content_key(sample)
	if key is not None:
		return key
	return compute_content_key(sample)


#============================================
def rekey_sample(
	sample: Mapping[str, object],
	field_order: Sequence[str] | None = None,
) -> dict[str, object]:
	"""
	Copy a sample with its key recomputed from content.

	A new sample version carries the previous version's key, which no
	longer matches its fields.

	Args:
		sample: Sample field mapping.
		field_order: Optional declaration order.

	Returns:
		New mapping with a fresh key.
	"""
	rekeyed = {name: value for name, value in sample.items() if name != DERIVED_KEY_FIELD}
	rekeyed[DERIVED_KEY_FIELD] = compute_content_key(rekeyed, field_order)
	return rekeyed
