import datetime

import pytest

import sample_label_renderer.errors
import sample_label_renderer.template as template


#============================================
def test_resolves_placeholder() -> None:
	"""
	The placeholder span is replaced by the field value.
	"""
	assert template.resolve_template("Lot: {lot}", {"lot": "42"}) == "Lot: 42"


#============================================
def test_template_without_placeholder_is_unchanged(arnd_sample: dict) -> None:
	"""
	Plain text passes through.
	"""
	assert template.resolve_template("No placeholder", arnd_sample) == "No placeholder"
	assert template.resolve_template("Braces {} and {a-b}", {}) == "Braces {} and {a-b}"


#============================================
def test_only_first_placeholder_is_resolved() -> None:
	"""
	Later placeholders are printed as written.
	"""
	result = template.resolve_template("{a} / {b}", {"a": "1", "b": "2"})
	assert result == "1 / {b}"


#============================================
def test_missing_field_raises_with_name() -> None:
	"""
	A field the sample lacks fails with its name.
	"""
	with pytest.raises(sample_label_renderer.errors.MissingFieldError) as excinfo:
		template.resolve_template("{missingField}", {"lot": "42"})
	assert excinfo.value.field_name == "missingField"
	assert "missingField" in str(excinfo.value)


#============================================
def test_null_field_counts_as_missing() -> None:
	"""
	A null value is not printed as text.
	"""
	with pytest.raises(sample_label_renderer.errors.MissingFieldError):
		template.resolve_template("Analyst: {analyst}", {"analyst": None})


#============================================
def test_non_string_values_are_formatted() -> None:
	"""
	Numbers print in decimal and dates in ISO form.
	"""
	sample = {
		"count": 12,
		"volume": 2.5,
		"prepared": datetime.date(2024, 3, 1),
		"logged": datetime.datetime(2024, 3, 1, 9, 30),
	}
	assert template.resolve_template("n={count}", sample) == "n=12"
	assert template.resolve_template("{volume} mL", sample) == "2.5 mL"
	assert template.resolve_template("Prep: {prepared}", sample) == "Prep: 2024-03-01"
	assert template.resolve_template("{logged}", sample) == "2024-03-01T09:30:00"


#============================================
def test_floats_print_without_exponent() -> None:
	"""
	Small and large floats print as positional decimals.
	"""
	assert template.format_field_value(1e-7) == "0.0000001"
	assert template.format_field_value(1.5e20) == "150000000000000000000"
	assert template.format_field_value(0.1) == "0.1"
	assert template.resolve_template("{v} g", {"v": 2.5e-5}) == "0.000025 g"


#============================================
def test_lookup_field() -> None:
	"""
	Lookups return text or None, never a placeholder string.
	"""
	assert template.lookup_field({"lot": 7}, "lot") == "7"
	assert template.lookup_field({"lot": 7}, "contents") is None
