import datetime
import hashlib
import re

import sample_label_renderer.hasher as hasher


KEY_PATTERN = re.compile(r"^[0-9a-f]{8}$")


#============================================
def test_key_format(arnd_sample: dict) -> None:
	"""
	Keys are eight lowercase hex characters.
	"""
	assert KEY_PATTERN.match(hasher.compute_content_key(arnd_sample))
	assert KEY_PATTERN.match(hasher.compute_content_key({}))
	assert KEY_PATTERN.match(hasher.compute_content_key({"n": 3.25, "flag": True}))


#============================================
def test_key_is_deterministic(arnd_sample: dict) -> None:
	"""
	Repeated calls and reordered input give the same key.
	"""
	first = hasher.compute_content_key(arnd_sample)
	second = hasher.compute_content_key(dict(arnd_sample))
	reordered = dict(reversed(list(arnd_sample.items())))
	assert first == second
	assert hasher.compute_content_key(reordered) == first


#============================================
def test_key_matches_sha256_prefix() -> None:
	"""
	The key is the SHA-256 prefix of the compact canonical JSON.
	"""
	sample = {"lot": "42", "analyst": "jdoe"}
	canonical = '{"analyst":"jdoe","lot":"42"}'
	assert hasher.canonicalize_sample(sample) == canonical
	expected = hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:8]
	assert hasher.compute_content_key(sample) == expected


#============================================
def test_derived_key_is_excluded(arnd_sample: dict) -> None:
	"""
	An assigned qr_code_key does not feed into the hash.
	"""
	keyed = dict(arnd_sample, qr_code_key="deadbeef")
	assert hasher.compute_content_key(keyed) == hasher.compute_content_key(arnd_sample)
	assert "qr_code_key" not in hasher.canonicalize_sample(keyed)


#============================================
def test_changed_value_changes_key(arnd_sample: dict) -> None:
	"""
	Samples that differ in one value get different keys.
	"""
	changed = dict(arnd_sample, lot="43")
	assert hasher.compute_content_key(changed) != hasher.compute_content_key(arnd_sample)


#============================================
def test_field_order_controls_canonical_form() -> None:
	"""
	Declared fields come first, the rest follow sorted.
	"""
	sample = {"c": 3, "a": 1, "b": 2}
	assert hasher.canonicalize_sample(sample) == '{"a":1,"b":2,"c":3}'
	assert hasher.canonicalize_sample(sample, ["c", "b"]) == '{"c":3,"b":2,"a":1}'
	assert hasher.compute_content_key(sample, ["c", "b"]) != hasher.compute_content_key(sample)


#============================================
def test_canonical_values() -> None:
	"""
	Dates use ISO text and non-ASCII text is kept as is.
	"""
	sample = {
		"prepared": datetime.date(2024, 1, 2),
		"volume": "5 µL",
	}
	assert hasher.canonicalize_sample(sample) == '{"prepared":"2024-01-02","volume":"5 µL"}'


#============================================
def test_resolve_prefers_existing_key(arnd_sample: dict) -> None:
	"""
	A non-empty qr_code_key is returned without hashing.
	"""
	keyed = dict(arnd_sample, qr_code_key="deadbeef")
	assert hasher.resolve_content_key(keyed) == "deadbeef"


#============================================
def test_resolve_computes_missing_key(arnd_sample: dict) -> None:
	"""
	Absent, null or empty keys are computed from content.
	"""
	expected = hasher.compute_content_key(arnd_sample)
	assert hasher.resolve_content_key(arnd_sample) == expected
	assert hasher.resolve_content_key(dict(arnd_sample, qr_code_key=None)) == expected
	assert hasher.resolve_content_key(dict(arnd_sample, qr_code_key="")) == expected


#============================================
def test_rekey_sample_replaces_stale_key(arnd_sample: dict) -> None:
	"""
	A new version gets a key from its own content.
	"""
	stale = dict(arnd_sample, lot="99", qr_code_key="deadbeef")
	rekeyed = hasher.rekey_sample(stale)
	assert rekeyed["qr_code_key"] == hasher.compute_content_key(dict(arnd_sample, lot="99"))
	assert rekeyed["qr_code_key"] != "deadbeef"
	assert stale["qr_code_key"] == "deadbeef"
