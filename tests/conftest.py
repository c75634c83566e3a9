"""
Pytest configuration for local imports and shared label inputs.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
@pytest.fixture
def arnd_sample() -> dict[str, object]:
	"""
	A sample record shaped like the ARND team's entries.
	"""
	return {
		"experiment_id": "EXP-0042",
		"contents": "Buffer A",
		"analyst": "jdoe",
		"storage_condition": "-20C",
		"date_entered": "2024-03-01",
		"expiration_date": "2025-03-01",
		"lot": "42",
	}


#============================================
@pytest.fixture
def layout_document() -> dict[str, object]:
	"""
	A stored layout document for a 2 in x 1 in label.
	"""
	return {
		"entities": [
			{"position": {"x": 4, "y": 4}, "size": 88},
			{"position": {"x": 100, "y": 8}, "fontSizePX": 16, "text": "Lot: {lot}"},
			{"position": {"x": 100, "y": 40}, "fontSizePX": 24, "text": "{analyst}"},
		],
		"labelSize": {"length": 50.8, "width": 25.4},
	}
