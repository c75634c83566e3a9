#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render sample identification labels from JSON sample and layout files.
"""

import sys

import sample_label_renderer.cli


if __name__ == "__main__":
	sys.exit(sample_label_renderer.cli.main())
