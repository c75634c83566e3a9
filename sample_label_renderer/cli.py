"""
CLI entry points for rendering sample labels.
"""

# Standard Library
import argparse
import json
import pathlib
import sys
import time

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.errors
import sample_label_renderer.export
import sample_label_renderer.fonts
import sample_label_renderer.layout
import sample_label_renderer.render


LabelRenderError = slr.errors.LabelRenderError
ConfigurationError = slr.errors.ConfigurationError
LayoutDescriptor = slr.layout.LayoutDescriptor


#============================================
def load_samples(paths: list[str]) -> list[dict[str, object]]:
	"""
	Load samples from JSON files.

	Each file holds one sample object or a list of them.

	Args:
		paths: JSON file paths.

	Returns:
		Samples in file order.
	"""
	samples: list[dict[str, object]] = []
	for entry in paths:
		path = pathlib.Path(entry).expanduser()
		with path.open("r", encoding="utf-8") as handle:
			data = json.load(handle)
		if isinstance(data, dict):
			samples.append(data)
			continue
		if isinstance(data, list) and all(isinstance(item, dict) for item in data):
			samples.extend(data)
			continue
		raise ConfigurationError(f"{path} must hold a sample object or a list of samples")
	return samples


#============================================
def load_layout(args: argparse.Namespace) -> LayoutDescriptor:
	"""
	Load the layout named on the command line.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LayoutDescriptor.
	"""
	if args.layout_path:
		return slr.layout.load_layout_json(pathlib.Path(args.layout_path).expanduser())
	if not args.team:
		raise ConfigurationError("--layouts needs --team to pick a layout")
	path = pathlib.Path(args.layouts_path).expanduser()
	with path.open("r", encoding="utf-8") as handle:
		records = json.load(handle)
	if not isinstance(records, list):
		raise ConfigurationError(f"{path} must hold a list of layout records")
	return slr.layout.select_latest_layout(records, args.team)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render sample identification labels.")

	input_group = parser.add_argument_group("Input")
	input_group.add_argument("-s", "--sample", dest="sample_paths", nargs="+", required=True, help="Sample JSON files.")
	layout_source = input_group.add_mutually_exclusive_group(required=True)
	layout_source.add_argument("-y", "--layout", dest="layout_path", default=None, help="Layout document JSON.")
	layout_source.add_argument("-L", "--layouts", dest="layouts_path", default=None, help="Layout records JSON list.")
	input_group.add_argument("-t", "--team", dest="team", default=None, help="Team whose latest layout is used with --layouts.")
	input_group.add_argument("-b", "--background", dest="background_path", default=None, help="Background label image.")
	input_group.add_argument("-f", "--font-dir", dest="font_dir", default=None, help="Directory with label font files.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output .png, .pdf or directory.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-q", "--quiet", dest="verbose", action="store_false", help="Only print errors.")

	parser.set_defaults(verbose=True)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Render labels and write them to the requested output.

	Args:
		args: Parsed argparse namespace.
	"""
	verbose = args.verbose
	output_path = pathlib.Path(args.output_path).expanduser()
	background_path = None
	if args.background_path:
		background_path = pathlib.Path(args.background_path).expanduser()
	font_dir = None
	if args.font_dir:
		font_dir = pathlib.Path(args.font_dir).expanduser()

	start_time = time.perf_counter()
	slr.fonts.init_fonts(font_dir)
	samples = load_samples(args.sample_paths)
	layout = load_layout(args)
	if verbose:
		print("Sample label render")
		print(f"Samples: {len(samples)}")
		print(f"Layout entities: {len(layout.entities)}")
		print(f"Label size: {layout.label_size.length} x {layout.label_size.width} mm")
		print(f"Output: {output_path}")

	suffix = output_path.suffix.lower()
	if suffix == ".png" and len(samples) != 1:
		raise ConfigurationError(f"PNG output takes exactly one sample, got {len(samples)}")

	labels = slr.render.render_labels(samples, layout, background_path, verbose=verbose)

	if suffix == ".png":
		output_path.write_bytes(slr.export.encode_png(labels[0].image))
	elif suffix == ".pdf":
		pages = slr.export.write_labels_pdf(labels, output_path)
		if verbose:
			print(f"Pages written: {pages}")
	else:
		paths = slr.export.write_label_pngs(labels, output_path)
		if verbose:
			print(f"PNG files written: {len(paths)}")

	if args.manifest_path:
		manifest_path = pathlib.Path(args.manifest_path).expanduser()
		slr.export.write_manifest(manifest_path, labels, layout)
		if verbose:
			print(f"Manifest written: {manifest_path}")

	if verbose:
		for label in labels:
			print(f"Label key: {label.content_key}")
		total_time = time.perf_counter() - start_time
		print(f"Timing: total={total_time:.2f}s")


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Returns:
		Process exit status.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except (LabelRenderError, OSError, json.JSONDecodeError) as error:
		print(f"Error: {error}", file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
