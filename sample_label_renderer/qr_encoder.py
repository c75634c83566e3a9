"""
QR symbol encoding and rasterization.
"""

# PIP3 modules
import PIL.Image
import qrcode
import qrcode.constants
import qrcode.exceptions

# local repo modules
import sample_label_renderer as slr
import sample_label_renderer.config
import sample_label_renderer.errors


CANVAS_MODE = slr.config.CANVAS_MODE
QR_FILL_COLOR = slr.config.QR_FILL_COLOR
QR_BACK_COLOR = slr.config.QR_BACK_COLOR
QR_RESAMPLE = slr.config.QR_RESAMPLE

EncodingError = slr.errors.EncodingError


#============================================
def encode_qr(payload: str) -> PIL.Image.Image:
	"""
	Encode a payload as a QR symbol at one pixel per module.

	Uses error correction level H and no quiet zone; the layout decides
	spacing through the placement position.

	Args:
		payload: Text to encode.

	Returns:
		Square black-on-white RGB image.
	"""
	qr = qrcode.QRCode(
		version=None,
		error_correction=qrcode.constants.ERROR_CORRECT_H,
		box_size=1,
		border=0,
	)
	qr.add_data(payload)
	try:
		qr.make(fit=True)
	# newer qrcode releases fail the version 41 lookup with ValueError
	except (qrcode.exceptions.DataOverflowError, ValueError) as error:
		raise EncodingError(
			f"Payload of {len(payload)} characters exceeds QR capacity at level H"
		) from error
	qr_image = qr.make_image(fill_color=QR_FILL_COLOR, back_color=QR_BACK_COLOR)
	return qr_image.get_image().convert(CANVAS_MODE)


#============================================
def resize_qr(image: PIL.Image.Image, size: int) -> PIL.Image.Image:
	"""
	Scale a QR bitmap to a square of the given side.

	Args:
		image: QR bitmap.
		size: Side length in pixels.

	Returns:
		Resized copy.
	"""
	if size <= 0:
		raise ValueError(f"QR size must be positive, got {size}")
	if image.size == (size, size):
		return image.copy()
	return image.resize((size, size), QR_RESAMPLE)
