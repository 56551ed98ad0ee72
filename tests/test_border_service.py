import io
import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

from blurframe.models.errors import ErrorKind
from blurframe.models.image_model import (EXPORT, PREVIEW, ProcessOptions,
    RatioBand)
from blurframe.models.session import EditSession
from blurframe.services.border_service import (BorderService,
    validate_blur_intensity)
from blurframe.services.image_service import ImageService
from blurframe.services.process_service import ProcessService
from blurframe.models.errors import InvalidBlurRadius

from helpers import jpeg_bytes, noise_image

band = RatioBand(reference_width=1080, min_height=565.31, max_height=1350)

class FailingBlur(ProcessService):
    def blur(self, image, intensity):
        raise OSError('broken raster backend')

class TestBorderService(unittest.TestCase):
    def setUp(self):
        self.service = BorderService(band=band, working_width=1080)

    def test_square_is_unchanged_in_size(self):
        """Verify that a 1080x1080 photo comes back 1080x1080."""

        result = self.service.process_image(noise_image(1080, 1080), 10)

        self.assertTrue(result.ok)
        self.assertEqual(result.image.size, (1080, 1080))

    def test_wide_photo_gets_vertical_border(self):
        """Verify that a 1080x300 photo is padded to 1080x565."""

        source = noise_image(1080, 300)
        result = self.service.process_image(source, 20)

        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.image.size, (1080, 565))

        encoded = Image.open(io.BytesIO(result.data))
        self.assertEqual(encoded.format, 'JPEG')
        self.assertEqual(encoded.size, (1080, 565))

    def test_foreground_survives_compositing(self):
        """Verify that the original pixels sit unchanged in the middle band."""

        source = noise_image(1080, 300, seed=1)
        result = self.service.process_image(source, 20)

        # background 2035x565, offset (477.5, 132.5) floored to (477, 132)
        middle = np.asarray(result.image.convert('RGB'))[132:432]
        self.assertTrue(np.array_equal(middle, np.asarray(source)))

        border = np.asarray(result.image.convert('RGB'))[:132]
        self.assertFalse(np.array_equal(border, np.asarray(source)[:132]))

    def test_tall_photo_gets_horizontal_border(self):
        """Verify that a 1080x2000 photo keeps its height and gains width."""

        result = self.service.process_image(noise_image(1080, 2000), 5)

        self.assertTrue(result.ok)
        self.assertEqual(result.image.size, (1431, 2000))

    def test_full_resolution_is_not_downscaled(self):
        """Verify that export keeps a 2000x2000 source at full resolution."""

        result = self.service.process_image(noise_image(2000, 2000), 50, EXPORT)

        self.assertTrue(result.ok)
        self.assertEqual(result.image.size, (2000, 2000))

    def test_preview_is_downscaled_to_working_width(self):
        result = self.service.process_image(noise_image(2000, 2000), 50, PREVIEW)

        self.assertTrue(result.ok)
        self.assertEqual(result.image.size, (1080, 1080))

    def test_reprocessing_is_dimensionally_stable(self):
        """Verify that processing an in-band image twice gives equal sizes."""

        source = noise_image(800, 900)
        first = self.service.process_image(source, 30)
        second = self.service.process_image(source, 30)

        self.assertEqual(first.image.size, (800, 900))
        self.assertEqual(first.image.size, second.image.size)

    def test_blur_range_is_inclusive(self):
        """Verify that intensities 1 and 100 are accepted."""

        source = noise_image(200, 200)

        for intensity in (1, 100):
            self.assertTrue(self.service.process_image(source, intensity).ok)

    def test_blur_out_of_range_is_rejected(self):
        """Verify that out-of-range or non-integer intensities are not clamped."""

        source = noise_image(200, 200)

        for intensity in (0, 101, -5, 50.0, True, None):
            result = self.service.process_image(source, intensity)

            self.assertFalse(result.ok)
            self.assertIsNone(result.image)
            self.assertIsNone(result.data)
            self.assertEqual(result.error, ErrorKind.INVALID_BLUR_RADIUS)

    def test_validate_blur_intensity(self):
        self.assertEqual(validate_blur_intensity(42), 42)

        with self.assertRaises(InvalidBlurRadius):
            validate_blur_intensity(0)

    def test_invalid_blur_leaves_session_untouched(self):
        session = EditSession()
        result = self.service.process_image(jpeg_bytes(noise_image(50, 50)), 0,
            PREVIEW, session)

        self.assertEqual(result.error, ErrorKind.INVALID_BLUR_RADIUS)
        self.assertFalse(session.has_source)

    def test_decodes_bytes(self):
        data = jpeg_bytes(noise_image(300, 100))

        result = self.service.process_image(data, 10)
        self.assertTrue(result.ok)

        # 300x100 sits below the band: height grows to 565.31 * 300 / 1080
        self.assertEqual(result.image.size, (300, 157))

    def test_decodes_paths(self):
        """Verify that str and Path sources are loaded from disk."""

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'photo.png'
            noise_image(300, 100).save(path)

            for source in (path, str(path)):
                result = self.service.process_image(source, 10)

                self.assertTrue(result.ok)
                self.assertEqual(result.image.size, (300, 157))

    def test_options_default_to_preview(self):
        """Verify that passing no options processes a preview."""

        result = self.service.process_image(noise_image(2000, 2000), 10, None)

        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.image.size, (1080, 1080))

    def test_corrupt_bytes_fail_with_decode_error(self):
        """Verify that undecodable input is reported, not raised."""

        result = self.service.process_image(b'definitely not an image', 10)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorKind.DECODE_ERROR)

    def test_truncated_jpeg_fails_with_decode_error(self):
        data = jpeg_bytes(noise_image(400, 400))

        result = self.service.process_image(data[:len(data) // 2], 10)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorKind.DECODE_ERROR)

    def test_missing_file_is_a_failure(self):
        result = self.service.process_image('/nonexistent/photo.jpg', 10)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorKind.PROCESSING_FAILED)

    def test_raster_errors_become_processing_failed(self):
        """Verify that backend exceptions are converted at the boundary."""

        service = BorderService(process_service=FailingBlur(), band=band)
        result = service.process_image(noise_image(100, 100), 10)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorKind.PROCESSING_FAILED)
        self.assertIn('broken raster backend', result.message)

    def test_source_image_is_not_mutated(self):
        source = noise_image(1080, 300).convert('RGBA')
        before = source.tobytes()

        self.service.process_image(source, 40)

        self.assertEqual(source.tobytes(), before)

class TestSessionReuse(unittest.TestCase):
    def setUp(self):
        self.service = BorderService(band=band, working_width=1080)

    def test_first_call_populates_session(self):
        session = EditSession()
        data = jpeg_bytes(noise_image(2000, 1000))

        result = self.service.process_image(data, 10, PREVIEW, session)

        self.assertTrue(result.ok)
        self.assertTrue(session.has_source)
        self.assertEqual((session.source.width, session.source.height),
            (2000, 1000))

    def test_cached_source_is_reused_and_never_mutated(self):
        """Verify that repeated previews clone the cached decode."""

        session = EditSession()
        session.set_source(ImageService().decode(jpeg_bytes(noise_image(2000, 600))))
        cached = session.source.pil_image
        before = cached.tobytes()

        # bytes are ignored when the session already holds a decode
        preview = self.service.process_image(b'ignored', 10, PREVIEW, session)
        export = self.service.process_image(b'ignored', 10, EXPORT, session)

        self.assertTrue(preview.ok)
        self.assertTrue(export.ok)
        self.assertEqual(preview.image.width, 1080)
        self.assertEqual(export.image.width, 2000)
        self.assertIs(session.source.pil_image, cached)
        self.assertEqual(cached.size, (2000, 600))
        self.assertEqual(cached.tobytes(), before)

    def test_fresh_decode_skips_cache(self):
        session = EditSession()
        options = ProcessOptions(reuse_source=False)

        result = self.service.process_image(noise_image(200, 200), 10,
            options, session)

        self.assertTrue(result.ok)
        self.assertFalse(session.has_source)

    def test_overlapping_call_is_rejected(self):
        """Verify that a second call for a busy session fails fast."""

        session = EditSession()
        session.set_source(ImageService().decode(jpeg_bytes(noise_image(100, 100))))

        session.begin()
        try:
            result = self.service.process_image(b'', 10, PREVIEW, session)
        finally:
            session.end()

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorKind.SESSION_BUSY)
        self.assertFalse(session.is_busy)
        self.assertTrue(self.service.process_image(b'', 10, PREVIEW, session).ok)

if __name__ == '__main__':
    unittest.main()
