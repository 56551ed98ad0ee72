import tempfile
import unittest
from pathlib import Path

from blurframe.config import config
from blurframe.models.errors import ErrorKind
from blurframe.models.image_model import (DEFAULT_BAND, CropBox, Dimension,
    ProcessResult)

class TestModels(unittest.TestCase):
    def test_dimension_must_be_positive(self):
        for w, h in [(0, 1), (1, 0), (-3, 4)]:
            with self.assertRaises(ValueError):
                Dimension(w, h)

    def test_dimension_to_pixels(self):
        self.assertEqual(Dimension(2035.116, 565.31).to_pixels(), (2035, 565))
        self.assertEqual(Dimension(0.2, 0.4).to_pixels(), (1, 1))

    def test_orientation(self):
        self.assertTrue(Dimension(3, 2).is_landscape)
        self.assertFalse(Dimension(2, 2).is_landscape)

    def test_crop_box_as_pil_box(self):
        self.assertEqual(CropBox(1, 2, 3, 4).as_box(), (1, 2, 4, 6))

    def test_result_constructors(self):
        failed = ProcessResult.failure(ErrorKind.DECODE_ERROR, 'bad')

        self.assertFalse(failed.ok)
        self.assertIsNone(failed.image)
        self.assertEqual(failed.error, ErrorKind.DECODE_ERROR)

class TestConfig(unittest.TestCase):
    def test_defaults_from_shipped_yaml(self):
        """Verify that the shipped config describes the Instagram band."""

        self.assertEqual(config.REFERENCE_WIDTH, 1080)
        self.assertAlmostEqual(config.MIN_HEIGHT, 565.31)
        self.assertEqual(config.MAX_HEIGHT, 1350)
        self.assertEqual((config.BLUR_MIN, config.BLUR_MAX, config.BLUR_DEFAULT),
            (1, 100, 50))
        self.assertEqual(DEFAULT_BAND.min_height, config.MIN_HEIGHT)

    def test_load_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'config.yaml'
            path.write_text('ratio:\n  min_height: 566\n')

            self.assertEqual(config.load_config(path), {'ratio': {'min_height': 566}})

            path.write_text('')
            self.assertEqual(config.load_config(path), {})

if __name__ == '__main__':
    unittest.main()
