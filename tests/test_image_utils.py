import os
import tempfile
import unittest

from PIL import Image

from resw.core.resource_types import Bitmap, Icon
from resw.utils.image_utils import convert_image_to_icon, convert_image_to_bitmap, ImageConversionError


class ImageConversionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def make_png(self, name: str, size: int) -> str:
        path = os.path.join(self.tmp.name, name)
        img = Image.new("RGBA", (size, size), (255, 0, 0, 255))
        img.putpixel((0, 0), (0, 0, 0, 0))
        img.save(path, format="PNG")
        return path

    def test_icon_sizes(self) -> None:
        ico_path = convert_image_to_icon(self.make_png("app.png", 64), os.path.join(self.tmp.name, "app.ico"))
        with Image.open(ico_path) as ico:
            self.assertEqual(ico.format, "ICO")
            sizes = ico.info["sizes"]
        self.assertIn((16, 16), sizes)
        self.assertIn((64, 64), sizes)
        self.assertNotIn((128, 128), sizes)

    def test_small_icon_keeps_own_size(self) -> None:
        ico_path = convert_image_to_icon(self.make_png("tiny.png", 8), os.path.join(self.tmp.name, "tiny.ico"))
        with Image.open(ico_path) as ico:
            self.assertEqual(ico.info["sizes"], {(8, 8)})

    def test_bitmap_drops_transparency(self) -> None:
        bmp_path = convert_image_to_bitmap(self.make_png("logo.png", 16), os.path.join(self.tmp.name, "logo.bmp"))
        with Image.open(bmp_path) as bmp:
            self.assertEqual(bmp.format, "BMP")
            self.assertEqual(bmp.mode, "RGB")
            self.assertEqual(bmp.getpixel((0, 0)), (255, 255, 255))
            self.assertEqual(bmp.getpixel((1, 1)), (255, 0, 0))

    def test_not_an_image(self) -> None:
        path = os.path.join(self.tmp.name, "notes.txt")
        with open(path, "w") as f:
            f.write("not an image")
        with self.assertRaises(ImageConversionError):
            convert_image_to_icon(path, os.path.join(self.tmp.name, "notes.ico"))

    def test_resources_from_images(self) -> None:
        icon = Icon.from_image(self.make_png("a.png", 32), os.path.join(self.tmp.name, "a.ico"), sizes=[(16, 16)])
        self.assertEqual(icon.path, os.path.join(self.tmp.name, "a.ico"))
        self.assertTrue(os.path.exists(icon.path))
        bitmap = Bitmap.from_image(self.make_png("b.png", 32), os.path.join(self.tmp.name, "b.bmp"))
        self.assertTrue(os.path.exists(bitmap.path))


if __name__ == "__main__":
    unittest.main()
