import os
import shutil
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from PIL import Image

from sort_folder.config import MANIFEST_NAME
from sort_folder.scanner import get_exif_date, list_entries, scan_top_level, should_skip


class TestShouldSkip(unittest.TestCase):
    def setUp(self):
        self.root = Path(tempfile.mkdtemp()).resolve()

    def tearDown(self):
        shutil.rmtree(self.root)

    def test_regular_file_is_kept(self):
        f = self.root / "report.pdf"
        f.touch()
        self.assertFalse(should_skip(f, self.root))

    def test_directories_are_skipped(self):
        d = self.root / "projects"
        d.mkdir()
        self.assertTrue(should_skip(d, self.root))

    def test_manifest_is_skipped(self):
        m = self.root / MANIFEST_NAME
        m.touch()
        self.assertTrue(should_skip(m, self.root))

    def test_hidden_entries_are_skipped(self):
        f = self.root / ".hidden"
        f.touch()
        self.assertTrue(should_skip(f, self.root))

    def test_category_folders_are_skipped(self):
        for name in ("Images", "Other", "Code"):
            d = self.root / name
            d.mkdir()
            self.assertTrue(should_skip(d, self.root))

    def test_year_folder_at_root_is_skipped(self):
        d = self.root / "2024"
        d.mkdir()
        self.assertTrue(should_skip(d, self.root))

    def test_four_digit_name_below_root_is_not_year_folder(self):
        """Only direct children of root are recognised as year folders."""
        nested = self.root / "inbox"
        nested.mkdir()
        f = nested / "2024"
        f.touch()
        self.assertFalse(should_skip(f, self.root))

    def test_other_digit_names_are_kept(self):
        for name in ("123", "20245", "2024a"):
            f = self.root / name
            f.touch()
            self.assertFalse(should_skip(f, self.root), name)

    @unittest.skipIf(not hasattr(os, "symlink"), "symlinks not supported")
    def test_symlinks_are_skipped(self):
        target = self.root / "real.txt"
        target.touch()
        link = self.root / "link.txt"
        try:
            link.symlink_to(target)
        except OSError:
            self.skipTest("cannot create symlinks here")
        self.assertTrue(should_skip(link, self.root))

    def test_missing_entry_is_skipped(self):
        self.assertTrue(should_skip(self.root / "gone.txt", self.root))


class TestScanTopLevel(unittest.TestCase):
    def test_scan_is_not_recursive(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / "a.jpg").touch()
            (root / "b.txt").touch()
            (root / "notes").touch()
            (root / ".hidden").touch()
            (root / "sub").mkdir()
            (root / "sub" / "deep.txt").touch()

            files, skipped = scan_top_level(root)
            names = sorted(p.name for p in files)

            self.assertEqual(names, ["a.jpg", "b.txt", "notes"])
            self.assertEqual(skipped, 2)

    def test_scan_keeps_listing_order(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            for name in ("x.txt", "y.txt", "z.txt"):
                (root / name).touch()

            files, _ = scan_top_level(root)
            listed = [p for p in list_entries(root)]
            self.assertEqual(files, listed)


class TestExifDate(unittest.TestCase):
    def test_non_image_returns_none(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            f = Path(tmpdir) / "doc.txt"
            f.write_text("hello")
            self.assertIsNone(get_exif_date(f))

    def test_corrupt_image_returns_none(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            f = Path(tmpdir) / "broken.jpg"
            f.write_bytes(b"not really a jpeg")
            self.assertIsNone(get_exif_date(f))

    def test_reads_datetime_tag(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            f = Path(tmpdir) / "photo.jpg"
            exif = Image.Exif()
            exif[306] = "2021:07:04 10:30:00"  # DateTime
            Image.new("RGB", (8, 8), color="red").save(f, exif=exif.tobytes())

            self.assertEqual(get_exif_date(f), datetime(2021, 7, 4, 10, 30, 0))

    def test_image_without_exif_returns_none(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            f = Path(tmpdir) / "plain.png"
            Image.new("RGB", (8, 8)).save(f)
            self.assertIsNone(get_exif_date(f))


if __name__ == "__main__":
    unittest.main()
