import unittest
from datetime import datetime

from sort_folder.categories import (
    CATEGORIES,
    EXTENSION_CATEGORIES,
    OTHER,
    category_by_date,
    category_by_type,
    get_extension,
)


class TestCategoryByType(unittest.TestCase):
    def test_every_table_entry(self):
        """Every extension in the table maps to its documented category."""
        for ext, category in EXTENSION_CATEGORIES.items():
            with self.subTest(ext=ext):
                self.assertEqual(category_by_type(f"file.{ext}"), category)

    def test_common_examples(self):
        self.assertEqual(category_by_type("a.jpg"), "Images")
        self.assertEqual(category_by_type("clip.MOV"), "Videos")
        self.assertEqual(category_by_type("song.mp3"), "Audio")
        self.assertEqual(category_by_type("paper.pdf"), "PDFs")
        self.assertEqual(category_by_type("b.txt"), "Documents")
        self.assertEqual(category_by_type("budget.xlsx"), "Spreadsheets")
        self.assertEqual(category_by_type("deck.pptx"), "Presentations")
        self.assertEqual(category_by_type("backup.tar.gz"), "Archives")
        self.assertEqual(category_by_type("main.py"), "Code")
        self.assertEqual(category_by_type("setup.exe"), "Apps")
        self.assertEqual(category_by_type("font.ttf"), "Fonts")

    def test_extension_is_case_insensitive(self):
        self.assertEqual(category_by_type("PHOTO.JPG"), "Images")
        self.assertEqual(category_by_type("Photo.JpEg"), "Images")

    def test_unknown_and_missing_extensions(self):
        self.assertEqual(category_by_type("notes"), OTHER)
        self.assertEqual(category_by_type("data.unknownext"), OTHER)
        self.assertEqual(category_by_type("trailingdot."), OTHER)
        self.assertEqual(category_by_type(".bashrc"), OTHER)

    def test_get_extension(self):
        self.assertEqual(get_extension("archive.tar.GZ"), "gz")
        self.assertEqual(get_extension("noext"), "")
        self.assertEqual(get_extension(".hidden"), "")
        self.assertEqual(get_extension("dir/file.Txt"), "txt")

    def test_categories_cover_all_labels(self):
        """The reserved folder names are exactly the table labels plus Other."""
        expected = {
            "Images", "Videos", "Audio", "PDFs", "Documents", "Spreadsheets",
            "Presentations", "Archives", "Code", "Apps", "Fonts", "Other",
        }
        self.assertEqual(set(CATEGORIES), expected)

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            EXTENSION_CATEGORIES["jpg"] = "Documents"


class TestCategoryByDate(unittest.TestCase):
    def test_known_timestamp(self):
        ts = datetime(2023, 5, 17, 12, 0, 0).timestamp()
        self.assertEqual(category_by_date(ts), "2023/05")

    def test_month_is_zero_padded(self):
        ts = datetime(2024, 1, 2, 9, 30, 0).timestamp()
        self.assertEqual(category_by_date(ts), "2024/01")

    def test_december(self):
        ts = datetime(1999, 12, 31, 12, 0, 0).timestamp()
        self.assertEqual(category_by_date(ts), "1999/12")


if __name__ == "__main__":
    unittest.main()
