from __future__ import annotations

import unittest

from file_uploader.uploads.mime import FALLBACK_MIME_TYPE, infer_mime_type


class InferMimeTypeTests(unittest.TestCase):
    def test_known_extensions(self):
        cases = {
            "report.pdf": "application/pdf",
            "photo.png": "image/png",
            "PHOTO.JPG": "image/jpeg",
            "index.html": "text/html",
            "notes.md": "text/markdown",
            "data.csv": "text/csv",
            "payload.json": "application/json",
            "slide.webp": "image/webp",
        }
        for filename, expected in cases.items():
            with self.subTest(filename=filename):
                self.assertEqual(infer_mime_type(filename), expected)

    def test_compressed_files_use_the_compression_type(self):
        cases = {
            "a.gz": "application/gzip",
            "logs.tar.gz": "application/gzip",
            "bundle.tgz": "application/gzip",
            "a.bz2": "application/x-bzip2",
            "a.xz": "application/x-xz",
            "notes.md.gz": "application/gzip",
        }
        for filename, expected in cases.items():
            with self.subTest(filename=filename):
                self.assertEqual(infer_mime_type(filename), expected)

    def test_unknown_extension_falls_back_with_warning(self):
        with self.assertLogs("file_uploader.uploads.mime", level="WARNING") as logs:
            mime_type = infer_mime_type("archive.zzzunknown")

        self.assertEqual(mime_type, FALLBACK_MIME_TYPE)
        self.assertIn("archive.zzzunknown", logs.output[0])

    def test_missing_extension_falls_back(self):
        for filename in ["Makefile", ".bashrc", "trailing."]:
            with self.subTest(filename=filename):
                with self.assertLogs("file_uploader.uploads.mime", level="WARNING"):
                    self.assertEqual(infer_mime_type(filename), "application/octet-stream")

    def test_is_deterministic(self):
        self.assertEqual(infer_mime_type("a.txt"), infer_mime_type("a.txt"))


if __name__ == "__main__":
    unittest.main()
