from __future__ import annotations

import errno
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from file_uploader.uploads.errors import ErrorKind, FileAccessError
from file_uploader.uploads.inspector import acquire, resolve_path


class AcquireTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self._tmpdir.name)

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def _write(self, name: str, content: bytes) -> Path:
        path = self.root / name
        path.write_bytes(content)
        return path

    def test_reads_exact_bytes_and_basename(self):
        content = bytes(range(256)) * 4
        path = self._write("report.final.pdf", content)

        handle = acquire(str(path))

        self.assertEqual(handle.content, content)
        self.assertEqual(handle.filename, "report.final.pdf")
        self.assertEqual(handle.size, len(content))

    def test_reads_empty_file(self):
        path = self._write("empty.txt", b"")

        handle = acquire(path)

        self.assertEqual(handle.content, b"")
        self.assertEqual(handle.filename, "empty.txt")

    def test_relative_path_resolves_against_cwd(self):
        self._write("notes.md", b"# notes")
        original_cwd = os.getcwd()
        os.chdir(self.root)
        try:
            handle = acquire("./sub/../notes.md")
        finally:
            os.chdir(original_cwd)

        self.assertEqual(handle.filename, "notes.md")
        self.assertEqual(handle.content, b"# notes")

    def test_resolve_path_is_absolute_and_normalized(self):
        resolved = resolve_path(str(self.root / "a" / ".." / "b.txt"))

        self.assertTrue(resolved.is_absolute())
        self.assertEqual(resolved, self.root / "b.txt")

    def test_missing_file_is_not_found(self):
        missing = self.root / "nope.bin"

        with self.assertRaises(FileAccessError) as context:
            acquire(missing)

        self.assertEqual(context.exception.kind, ErrorKind.NOT_FOUND)
        self.assertEqual(context.exception.path, str(missing))
        self.assertIn(str(missing), context.exception.message)

    def test_directory_is_reported_as_directory(self):
        with self.assertRaises(FileAccessError) as context:
            acquire(self.root)

        self.assertEqual(context.exception.kind, ErrorKind.IS_DIRECTORY)

    @unittest.skipUnless(hasattr(os, "mkfifo"), "requires os.mkfifo")
    def test_fifo_is_not_a_regular_file(self):
        fifo = self.root / "pipe"
        os.mkfifo(fifo)

        with self.assertRaises(FileAccessError) as context:
            acquire(fifo)

        self.assertEqual(context.exception.kind, ErrorKind.NOT_A_REGULAR_FILE)

    def test_stat_errors_map_to_kinds(self):
        path = self._write("locked.txt", b"x")
        cases = [
            (errno.EACCES, ErrorKind.PERMISSION_DENIED),
            (errno.EPERM, ErrorKind.OPERATION_NOT_PERMITTED),
            (errno.ENAMETOOLONG, ErrorKind.PATH_TOO_LONG),
            (errno.EMFILE, ErrorKind.RESOURCE_EXHAUSTED),
            (errno.ENFILE, ErrorKind.RESOURCE_EXHAUSTED),
        ]

        for code, expected_kind in cases:
            with self.subTest(errno=errno.errorcode[code]):
                with patch.object(Path, "stat", side_effect=OSError(code, os.strerror(code))):
                    with self.assertRaises(FileAccessError) as context:
                        acquire(path)
                self.assertEqual(context.exception.kind, expected_kind)
                self.assertIsInstance(context.exception.__cause__, OSError)

    def test_read_failure_maps_to_resource_exhausted(self):
        path = self._write("data.bin", b"payload")

        with patch.object(Path, "read_bytes", side_effect=OSError(errno.EMFILE, "Too many open files")):
            with self.assertRaises(FileAccessError) as context:
                acquire(path)

        self.assertEqual(context.exception.kind, ErrorKind.RESOURCE_EXHAUSTED)

    def test_unknown_os_error_is_io_error_with_message(self):
        path = self._write("data.bin", b"payload")

        with patch.object(Path, "read_bytes", side_effect=OSError(errno.EIO, "Input/output error")):
            with self.assertRaises(FileAccessError) as context:
                acquire(path)

        self.assertEqual(context.exception.kind, ErrorKind.IO_ERROR)
        self.assertIn("Input/output error", context.exception.message)

    def test_unusable_path_strings_are_io_errors(self):
        cases = {
            "nul byte": str(self.root / "a\x00b.txt"),
            "lone surrogate": str(self.root / "\ud800.txt"),
        }
        for label, path in cases.items():
            with self.subTest(case=label):
                with self.assertRaises(FileAccessError) as context:
                    acquire(path)
                self.assertEqual(context.exception.kind, ErrorKind.IO_ERROR)
                self.assertIsInstance(context.exception.__cause__, ValueError)

    def test_overlong_path_is_path_too_long(self):
        with self.assertRaises(FileAccessError) as context:
            acquire(self.root / ("a" * 5000))

        self.assertEqual(context.exception.kind, ErrorKind.PATH_TOO_LONG)


if __name__ == "__main__":
    unittest.main()
