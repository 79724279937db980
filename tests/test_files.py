import os
import stat
import subprocess
import tarfile
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest import mock

from webutil import files


def _write(path, text="x"):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class FilesTestCase(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)


class TestCopy(FilesTestCase):
    def test_copy_file_keeps_mode(self):
        source = _write(self.root / "a.txt", "hello")
        source.chmod(0o640)
        dest = self.root / "b.txt"
        files.copy_file(source, dest)
        assert dest.read_text() == "hello"
        assert stat.S_IMODE(dest.stat().st_mode) == 0o640

    def test_copy_dir_with_excludes(self):
        source = self.root / "src"
        _write(source / "a.txt", "a")
        _write(source / "skip.log")
        _write(source / "sub" / "b.txt", "b")
        dest = self.root / "out"

        files.copy_dir(source, dest, lambda entry: entry.name.endswith(".log"))

        assert (dest / "a.txt").read_text() == "a"
        assert (dest / "sub" / "b.txt").read_text() == "b"
        assert not (dest / "skip.log").exists()

    def test_copy_dir_refuses_existing_destination(self):
        source = self.root / "src"
        source.mkdir()
        with self.assertRaises(FileExistsError):
            files.copy_dir(source, self.root)

    def test_copy_dir_requires_directory(self):
        source = _write(self.root / "file.txt")
        with self.assertRaises(NotADirectoryError):
            files.copy_dir(source, self.root / "out")


class TestDirectories(FilesTestCase):
    def test_remove_dir_contents_keeps_directory(self):
        _write(self.root / "a.txt")
        _write(self.root / "sub" / "b.txt")
        files.remove_dir_contents(self.root)
        assert self.root.is_dir()
        assert list(self.root.iterdir()) == []

    def test_make_dir_if_not_exists(self):
        path = self.root / "new"
        files.make_dir_if_not_exists(path)
        files.make_dir_if_not_exists(path)
        assert path.is_dir()

    def test_file_exists(self):
        assert not files.file_exists(self.root / "missing")
        assert files.file_exists(_write(self.root / "here"))

    def test_sort_files_by_date(self):
        for name, mtime in (("old", 1_000_000), ("new", 3_000_000), ("mid", 2_000_000)):
            path = _write(self.root / name)
            os.utime(path, (mtime, mtime))

        entries = list(os.scandir(self.root))
        files.sort_files_by_date(entries)
        assert [entry.name for entry in entries] == ["new", "mid", "old"]

        files.sort_files_by_date(entries, asc=False)
        assert [entry.name for entry in entries] == ["old", "mid", "new"]


class TestArchive(FilesTestCase):
    def test_tar_gz_strips_staging_prefix(self):
        _write(self.root / "dest" / "a.txt", "a")
        _write(self.root / "dest" / "sub" / "b.txt", "b")
        cwd = os.getcwd()
        os.chdir(self.root)
        self.addCleanup(os.chdir, cwd)

        files.tar_gz("out.tar.gz", "dest")

        with tarfile.open(self.root / "out.tar.gz", "r:gz") as archive:
            assert archive.getnames() == ["a.txt", "sub/b.txt"]
            assert archive.extractfile("sub/b.txt").read() == b"b"

    def test_tar_gz_logs_and_raises(self):
        with self.assertLogs("webutil.files", level="ERROR"), self.assertRaises(OSError):
            files.tar_gz(self.root / "missing" / "out.tar.gz", self.root)


class TestNames(unittest.TestCase):
    def test_timestamped_name(self):
        when = datetime(2024, 1, 2, 3, 4, 5, 678000)
        assert files.timestamped_name("backup-", ".tar.gz", when) == "backup-2024-01-02_03.04.05.678.tar.gz"


class TestRsync(unittest.TestCase):
    def test_command_line(self):
        with mock.patch("webutil.files.subprocess.run") as run:
            files.rsync("site/", "-az", "host:/srv", delete=True)
        run.assert_called_once_with(["bash", "-c", "rsync -az site/ host:/srv --delete"], check=True)

    def test_failure_propagates(self):
        error = subprocess.CalledProcessError(23, "rsync")
        with mock.patch("webutil.files.subprocess.run", side_effect=error):
            with self.assertRaises(subprocess.CalledProcessError):
                files.rsync("site/", "-az", "host:/srv")


if __name__ == "__main__":
    unittest.main()
