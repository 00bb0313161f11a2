"""Read batches of expressions from text files and archives."""
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr


ENCODING: str = "utf-8"


def _first_txt(names: List[str], archive_kind: str) -> str:
    """Pick the first .txt member name, in archive order."""
    txt_files = [name for name in names if name.endswith(".txt")]
    if not txt_files:
        raise ValueError(f"📄❌ No .txt file found in {archive_kind} archive")
    return txt_files[0]


def _read_zip(archive_path: Path) -> str:
    with zipfile.ZipFile(archive_path, "r") as zf:
        member = _first_txt(zf.namelist(), "zip")
        return zf.read(member).decode(ENCODING)


def _read_tar_xz(archive_path: Path) -> str:
    with tarfile.open(archive_path, "r:xz") as tf:
        files = {m.name: m for m in tf.getmembers() if m.isfile()}
        member = _first_txt(list(files), "tar.xz")
        return tf.extractfile(files[member]).read().decode(ENCODING)


def _read_7z(archive_path: Path) -> str:
    # 7z members are extracted to disk; the temporary directory is removed afterwards
    with py7zr.SevenZipFile(archive_path, mode="r") as archive, tempfile.TemporaryDirectory() as tmpdir:
        member = _first_txt(archive.getnames(), "7z")
        archive.extract(path=tmpdir, targets=[member])
        return (Path(tmpdir) / member).read_text(encoding=ENCODING)


ARCHIVE_READERS = {
    ".zip": _read_zip,
    ".tar.xz": _read_tar_xz,
    ".7z": _read_7z,
}


def read_source(input_file: Path) -> str:
    """
    Return the text of a plain .txt file, or of the first .txt file inside an archive.

    Supported archives: .zip, .tar.xz and .7z. Text is decoded as UTF-8, the
    encoding batch results are written in.

    :param Path input_file: Path to a text file or archive

    :return: Text content
    :rtype: str
    :raises ValueError: If the archive format is unsupported or contains no .txt file
    """
    if input_file.suffix == ".txt":
        return input_file.read_text(encoding=ENCODING)

    for suffix, reader in ARCHIVE_READERS.items():
        if input_file.name.endswith(suffix):
            return reader(input_file)
    raise ValueError(f"📄❌ Unsupported archive format: {''.join(input_file.suffixes)}")


def load_expressions(input_file: Path) -> List[str]:
    """
    Load one expression per non-blank line.

    :param Path input_file: Path to a text file or archive

    :return: Stripped, non-empty lines
    :rtype: List[str]
    """
    lines = read_source(input_file).splitlines()
    return [line.strip() for line in lines if line.strip()]
