"""Load wiki test pages from plain files or archives."""
from pathlib import Path
import tarfile
import tempfile
from typing import List, Tuple
import zipfile

import py7zr

from calculator_fixture.common.logger import logger

PAGE_SUFFIXES: Tuple[str, ...] = (".txt", ".wiki")


def _is_page(name: str) -> bool:
    return name.endswith(PAGE_SUFFIXES)


def load_page(path: Path) -> str:
    """
    Return the wiki text of a test page.

    Plain pages (.txt, .wiki) are read directly; anything else is treated as an
    archive holding the page.

    :param Path path: Page or archive path

    :return: Page content
    :rtype: str
    :raises ValueError: If the archive format is unsupported or holds no page
    """
    if path.suffix in PAGE_SUFFIXES:
        return path.read_text(encoding="utf-8")
    return extract_page(path)

# Errors raised by the archive libraries on damaged or mislabelled files
CORRUPT_ARCHIVE_ERRORS: Tuple[type, ...] = (zipfile.BadZipFile, tarfile.TarError, py7zr.Bad7zFile)


def _extract_first_page(archive_path: Path, target: Path) -> str:
    """
    Extract the first page of an archive into target and return its member name.

    :raises ValueError: If no page is found or format is unsupported
    """
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zf:
            pages: List[str] = [f for f in zf.namelist() if _is_page(f)]
            if not pages:
                raise ValueError("📄❌ No page found in zip archive")
            zf.extract(pages[0], path=target)

    elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
        with tarfile.open(archive_path, "r:xz") as tf:
            pages = [m.name for m in tf.getmembers() if m.isfile() and _is_page(m.name)]
            if not pages:
                raise ValueError("📄❌ No page found in tar.xz archive")
            tf.extract(pages[0], path=target, filter="data")

    elif archive_path.suffix == ".7z":
        with py7zr.SevenZipFile(archive_path, mode="r") as archive:
            pages = [f for f in archive.getnames() if _is_page(f)]
            if not pages:
                raise ValueError("📄❌ No page found in 7z archive")
            archive.extract(targets=[pages[0]], path=target)

    else:
        raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")

    return pages[0]


def extract_page(archive_path: Path) -> str:
    """
    Extract the first page found in a supported archive and return its content.

    Supported formats:
    - .zip
    - .tar.xz
    - .7z

    :param Path archive_path: Path to the archive file

    :return: Content of the extracted page
    :rtype: str
    :raises ValueError: If no page is found, the format is unsupported or the
        archive is corrupt
    """
    # Extract into a temporary directory, never next to the archive
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        try:
            page: str = _extract_first_page(archive_path, tmpdir_path)
        except CORRUPT_ARCHIVE_ERRORS as exc:
            raise ValueError(f"📄❌ Corrupt archive {archive_path.name}: {exc}") from exc

        logger.info(f"📄 Loaded {page} from {archive_path.name}")
        return (tmpdir_path / page).read_text(encoding="utf-8")
