"""
Path based wrappers around the text operations in `pelicanpost.post`.

Read-modify-write cycles are not locked: two concurrent updates of the same
file race and the last writer wins. Writes are atomic, so readers see either
the old or the new post, never a partial one.
"""

from logging import getLogger
import os
import shutil
import tempfile

from pelicanpost.metadata import Metadata, ParsedDocument, parse
from pelicanpost.post import get_status, is_recognized_post, toggle_draft_status, update_fields


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def read_text(path: str) -> str:
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_text(path: str, text: str):
    """Atomically replace `path`, keeping the mode of the existing file.

    Symlinks are followed so the link itself stays in place.
    """
    path = os.path.realpath(path)
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix='.pelicanpost-', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def parse_file(path: str) -> ParsedDocument:
    return parse(read_text(path))


def get_file_status(path: str) -> str:
    return get_status(read_text(path))


def update_file(path: str, partial: Metadata):
    getLogger(__name__).info(f'Updating {path}: {partial}')
    write_text(path, update_fields(read_text(path), partial))


def toggle_file(path: str) -> str:
    result = toggle_draft_status(read_text(path))
    write_text(path, result.new_text)
    getLogger(__name__).info(f'Set status of {path} to {result.new_status}')
    return result.new_status


def is_post_file(path: str) -> bool:
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        getLogger(__name__).info(f'Cannot read {path}: {e}')
        return False
    return is_recognized_post(text)
