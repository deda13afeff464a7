"""File helpers: hashing, writing and the write-buffer scratch directory."""

import hashlib
import os
import shutil

__all__ = [
    "WRITE_BUFFER_FOLDER",
    "create_and_write_temp_file",
    "open_temp_file",
    "remove_temp_files_directory",
    "sha256_hash",
    "write_file",
]

# Write buffer data is kept here before it is uploaded.
WRITE_BUFFER_FOLDER = os.path.join("worker_tmp", "write_buffers")

_CHUNK_SIZE = 64 * 1024


def create_and_write_temp_file(file_name, data):
    """Write data to file_name inside the write-buffer directory."""
    os.makedirs(WRITE_BUFFER_FOLDER, mode=0o777, exist_ok=True)
    with open(os.path.join(WRITE_BUFFER_FOLDER, file_name), "wb") as f:
        f.write(data)


def open_temp_file(file_name):
    """Open a file in the write-buffer directory for binary reading."""
    return open(os.path.join(WRITE_BUFFER_FOLDER, file_name), "rb")


def remove_temp_files_directory():
    """Remove the write-buffer directory and everything in it."""
    try:
        shutil.rmtree(WRITE_BUFFER_FOLDER)
    except FileNotFoundError:
        pass


def sha256_hash(path):
    """Return the hex SHA-256 digest of the file at path."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def write_file(path, contents, executable=False):
    """Write contents to path, optionally marking the file as executable."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o666)
    with os.fdopen(fd, "wb") as f:
        f.write(contents)

    if executable:
        try:
            os.chmod(path, 0o777)
        except OSError as err:
            raise OSError(
                f"could not set exec permissions on {path}: {err}"
            ) from err