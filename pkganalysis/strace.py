"""Parsing of strace logs into the files, sockets and commands a process touched."""

import hashlib
import json
import logging
import posixpath
import re
from dataclasses import dataclass, field, replace

from .fileutils import create_and_write_temp_file

__all__ = [
    "CommandInfo",
    "FileInfo",
    "ParseFailure",
    "Result",
    "SocketInfo",
    "WriteContentInfo",
    "parse",
]

_log = logging.getLogger(__name__)


class ParseFailure(ValueError):
    """A syscall line could not be parsed; parsing carries on past it."""


_STRACE = re.compile(r".*strace.go:\d+\] \[.*?\] (.+) (E|X) (\S+)\((.*)\)", re.ASCII)
_EXECVE = re.compile(r".*?(\[.*\])", re.ASCII)
_CREAT = re.compile(r"\S+ ([^,]+)", re.ASCII)
_OPEN = re.compile(r"\S+ ([^,]+), ([^,]+)", re.ASCII)
_OPENAT = re.compile(r"\S+ ([^,]+), \S+ ([^,]+), ([^,]+)", re.ASCII)
_STAT = re.compile(r"\S+ ([^,]+),", re.ASCII)
_NEWFSTATAT = re.compile(r"\S+ ([^,]+), \S+ ([^,]+)", re.ASCII)
_SOCKET = re.compile(
    r"{Family: ([^,]+), (Addr: ([^,]*), Port: ([0-9]+)|[^}]+)}", re.ASCII
)
_UNLINK = re.compile(r"0x[a-f\d]+ ([^)]+)?", re.ASCII)
_UNLINKAT = re.compile(r"\S+ ([^,]+), 0x[a-f\d]+ ([^,]+), 0x[a-f\d]+", re.ASCII)
# Only the path; the bytes written are taken from the last hex value.
_WRITE = re.compile(r"\S+ ([^,]+),.*", re.ASCII)
_HEX_NUMBER = re.compile(r"[+-]?[0-9a-fA-F]+", re.ASCII)

_HEX_PREFIX = "0x"
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass
class WriteContentInfo:
    """One write to a file: the ID of the written buffer and the byte count."""

    write_buffer_id: str
    bytes_written: int


@dataclass
class FileInfo:
    """How a single path was accessed."""

    path: str
    read: bool = False
    write: bool = False
    delete: bool = False
    write_info: list = field(default_factory=list)


@dataclass(frozen=True)
class SocketInfo:
    """An IPv4 or IPv6 address and port that was bound or connected to."""

    address: str
    port: int


@dataclass
class CommandInfo:
    """A command that was executed, with its environment."""

    command: list
    env: list


def _parse_open_flags(flags):
    read = write = False
    if "O_RDWR" in flags:
        read = write = True
    if "O_CREAT" in flags:
        write = True
    if "O_WRONLY" in flags:
        write = True
    if "O_RDONLY" in flags:
        read = True
    return read, write


def _join_paths(directory, file):
    if file.startswith("/"):
        return file
    parts = [p for p in (directory, file) if p]
    if not parts:
        return ""
    joined = posixpath.normpath(posixpath.join(*parts))
    if joined.startswith("//"):
        joined = "/" + joined.lstrip("/")
    return joined


def _decode_string_list(text, start):
    decoder = json.JSONDecoder()
    value, end = decoder.raw_decode(text, start)
    if value is None:
        return [], end
    if not isinstance(value, list):
        raise ValueError(f"expected a JSON array, got {type(value).__name__}")
    items = []
    for item in value:
        if item is None:
            items.append("")
        elif isinstance(item, str):
            items.append(item)
        else:
            raise ValueError(f"expected a JSON string, got {type(item).__name__}")
    return items, end


def _parse_cmd_and_env(cmd_and_env):
    cmd, end = _decode_string_list(cmd_and_env, 0)
    next_start = cmd_and_env.find("[", end)
    if next_start == -1:
        raise ValueError("no environment array after the command")
    env, _ = _decode_string_list(cmd_and_env, next_start)
    return cmd, env


def _go_list(items):
    return "[" + " ".join(items) + "]"


class Result:
    """Files, sockets and commands collected from an strace log."""

    def __init__(self, write_file_contents=True):
        self._write_file_contents = write_file_contents
        self._files = {}
        self._sockets = {}
        self._commands = {}
        self._write_buffer_ids = set()

    def _record_file_access(self, path, read=False, write=False, delete=False):
        info = self._files.setdefault(path, FileInfo(path))
        info.read = info.read or read
        info.write = info.write or write
        info.delete = info.delete or delete

    def _record_file_write(self, path, buffer, bytes_written):
        self._record_file_access(path, write=True)
        if not self._write_file_contents:
            return
        write_id = hashlib.sha256(buffer).hexdigest()
        self._files[path].write_info.append(WriteContentInfo(write_id, bytes_written))
        if write_id not in self._write_buffer_ids:
            try:
                create_and_write_temp_file(write_id, buffer)
            except OSError as err:
                raise OSError(f"failed to create and write temp file: {err}") from err
            self._write_buffer_ids.add(write_id)

    def _record_socket(self, address, port):
        # A dash separates the parts because IPv6 addresses hold colons;
        # the port is padded so that keys sort numerically.
        key = f"{address}-{port:05d}"
        self._sockets.setdefault(key, SocketInfo(address, port))

    def _record_command(self, cmd, env):
        key = f"{_go_list(cmd)}-{_go_list(env)}"
        self._commands.setdefault(key, CommandInfo(cmd, env))

    def _parse_enter(self, syscall, args, logger):
        if syscall != "write":
            return
        hex_index = args.rfind(_HEX_PREFIX)
        if hex_index == -1 or len(args) <= hex_index + len(_HEX_PREFIX):
            raise ParseFailure(
                "strace of file write syscall has the bytes written argument "
                "in an unexpected format"
            )
        digits = args[hex_index + len(_HEX_PREFIX):]
        if not _HEX_NUMBER.fullmatch(digits):
            raise ParseFailure(f"bytes written: invalid hex value {digits!r}")
        bytes_written = int(digits, 16)
        if not _INT64_MIN <= bytes_written <= _INT64_MAX:
            raise ParseFailure(f"bytes written: value out of range {digits!r}")

        match = _WRITE.search(args)
        if match is None:
            raise ParseFailure(f"write args: {args}")
        path = match.group(1)

        first_quote = args.find('"')
        last_quote = args.rfind('"')
        buffer = ""
        if first_quote != -1 and last_quote > first_quote:
            buffer = args[first_quote + 1:last_quote]
        logger.debug("write path=%s size=%d", path, bytes_written)
        self._record_file_write(
            path, buffer.encode("utf-8", "surrogateescape"), bytes_written
        )

    def _parse_exit(self, syscall, args, logger):
        if syscall == "creat":
            match = _require(_CREAT, args, "create")
            path = match.group(1)
            logger.debug("creat path=%s", path)
            self._record_file_access(path, write=True)
        elif syscall == "open":
            match = _require(_OPEN, args, "open")
            path = match.group(1)
            read, write = _parse_open_flags(match.group(2))
            logger.debug("open path=%s read=%s write=%s", path, read, write)
            self._record_file_access(path, read=read, write=write)
        elif syscall == "openat":
            match = _require(_OPENAT, args, "openat")
            path = _join_paths(match.group(1), match.group(2))
            read, write = _parse_open_flags(match.group(3))
            logger.debug("openat path=%s read=%s write=%s", path, read, write)
            self._record_file_access(path, read=read, write=write)
        elif syscall == "execve":
            match = _require(_EXECVE, args, "execve")
            logger.debug("execve cmdAndEnv=%s", match.group(1))
            try:
                cmd, env = _parse_cmd_and_env(match.group(1))
            except ValueError as err:
                raise ParseFailure(f"cmd and env: {err}") from err
            self._record_command(cmd, env)
        elif syscall in ("bind", "connect"):
            match = _require(_SOCKET, args, "socket")
            family = match.group(1)
            if family not in ("AF_INET", "AF_INET6"):
                logger.debug("Ignoring socket family=%s socket=%s", family, match.group(2))
                return
            address = match.group(3) or ""
            port_text = match.group(4) or ""
            if not port_text:
                raise ParseFailure(f"port: invalid value {port_text!r}")
            port = int(port_text)
            logger.debug("socket address=%s port=%d", address, port)
            self._record_socket(address, port)
        elif syscall in ("stat", "fstat", "lstat"):
            match = _require(_STAT, args, "stat")
            path = match.group(1)
            logger.debug("stat path=%s", path)
            self._record_file_access(path, read=True)
        elif syscall == "newfstatat":
            match = _require(_NEWFSTATAT, args, "newfstatat")
            path = _join_paths(match.group(1), match.group(2))
            logger.debug("newfstatat path=%s", path)
            self._record_file_access(path, read=True)
        elif syscall == "unlink":
            match = _require(_UNLINK, args, "unlink")
            path = match.group(1) or ""
            logger.debug("unlink path=%s", path)
            self._record_file_access(path, delete=True)
        elif syscall == "unlinkat":
            match = _require(_UNLINKAT, args, "unlinkat")
            path = _join_paths(match.group(1), match.group(2))
            logger.debug("unlinkat path=%s", path)
            self._record_file_access(path, delete=True)

    def files(self):
        """All accessed files, sorted by path."""
        return [
            replace(self._files[p], write_info=list(self._files[p].write_info))
            for p in sorted(self._files)
        ]

    def sockets(self):
        """All IPv4 and IPv6 sockets, in a stable order."""
        return [self._sockets[k] for k in sorted(self._sockets)]

    def commands(self):
        """All executed commands, in a stable order."""
        return [
            CommandInfo(list(self._commands[k].command), list(self._commands[k].env))
            for k in sorted(self._commands)
        ]


def _require(pattern, args, what):
    match = pattern.search(args)
    if match is None:
        raise ParseFailure(f"{what} args: {args}")
    return match


def parse(stream, logger=None, write_file_contents=True):
    """Read strace output lines from stream and collect what was accessed.

    logger receives verbose debug information about the parsing. Lines that
    cannot be parsed are logged as warnings and skipped; other errors raise.
    """
    debug_logger = logger if logger is not None else _log
    result = Result(write_file_contents)

    for raw_line in stream:
        if isinstance(raw_line, (bytes, bytearray)):
            raw_line = bytes(raw_line).decode("utf-8", "surrogateescape")
        line = raw_line.rstrip()

        match = _STRACE.match(line)
        if match is None:
            continue
        kind, syscall, args = match.group(2), match.group(3), match.group(4)
        if kind == "E":
            try:
                result._parse_enter(syscall, args, debug_logger)
            except ParseFailure as err:
                _log.warning("Failed to parse entry syscall: %s", err)
        else:
            try:
                result._parse_exit(syscall, args, debug_logger)
            except ParseFailure as err:
                _log.warning("Failed to parse exit syscall: %s", err)

    return result