"""Keys, phases and result records of a dynamic analysis run."""

import base64
import enum
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any

__all__ = [
    "AnalysisRunComplete",
    "CommandResult",
    "DNSQueries",
    "DNSResult",
    "DynamicAnalysisData",
    "DynamicAnalysisRecord",
    "DynamicPhase",
    "FileResult",
    "FileWriteResult",
    "Key",
    "SocketResult",
    "StraceSummary",
    "WriteInfo",
    "all_dynamic_phases",
    "default_dynamic_phases",
]


def _json_name(f):
    name = f.metadata.get("json")
    if name:
        return name
    return "".join(part.capitalize() for part in f.name.split("_"))


def _to_jsonable(value):
    """Convert results into JSON-ready values, using the schema's field names."""
    if is_dataclass(value) and not isinstance(value, type):
        return {_json_name(f): _to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {
            (k.value if isinstance(k, enum.Enum) else str(k)): _to_jsonable(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


@dataclass(frozen=True)
class Key:
    """Identifies one package version within an ecosystem."""

    ecosystem: Any
    name: str
    version: str

    def __str__(self):
        return "-".join([str(self.ecosystem), self.name, self.version])

    def to_dict(self):
        return {
            "Ecosystem": str(self.ecosystem),
            "Name": self.name,
            "Version": self.version,
        }


class DynamicPhase(str, enum.Enum):
    """A way to run a package during its usage lifecycle."""

    EXECUTE = "execute"
    IMPORT = "import"
    INSTALL = "install"

    def __str__(self):
        return self.value

    def __format__(self, spec):
        return format(self.value, spec)


def default_dynamic_phases():
    """The phases supported by every ecosystem and run by default."""
    return [DynamicPhase.INSTALL, DynamicPhase.IMPORT]


def all_dynamic_phases():
    """Every dynamic analysis phase, in the order they are run."""
    return [DynamicPhase.INSTALL, DynamicPhase.IMPORT, DynamicPhase.EXECUTE]


@dataclass
class FileResult:
    path: str
    read: bool = False
    write: bool = False
    delete: bool = False


@dataclass
class SocketResult:
    address: str
    port: int
    hostnames: list = field(default_factory=list)


@dataclass
class CommandResult:
    command: list = field(default_factory=list)
    environment: list = field(default_factory=list)


@dataclass
class DNSQueries:
    hostname: str
    types: list = field(default_factory=list)


@dataclass
class DNSResult:
    class_: str = field(default="", metadata={"json": "Class"})
    queries: list = field(default_factory=list)


@dataclass
class WriteInfo:
    write_buffer_id: str
    bytes_written: int


@dataclass
class FileWriteResult:
    path: str
    write_info: list = field(default_factory=list)


@dataclass
class StraceSummary:
    """System calls observed during one analysis phase."""

    status: str = ""
    stdout: bytes = b""
    stderr: bytes = b""
    files: list = field(default_factory=list)
    sockets: list = field(default_factory=list)
    commands: list = field(default_factory=list)
    dns: list = field(default_factory=list, metadata={"json": "DNS"})


@dataclass
class DynamicAnalysisData:
    """All data obtained from running dynamic analysis, keyed by phase."""

    strace_summary: dict = field(default_factory=dict)
    file_writes_summary: dict = field(default_factory=dict)
    file_write_buffer_ids: dict = field(default_factory=dict)
    execution_log: str = ""


@dataclass
class DynamicAnalysisRecord:
    """Top-level record written to the dynamic analysis JSON results files."""

    package: Key
    created_timestamp: int
    analysis: Any

    def to_dict(self):
        return {
            "Package": self.package.to_dict(),
            "CreatedTimestamp": self.created_timestamp,
            "Analysis": _to_jsonable(self.analysis),
        }


@dataclass(frozen=True)
class AnalysisRunComplete:
    """Notification sent when a package analysis run is complete."""

    key: Key