# pkganalysis

A library of building blocks for analysing what open source packages do when they are installed,
imported and run. It does not run packages itself. It handles the data that such analysis produces.

## Contents

- `pkganalysis.strace` turns sandbox strace logs into a summary of the files, sockets and commands
  that were touched. `parse(stream, logger=None, write_file_contents=True)` reads lines (text or
  bytes) from `stream` and returns a `Result` with these methods:
  - `files()`: `FileInfo` entries, sorted by path, with `read`, `write`, `delete` flags and, for
    `write` syscalls, a `write_info` list of `WriteContentInfo` (buffer SHA-256 and byte count).
  - `sockets()`: `SocketInfo` entries for IPv4 and IPv6 `bind` / `connect` calls.
  - `commands()`: `CommandInfo` entries for `execve` calls, with command and environment.

  Lines that cannot be parsed are logged as warnings and skipped. When `write_file_contents` is
  true, each distinct write buffer is saved under `worker_tmp/write_buffers` in the current
  directory, named by its SHA-256 digest.
- `pkganalysis.ecosystem` covers the supported ecosystems:
  - `Ecosystem`, whose values are `crates.io`, `npm`, `packagist`, `pypi` and `rubygems`
    (plus `Ecosystem.NONE` for the empty name).
  - `parse` and `parse_purl_type`, which raise `UnsupportedEcosystemError` for a name they do not
    know; `ecosystems_as_strings` turns ecosystems into their names.
- `pkganalysis.analysisrun` holds the dynamic analysis types: `Key`, `DynamicPhase`
  (`default_dynamic_phases()`, `all_dynamic_phases()`), `StraceSummary`, `FileResult`,
  `SocketResult`, `CommandResult`, `DNSResult`, `FileWriteResult`, `DynamicAnalysisData`,
  `DynamicAnalysisRecord` (with `to_dict()`) and `AnalysisRunComplete`.
- `pkganalysis.tokens` holds the source code token types: `IdentifierType`, `Position`,
  `Identifier`, `StringLiteral`, `IntLiteral`, `FloatLiteral` and `Comment`. It also provides
  `levenshtein_distance`, in which a substitution counts as two edits.
- Smaller helpers:
  - `pkganalysis.sequtils`: `combine_regexp`, `last_n_bytes`, `remove_duplicates`, `transform`.
  - `pkganalysis.equals`: `float_equals`, `json_equals`.
  - `pkganalysis.fileutils`: `sha256_hash`, `write_file` and the write-buffer directory helpers
    `create_and_write_temp_file`, `open_temp_file`, `remove_temp_files_directory`.
  - `pkganalysis.flags`: `CommaSeparatedFlag`, a comma-separated list option for `argparse`.
  - `pkganalysis.useragent`: `UserAgentHandler`, `user_agent_opener` and
    `default_user_agent_opener`, which set the User-Agent header of `urllib` requests.

## Example

```python
import io
from pkganalysis.strace import parse

log = io.StringIO(
    "I1203 05:29:21.585712 173 strace.go:625] [   2] python3 X "
    "creat(0x7f015d7865d0 /tmp/abctest, 0o600) = 0x6\n"
)
result = parse(log)
for info in result.files():
    print(info.path, info.read, info.write, info.delete)
# /tmp/abctest False True False
```

## What this package does not do

It has no command-line program, does not run packages in a sandbox, and does not download or
store analysis results. It does not extract package archives, has no static analysis result
records, and has no histogram type for value counts.

## Running the tests

```
pip install -e .[test]
pytest
```