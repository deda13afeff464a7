"""The open source package ecosystems that can be analysed."""

import enum

__all__ = [
    "Ecosystem",
    "SUPPORTED_ECOSYSTEMS",
    "SUPPORTED_ECOSYSTEMS_STRINGS",
    "UnsupportedEcosystemError",
    "ecosystems_as_strings",
    "parse",
    "parse_purl_type",
]


class Ecosystem(str, enum.Enum):
    """An open source package ecosystem from which packages can be downloaded."""

    NONE = ""
    CRATES_IO = "crates.io"
    NPM = "npm"
    PACKAGIST = "packagist"
    PYPI = "pypi"
    RUBYGEMS = "rubygems"

    def __str__(self):
        return self.value

    def __format__(self, spec):
        return format(self.value, spec)


class UnsupportedEcosystemError(ValueError):
    """The given name does not correspond to a supported ecosystem."""

    def __init__(self, name):
        super().__init__(f"ecosystem unsupported: {name}")
        self.name = name


SUPPORTED_ECOSYSTEMS = (
    Ecosystem.CRATES_IO,
    Ecosystem.NPM,
    Ecosystem.PACKAGIST,
    Ecosystem.PYPI,
    Ecosystem.RUBYGEMS,
)


def ecosystems_as_strings(ecosystems):
    """Return the names of the given ecosystems as a list of strings."""
    return [str(e) for e in ecosystems]


SUPPORTED_ECOSYSTEMS_STRINGS = ecosystems_as_strings(SUPPORTED_ECOSYSTEMS)


def parse(name):
    """Return the Ecosystem called name; "" gives Ecosystem.NONE.

    Raises UnsupportedEcosystemError for any other unknown name.
    """
    try:
        return Ecosystem(name)
    except ValueError:
        raise UnsupportedEcosystemError(name) from None


_PURL_TYPES = {
    "cargo": Ecosystem.CRATES_IO,
    "composer": Ecosystem.PACKAGIST,
    "gem": Ecosystem.RUBYGEMS,
}


def parse_purl_type(purl_type):
    """Convert a Package URL type into an Ecosystem."""
    if purl_type in _PURL_TYPES:
        return _PURL_TYPES[purl_type]
    # npm and pypi use the same name as their purl type.
    return parse(purl_type)