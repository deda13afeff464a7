"""A command-line option holding a comma-separated list of strings."""

import argparse
from dataclasses import dataclass, field

__all__ = ["CommaSeparatedFlag"]


@dataclass
class CommaSeparatedFlag:
    """A list of strings passed as one comma-separated command-line argument."""

    name: str
    values: list = field(default_factory=list)
    usage: str = ""

    def set(self, values):
        """Replace the values with the comma-separated items of values."""
        self.values = values.split(",")

    def __str__(self):
        if self.values is None:
            return ""
        return ",".join(self.values)

    def add_to_parser(self, parser):
        """Register this option on an argparse parser as -name / --name."""
        flag = self

        class _SetAction(argparse.Action):
            def __call__(self, parser, namespace, values, option_string=None):
                flag.set(values)
                setattr(namespace, self.dest, flag.values)

        parser.add_argument(
            f"-{self.name}",
            f"--{self.name}",
            dest=self.name.replace("-", "_"),
            action=_SetAction,
            default=self.values,
            help=self.usage,
        )