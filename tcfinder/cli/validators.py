"""Custom validators for argument parsing."""

import argparse
from typing import Any, Sequence


class PositiveIntegerAction(argparse.Action):
    """Argparse action that validates the value is >= 1."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None,
    ) -> None:
        # type=int has already converted the value
        if not isinstance(values, int):
            parser.error(f"{option_string} must be an integer")
            return

        if values < 1:
            parser.error(f"Minimum value for {option_string} is 1")
        setattr(namespace, self.dest, values)


class ProportionAction(argparse.Action):
    """Argparse action that validates the value lies within [0, 1]."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None,
    ) -> None:
        if not isinstance(values, float):
            parser.error(f"{option_string} must be a number")
            return

        if not 0.0 <= values <= 1.0:
            parser.error(f"{option_string} must be between 0 and 1")
        setattr(namespace, self.dest, values)
