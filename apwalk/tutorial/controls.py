"""Slider and toggle state of a single visualization."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Iterator, List, Mapping, Tuple, Union

ControlValue = Union[bool, int, float, str, Tuple[str, ...]]


class ControlPanel:
    """Named control values for one mounted visualization.

    The set of control names is fixed by the defaults; writing a name that
    was never declared raises ``KeyError``.
    """

    def __init__(self, defaults: Mapping[str, ControlValue]):
        self._defaults: Dict[str, ControlValue] = dict(defaults)
        self._values: Dict[str, ControlValue] = dict(defaults)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def names(self) -> List[str]:
        return list(self._values)

    def get(self, name: str) -> ControlValue:
        return self._values[name]

    def set(self, name: str, value: ControlValue) -> None:
        if name not in self._values:
            raise KeyError(f"Unknown control: {name}")
        if isinstance(value, list):
            value = tuple(value)
        self._values[name] = value

    def apply(self, values: Mapping[str, ControlValue]) -> None:
        unknown = [name for name in values if name not in self._values]
        if unknown:
            raise KeyError(f"Unknown control: {', '.join(unknown)}")
        for name, value in values.items():
            self.set(name, value)

    def bind(self, values: Mapping[str, ControlValue]) -> Callable[[], None]:
        """Return a zero-argument callable that applies ``values``."""
        return partial(self.apply, dict(values))

    def reset(self) -> None:
        self._values = dict(self._defaults)

    def snapshot(self) -> Dict[str, ControlValue]:
        return dict(self._values)


def format_value(value: ControlValue) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, tuple):
        return ", ".join(value) if value else "(none)"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)
