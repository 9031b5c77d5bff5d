import bisect
import itertools
import random
import typing

T = typing.TypeVar("T")


def weighted_choice (options: typing.Sequence[typing.Tuple[T, float]], rng: random.Random) -> T:

	"""
	Draw one value from ``(value, weight)`` pairs in proportion to its weight.

	The melodic walk scores each candidate pitch (chord tone, direction, step
	or leap) and draws from those scores here, so the best-scored neighbour is
	the likeliest next note but any candidate with a positive score can occur.

	Example:
		```python
		pitch = continuo.sequence_utils.weighted_choice([(62, 4.0), (64, 6.0), (67, 2.0)], rng)
		```
	"""

	if not options:
		raise ValueError("Nothing to choose from")

	running_totals = list(itertools.accumulate(weight for _, weight in options))
	total = running_totals[-1]

	if total <= 0:
		raise ValueError("Weights must add up to more than zero")

	index = bisect.bisect_left(running_totals, rng.random() * total)

	return options[min(index, len(options) - 1)][0]


def grid_from_string (pattern: str) -> typing.Tuple[bool, ...]:

	"""Parse a step grid written as ``x`` (hit) and ``.`` (rest).

	Whitespace is ignored so grids can be grouped by beat for readability.

	Example:
		```python
		grid_from_string("x... x... x... x...")  # four-on-the-floor
		```
	"""

	steps: typing.List[bool] = []

	for char in pattern:

		if char.isspace():
			continue

		if char not in ("x", "."):
			raise ValueError(f"Unknown grid symbol {char!r} in {pattern!r}")

		steps.append(char == "x")

	return tuple(steps)


def clamp (value: float, low: float, high: float) -> float:

	"""Clamp a value into ``[low, high]``."""

	return max(low, min(high, value))
