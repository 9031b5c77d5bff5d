import dataclasses
import random
import typing


MIN_LENGTH = 4
MAX_LENGTH = 7


@dataclasses.dataclass(frozen=True)
class Motif:

	"""
	A short melodic shape stored as scale-degree indices.

	Degrees are positions in the current scale (0 = root), not pitches, so the
	same motif fits any key or mode it is carried into.
	"""

	degrees: typing.Tuple[int, ...]


	@classmethod
	def generate (cls, scale_length: int, rng: random.Random) -> "Motif":

		"""
		Create a fresh 4-7 note motif starting between the 3rd and 5th degree.

		Each move is a step of one degree 70% of the time and a skip of two
		otherwise, clamped to the scale.
		"""

		top = max(0, scale_length - 1)
		length = MIN_LENGTH + rng.randrange(MAX_LENGTH - MIN_LENGTH + 1)
		current = min(top, rng.randrange(3) + 2)
		degrees: typing.List[int] = []

		for _ in range(length):
			degrees.append(current)
			size = 1 if rng.random() < 0.7 else 2
			step = size if rng.random() < 0.5 else -size
			current = max(0, min(top, current + step))

		return cls(degrees=tuple(degrees))


	@classmethod
	def from_degrees (cls, degrees: typing.Iterable[int]) -> "Motif":

		"""
		Wrap an existing degree sequence, such as one carried over from an earlier segment.
		"""

		return cls(degrees=tuple(int(d) for d in degrees))


	def vary (self, variation: int, scale_length: int) -> "Motif":

		"""
		Return the motif transformed for a variation counter.

		The counter cycles through four forms: the original, a sequence two
		degrees up, the retrograde, and the inversion within the scale.
		"""

		top = max(0, scale_length - 1)
		form = variation % 4

		if form == 1:
			return Motif(degrees=tuple(min(top, d + 2) for d in self.degrees))

		if form == 2:
			return Motif(degrees=tuple(reversed(self.degrees)))

		if form == 3:
			return Motif(degrees=tuple(max(0, top - d) for d in self.degrees))

		return self


	def to_list (self) -> typing.List[int]:

		"""
		Return the degrees as a plain list.
		"""

		return list(self.degrees)


	def __len__ (self) -> int:

		return len(self.degrees)


	def __getitem__ (self, index: int) -> int:

		return self.degrees[index]
