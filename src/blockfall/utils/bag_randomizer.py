from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence

from blockfall.constants import PIECE_TYPES


@dataclass(slots=True)
class BagRandomizer:
	"""7-bag piece generator.

	Each refill appends one Fisher-Yates shuffle of every piece type to the
	queue, so any window of seven draws aligned to a bag boundary contains each
	type exactly once and no type is absent for more than 12 consecutive draws.
	"""

	rng: random.Random | None = field(default=None, repr=False)
	types: Sequence[str] = PIECE_TYPES

	queue: List[str] = field(init=False, default_factory=list)
	_rng: random.Random = field(init=False, repr=False)

	def __post_init__(self) -> None:
		self._rng = self.rng or random.Random()
		self.types = tuple(self.types)

	def _refill(self) -> None:
		bag = list(self.types)
		for i in range(len(bag) - 1, 0, -1):
			j = self._rng.randint(0, i)
			bag[i], bag[j] = bag[j], bag[i]
		self.queue.extend(bag)

	def draw(self) -> str:
		if not self.queue:
			self._refill()
		return self.queue.pop(0)

	def peek(self, count: int = 1) -> List[str]:
		"""Upcoming types without consuming them; refills as needed."""
		count = max(0, int(count))
		while len(self.queue) < count:
			self._refill()
		return list(self.queue[:count])

	def reset(self) -> None:
		self.queue.clear()
