import random
import typing

T = typing.TypeVar("T")


def pick_weighted (items: typing.Sequence[T], weights: typing.Sequence[float], rng: random.Random) -> T:

	"""Pick one item with probability proportional to its weight.

	Weights are relative and need not sum to 1.0. A threshold is drawn in
	``[0, total)`` and each weight is subtracted from it in order; the first
	item that takes the threshold to zero or below wins. If rounding leaves
	nothing selected, the last item is returned.

	Parameters:
		items: Values to choose from
		weights: One weight per item
		rng: Random number generator instance

	Example:
		```python
		duration = cadenza.sequence_utils.pick_weighted([480, 240, 720], [2, 3, 1], rng)
		```
	"""

	if not items:
		raise ValueError("Items list cannot be empty")

	if len(items) != len(weights):
		raise ValueError("Items and weights must have the same length")

	threshold = rng.random() * sum(weights)

	for item, weight in zip(items, weights):
		threshold -= weight
		if threshold <= 0:
			return item

	return items[-1]


def shuffled (items: typing.Sequence[T], rng: random.Random) -> typing.List[T]:

	"""Return a Fisher-Yates shuffled copy of ``items``."""

	result = list(items)

	for i in range(len(result) - 1, 0, -1):
		j = int(rng.random() * (i + 1))
		result[i], result[j] = result[j], result[i]

	return result


def jitter (rng: random.Random, spread: float) -> float:

	"""Return a uniform offset in ``[-spread / 2, spread / 2)``.

	Every generator perturbs timing and velocity the same way:
	``(rng.random() - 0.5) * spread``.
	"""

	return (rng.random() - 0.5) * spread
