"""PolicyMap — ordered policy name → value mapping.

Used for every quantity that varies by EUROMOD policy scenario (sums of
income, ratios). Iteration follows the order policies were inserted, which
is the policy schedule order when built by the aggregator.
"""

from collections.abc import Iterable, Iterator, Mapping


class PolicyMap(Mapping[str, float]):
    """Read-only, insertion-ordered mapping from policy name to a number."""

    __slots__ = ("_values",)

    def __init__(self, items: Mapping[str, float] | Iterable[tuple[str, float]] = ()) -> None:
        values = dict(items)
        for policy, value in values.items():
            values[policy] = float(value)
        self._values: dict[str, float] = values

    @classmethod
    def zeros(cls, policies: Iterable[str]) -> "PolicyMap":
        return cls((p, 0.0) for p in policies)

    def __getitem__(self, policy: str) -> float:
        try:
            return self._values[policy]
        except KeyError:
            msg = f"Policy '{policy}' is not present; known policies: {list(self._values)}."
            raise KeyError(msg) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        # Order-insensitive, as for any Mapping
        if isinstance(other, Mapping):
            return dict(self._values) == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"PolicyMap({self._values!r})"
