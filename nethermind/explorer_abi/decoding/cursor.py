from dataclasses import dataclass, field, replace

from nethermind.explorer_abi.exceptions import DecodeBudgetExceededError, InsufficientDataError
from nethermind.explorer_abi.types.abi_types import WORD_SIZE

# Array elements and bytes words a decode may visit for each word of input
DECODE_BUDGET_FACTOR = 8
MIN_DECODE_BUDGET = 1024


class DecodeBudget:
    """
    Work limit shared by every cursor walking the same buffer.  Offsets may alias, so a short buffer can
    reference the same large array many times over.  Honest encodings visit each element once, and stay far
    below the limit.
    """

    def __init__(self, limit: int):
        self.remaining = limit

    @classmethod
    def for_data(cls, data: bytes) -> "DecodeBudget":
        return cls(max(len(data) // WORD_SIZE * DECODE_BUDGET_FACTOR, MIN_DECODE_BUDGET))

    def spend(self, units: int):
        if units > self.remaining:
            raise DecodeBudgetExceededError(
                f"Decoding {units} more elements exceeds the remaining budget of {self.remaining}"
            )
        self.remaining -= units


@dataclass(frozen=True)
class AbiCursor:
    """
    Read position within an ABI encoded buffer.

    ``base`` is the start of the enclosing structure (the parameter list, tuple, or array body that is
    currently being walked).  Offset words are relative to ``base``.  ``position`` is the absolute index of the
    next head slot to read.  Cursors are immutable, so each recursive decode call works on its own copy.
    All copies share the :class:`DecodeBudget` of the cursor they were derived from.
    """

    data: bytes
    base: int = 0
    position: int = 0
    budget: DecodeBudget = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

    def __post_init__(self):
        if self.budget is None:
            object.__setattr__(self, "budget", DecodeBudget.for_data(self.data))

    @property
    def remaining(self) -> int:
        """Bytes between the current position and the end of the buffer"""
        return max(len(self.data) - self.position, 0)

    def read_bytes(self, start: int, length: int) -> bytes:
        """Returns ``length`` bytes at absolute index ``start``"""
        if start < 0 or length < 0 or start + length > len(self.data):
            raise InsufficientDataError(
                f"Tried to read {length} bytes at index {start} from a buffer of {len(self.data)} bytes"
            )
        return self.data[start : start + length]

    def read_word(self) -> bytes:
        """Returns the 32 byte word at the current position"""
        return self.read_bytes(self.position, WORD_SIZE)

    def read_uint(self) -> int:
        """Reads the word at the current position as an unsigned integer"""
        return int.from_bytes(self.read_word(), "big")

    def spend(self, units: int):
        """Charges ``units`` array elements or bytes words against the shared decode budget"""
        self.budget.spend(units)

    def advance(self, num_bytes: int) -> "AbiCursor":
        return replace(self, position=self.position + num_bytes)

    def rebase(self) -> "AbiCursor":
        """Starts a new structure at the current position"""
        return replace(self, base=self.position)

    def enter(self, offset: int) -> "AbiCursor":
        """
        Follows an offset word.  Returns a cursor positioned at, and based on, ``base + offset``.

        :param offset: Byte offset relative to the start of the enclosing structure
        """
        target = self.base + offset
        if target >= len(self.data):
            raise InsufficientDataError(
                f"Offset {offset} from base {self.base} points outside of a buffer of {len(self.data)} bytes"
            )
        return replace(self, base=target, position=target)
