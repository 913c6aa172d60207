"""
Packing of nutation multipliers into 64-bit keys.
"""

from typing import Sequence, Tuple

MULTIPLIERS = 15
MAX_NON_ZERO = 7
FIELD_BITS = 7
FIELD_MASK = (1 << FIELD_BITS) - 1
MIN_VALUE = -(1 << (FIELD_BITS - 1))
MAX_VALUE = (1 << (FIELD_BITS - 1)) - 1

# order of the multipliers in keys and in series terms
MULTIPLIER_NAMES = (
    "gamma", "l", "l'", "F", "D", "Omega",
    "LMe", "LVe", "LE", "LMa", "LJu", "LSa", "LU", "LNe", "pA",
)


class NutationCodec:
    """
    Bijective encoding of 15 small multipliers into an unsigned 64-bit key.

    The 15 low bits flag which multipliers are non-zero. Each non-zero
    multiplier then takes 7 bits (two's complement), in multiplier order.
    Luni-solar and planetary terms have at most 7 non-zero multipliers, which
    is what 64 bits allow.
    """

    @staticmethod
    def encode(multipliers: Sequence[int]) -> int:
        """
        Encode multipliers into a key.

        Args:
            multipliers: the 15 multipliers, in ``MULTIPLIER_NAMES`` order

        Raises:
            ValueError: if the multipliers cannot be packed
        """
        if len(multipliers) != MULTIPLIERS:
            raise ValueError(
                f"expected {MULTIPLIERS} multipliers, got {len(multipliers)}"
            )

        key = 0
        shift = MULTIPLIERS
        non_zero = 0
        for index, multiplier in enumerate(multipliers):
            multiplier = int(multiplier)
            if multiplier == 0:
                continue
            if not MIN_VALUE <= multiplier <= MAX_VALUE:
                raise ValueError(
                    f"multiplier {MULTIPLIER_NAMES[index]} = {multiplier} "
                    f"outside of [{MIN_VALUE}, {MAX_VALUE}]"
                )
            non_zero += 1
            if non_zero > MAX_NON_ZERO:
                raise ValueError(
                    f"too many non-zero multipliers (at most {MAX_NON_ZERO})"
                )
            key |= 1 << index
            key |= (multiplier & FIELD_MASK) << shift
            shift += FIELD_BITS
        return key

    @staticmethod
    def decode(key: int) -> Tuple[int, ...]:
        """
        Decode a key into its 15 multipliers.
        """
        if not 0 <= key < (1 << 64):
            raise ValueError(f"key {key} is not an unsigned 64-bit value")

        multipliers = []
        shift = MULTIPLIERS
        for index in range(MULTIPLIERS):
            if key & (1 << index):
                field = (key >> shift) & FIELD_MASK
                shift += FIELD_BITS
                multipliers.append(field - (1 << FIELD_BITS) if field > MAX_VALUE else field)
            else:
                multipliers.append(0)
        return tuple(multipliers)
