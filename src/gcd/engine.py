"""
Greatest common divisor engine: Euclidean and binary (Stein) reductions.

**Conceptual**: The GCD of a set of integers is the largest positive integer
that divides every one of them. Two classical algorithms compute it:
  - Euclidean: repeatedly replace (a, b) with (b, a mod b) until b is 0.
  - Stein (binary GCD): strip shared factors of two with shifts and replace
    the modulo step with subtraction of odd operands.
Both are exposed for two, three, or any number of arguments, plus timed
variants that report elapsed wall-clock duration alongside the result.

**Domain**: Inputs are 32-bit signed integers. The minimum value (-2**31)
is rejected because its magnitude does not fit in the same type. Python ints
are unbounded, so anything outside [INT32_MIN, INT32_MAX] is rejected too.

**Errors**:
  - GcdOutOfRangeError: an input is INT32_MIN or outside the 32-bit range.
  - GcdInvalidArgumentError: every input is 0 (GCD undefined).
Both subclass ValueError so callers can catch them generically.

This module holds no state; every call is independent and thread-safe.
"""

import logging
import numbers
from collections.abc import Iterable
from datetime import timedelta
from functools import wraps
from typing import Callable, NamedTuple, Optional, Sequence

from src.utils.time import MonotonicClock, get_real_clock

logger = logging.getLogger(__name__)

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


class GcdError(Exception):
    """
    Base exception for GCD engine errors.

    Catch GcdError to handle every engine failure, or one of the subclasses
    for fine-grained handling.
    """
    pass


class GcdInvalidArgumentError(GcdError, ValueError):
    """
    Raised when every supplied integer is 0.

    **Conceptual**: gcd(0, 0, ..., 0) is undefined: every integer divides 0,
    so there is no greatest one.
    """
    pass


class GcdOutOfRangeError(GcdError, ValueError):
    """
    Raised when an input is INT32_MIN or does not fit in 32 bits.

    **Conceptual**: |INT32_MIN| = 2**31 is one more than INT32_MAX, so the
    absolute value taken by both algorithms would overflow.
    """
    pass


class TimedGcd(NamedTuple):
    """Result of a timed GCD call, unpackable as ``value, elapsed = ...``."""
    value: int
    elapsed: timedelta


# =============================================================================
# Validation
# =============================================================================

def _coerce(value) -> int:
    # bool is an Integral subclass but never a meaningful GCD operand
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(
            f"GCD operands must be integers, got {type(value).__name__}: {value!r}"
        )
    return int(value)


def validate_domain(values: Sequence[int]) -> None:
    """
    Reject any value whose magnitude cannot be represented as a 32-bit int.

    Args:
        values: Already-coerced integer operands.

    Raises:
        GcdOutOfRangeError: If any value is INT32_MIN or outside the 32-bit range.
    """
    for value in values:
        if value == INT32_MIN:
            raise GcdOutOfRangeError("one or more numbers are int.MinValue")
        if value < INT32_MIN or value > INT32_MAX:
            raise GcdOutOfRangeError(
                f"{value} is outside the 32-bit signed range "
                f"[{INT32_MIN}, {INT32_MAX}]"
            )


def validate_not_all_zero(values: Sequence[int]) -> None:
    """
    Reject the degenerate all-zero input.

    Raises:
        GcdInvalidArgumentError: If every value is 0.
    """
    if all(value == 0 for value in values):
        raise GcdInvalidArgumentError("all numbers are 0")


def _collect(a, b, others: Sequence = ()) -> list:
    values = [_coerce(a), _coerce(b)]
    values.extend(_coerce(value) for value in others)
    return values


# =============================================================================
# Euclidean reduction
# =============================================================================

def _truncated_remainder(a: int, b: int) -> int:
    """
    Remainder of truncated division: the sign follows the dividend.

    Python's % floors instead (sign follows the divisor), e.g.
    -7 % 3 == 2 while the truncated remainder is -1.
    """
    remainder = abs(a) % abs(b)
    return -remainder if a < 0 else remainder


def _reduce_euclidean(a: int, b: int) -> int:
    # |b| strictly decreases each iteration, so this terminates
    while b != 0:
        a, b = b, _truncated_remainder(a, b)
    return abs(a)


def gcd_euclidean_pair(a: int, b: int) -> int:
    """
    GCD of two integers by the Euclidean algorithm.

    **Mathematical**: gcd(a, b) = gcd(b, a mod b), gcd(a, 0) = |a|.
    Runs in O(log(min(|a|, |b|))) iterations.

    Args:
        a: First integer in (INT32_MIN, INT32_MAX].
        b: Second integer in (INT32_MIN, INT32_MAX].

    Returns:
        The non-negative GCD.

    Raises:
        GcdInvalidArgumentError: If a and b are both 0.
        GcdOutOfRangeError: If a or b is INT32_MIN or outside 32 bits.
    """
    values = _collect(a, b)
    validate_not_all_zero(values)
    validate_domain(values)
    return _reduce_euclidean(values[0], values[1])


def gcd_euclidean_triple(a: int, b: int, c: int) -> int:
    """
    GCD of three integers by the Euclidean algorithm: gcd(gcd(a, b), c).

    Raises:
        GcdInvalidArgumentError: If a, b and c are all 0.
        GcdOutOfRangeError: If any operand is INT32_MIN or outside 32 bits.
    """
    values = _collect(a, b, (c,))
    validate_not_all_zero(values)
    validate_domain(values)
    first, second, third = values
    return _reduce_euclidean(_reduce_euclidean(first, second), third)


def gcd_euclidean_many(a: int, b: int, others: Sequence[int]) -> int:
    """
    GCD of two or more integers by the Euclidean algorithm.

    **Functionally**:
    - The domain is checked up front over every operand.
    - Zero operands are skipped during the fold (gcd(x, 0) = |x| anyway).
    - The all-zero case is detected after the fold: if the accumulator is
      still 0, every operand was 0.
    - An empty ``others`` falls back to gcd_euclidean_pair.

    Args:
        a: First integer.
        b: Second integer.
        others: Remaining integers (any sequence, possibly empty).

    Returns:
        The non-negative GCD of all operands.

    Raises:
        GcdInvalidArgumentError: If every operand is 0.
        GcdOutOfRangeError: If any operand is INT32_MIN or outside 32 bits.
    """
    values = _collect(a, b, others)
    validate_domain(values)

    if len(values) == 2:
        return gcd_euclidean_pair(values[0], values[1])

    accumulator = 0
    if values[0] != 0 or values[1] != 0:
        accumulator = _reduce_euclidean(values[0], values[1])

    for value in values[2:]:
        if value != 0:
            accumulator = _reduce_euclidean(accumulator, value)

    if accumulator == 0:
        raise GcdInvalidArgumentError("all numbers are 0")

    return accumulator


def gcd_euclidean(a: int, b: int, *rest) -> int:
    """
    GCD by the Euclidean algorithm, dispatching on arity.

    Accepted call shapes:
        gcd_euclidean(a, b)
        gcd_euclidean(a, b, c)
        gcd_euclidean(a, b, [c, d, ...])   # sequence of others
        gcd_euclidean(a, b, c, d, ...)

    Usage example:
        >>> gcd_euclidean(12, 18)
        6
        >>> gcd_euclidean(-12, 18, [30])
        6
    """
    kind, args = _dispatch(a, b, rest)
    if kind == "pair":
        return gcd_euclidean_pair(*args)
    if kind == "triple":
        return gcd_euclidean_triple(*args)
    return gcd_euclidean_many(*args)


# =============================================================================
# Binary (Stein) reduction
# =============================================================================

def _reduce_stein(a: int, b: int, legacy_unit_branch: bool) -> int:
    """
    Binary GCD of two integers without the modulo operator.

    **Mathematical**: On |a|, |b|:
      1. gcd(0, b) = b, gcd(a, 0) = a.
      2. gcd(a, 1) = gcd(1, b) = 1.
      3. Both even: gcd(a, b) = 2 * gcd(a/2, b/2).
      4. One even: halve it; 2 is not a common factor.
      5. Both odd: gcd(a, b) = gcd(|a - b| / 2, min(a, b)).
    Each step strictly reduces max(a, b).

    The recursive form is unrolled into a loop; ``shift`` counts the factors
    of two pulled out in step 3 and is applied to whatever the base case
    returns.

    With ``legacy_unit_branch`` step 2 returns the current ``a`` instead of 1,
    which is wrong whenever b reaches 1 while a > 1 (e.g. gcd(3, 2) -> 3).
    """
    a = abs(a)
    b = abs(b)
    shift = 0

    while True:
        if a == 0:
            return b << shift
        if b == 0:
            return a << shift
        if a == 1 or b == 1:
            return (a if legacy_unit_branch else 1) << shift

        a_even = (a & 1) == 0
        b_even = (b & 1) == 0

        if a_even and b_even:
            a >>= 1
            b >>= 1
            shift += 1
        elif a_even:
            a >>= 1
        elif b_even:
            b >>= 1
        elif a > b:
            a, b = (a - b) >> 1, b
        else:
            a, b = (b - a) >> 1, a


def gcd_stein_pair(a: int, b: int, *, legacy_unit_branch: bool = False) -> int:
    """
    GCD of two integers by Stein's binary algorithm.

    Args:
        a: First integer in (INT32_MIN, INT32_MAX].
        b: Second integer in (INT32_MIN, INT32_MAX].
        legacy_unit_branch: Reproduce the historical "operand is 1" branch.
                            Defaults to False (returns 1, mathematically correct).

    Returns:
        The non-negative GCD.

    Raises:
        GcdOutOfRangeError: If a or b is INT32_MIN or outside 32 bits.
        GcdInvalidArgumentError: If a and b are both 0.
    """
    values = _collect(a, b)
    validate_domain(values)
    validate_not_all_zero(values)
    return _reduce_stein(values[0], values[1], legacy_unit_branch)


def gcd_stein_triple(
    a: int, b: int, c: int, *, legacy_unit_branch: bool = False
) -> int:
    """
    GCD of three integers by Stein's binary algorithm.

    In legacy mode two orderings are reduced, stein(c, stein(a, b)) and
    stein(a, stein(c, b)), and the smaller wins. That masks most of the
    legacy unit-branch error. In the default mode both orderings always
    agree, so a single left fold is used.

    Raises:
        GcdOutOfRangeError: If any operand is INT32_MIN or outside 32 bits.
        GcdInvalidArgumentError: If a, b and c are all 0.
    """
    values = _collect(a, b, (c,))
    validate_domain(values)
    validate_not_all_zero(values)
    first, second, third = values

    if not legacy_unit_branch:
        return _reduce_stein(_reduce_stein(first, second, False), third, False)

    forward = _reduce_stein(third, _reduce_stein(first, second, True), True)
    crossed = _reduce_stein(first, _reduce_stein(third, second, True), True)
    return min(forward, crossed)


def gcd_stein_many(
    a: int, b: int, others: Sequence[int], *, legacy_unit_branch: bool = False
) -> int:
    """
    GCD of two or more integers by Stein's binary algorithm.

    Sequential left fold stein(...stein(stein(a, b), c)..., z). Both the
    domain and the all-zero condition are checked across every operand
    before the fold starts.

    Raises:
        GcdOutOfRangeError: If any operand is INT32_MIN or outside 32 bits.
        GcdInvalidArgumentError: If every operand is 0.
    """
    values = _collect(a, b, others)
    validate_domain(values)
    validate_not_all_zero(values)

    result = _reduce_stein(values[0], values[1], legacy_unit_branch)
    for value in values[2:]:
        result = _reduce_stein(result, value, legacy_unit_branch)
    return result


def gcd_stein(a: int, b: int, *rest, legacy_unit_branch: bool = False) -> int:
    """
    GCD by Stein's binary algorithm, dispatching on arity.

    Accepts the same call shapes as gcd_euclidean.

    Note: the default (legacy_unit_branch=False) differs from the historical
    behavior, which returned the first operand once either operand hit 1.

    Usage example:
        >>> gcd_stein(48, 18)
        6
    """
    kind, args = _dispatch(a, b, rest)
    if kind == "pair":
        return gcd_stein_pair(*args, legacy_unit_branch=legacy_unit_branch)
    if kind == "triple":
        return gcd_stein_triple(*args, legacy_unit_branch=legacy_unit_branch)
    return gcd_stein_many(*args, legacy_unit_branch=legacy_unit_branch)


def _dispatch(a, b, rest: tuple):
    """Map a call shape onto (overload, args)."""
    if not rest:
        return "pair", (a, b)
    if len(rest) == 1:
        (third,) = rest
        if isinstance(third, (str, bytes)):
            raise TypeError(f"GCD operands must be integers, got {type(third).__name__}")
        if isinstance(third, Iterable):
            others = list(third)
            if not others:
                return "pair", (a, b)
            return "many", (a, b, others)
        return "triple", (a, b, third)
    return "many", (a, b, list(rest))


# =============================================================================
# Timing wrapper
# =============================================================================

def timed(func: Callable[..., int], clock: Optional[MonotonicClock] = None) -> Callable[..., TimedGcd]:
    """
    Wrap a GCD function so it also reports its elapsed duration.

    **Conceptual**: Purely observational. The wrapped function receives the
    same arguments and its exceptions propagate unchanged; the only extra
    work is two reads of a monotonic clock around the call.

    Args:
        func: Any GCD function in this module (or compatible callable).
        clock: Monotonic clock to read. Defaults to the real high-resolution clock.

    Returns:
        Callable with func's signature returning TimedGcd(value, elapsed).

    Usage example:
        >>> value, elapsed = timed(gcd_euclidean)(12, 18)
        >>> value
        6
    """
    active_clock = clock if clock is not None else get_real_clock()

    @wraps(func)
    def wrapper(*args, **kwargs) -> TimedGcd:
        started = active_clock.now_ns()
        value = func(*args, **kwargs)
        elapsed_ns = max(active_clock.now_ns() - started, 0)
        logger.debug(
            "%s(%d args) = %d in %d ns",
            func.__name__, len(args), value, elapsed_ns,
            extra={"method": func.__name__, "arity": len(args), "elapsed_ns": elapsed_ns},
        )
        return TimedGcd(value=value, elapsed=timedelta(microseconds=elapsed_ns / 1000))

    return wrapper


gcd_euclidean_timed = timed(gcd_euclidean)
gcd_stein_timed = timed(gcd_stein)
